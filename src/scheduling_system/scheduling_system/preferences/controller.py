from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.preference_service

    @app.route("/api/preferences/<int:employee_id>", methods=["GET"], endpoint="get_preferences")
    def get_preferences(employee_id: int):
        return jsonify(svc.get(employee_id).to_dict())

    @app.route("/api/preferences/<int:employee_id>", methods=["PUT"], endpoint="update_preferences")
    def update_preferences(employee_id: int):
        body = json_body()
        preference = svc.update(
            employee_id,
            prefer_days=body.get("preferDays"),
            avoid_days=body.get("avoidDays"),
            fixed_off_days=body.get("fixedOffDays"),
            preferred_start_time=body.get("preferredStartTime"),
            preferred_end_time=body.get("preferredEndTime"),
        )
        return jsonify({"message": "Preferences updated successfully", "preferences": preference.to_dict()})
