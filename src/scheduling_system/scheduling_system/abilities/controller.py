from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.ability_service

    @app.route("/api/abilities/<int:employee_id>", methods=["GET"], endpoint="get_ability")
    def get_ability(employee_id: int):
        employee, ability = svc.get(employee_id)
        return jsonify({**ability.to_dict(), "employee": employee.to_dict()})

    @app.route("/api/abilities/<int:employee_id>", methods=["PUT"], endpoint="update_ability")
    def update_ability(employee_id: int):
        body = json_body()
        ability = svc.update(
            employee_id,
            experience=body.get("experience"),
            work_skill=body.get("workSkill"),
            team_chemistry=body.get("teamChemistry"),
            customer_service=body.get("customerService"),
            flexibility=body.get("flexibility"),
        )
        return jsonify({"message": "Employee ability updated successfully", "ability": ability.to_dict()})
