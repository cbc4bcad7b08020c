from __future__ import annotations

from typing import Any, Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body, optional_int
from ..common.validators import require_positive_int
from ..core.exceptions import ValidationError
from ..container import Container
from .model import ScheduleUpdate
from .recurrence import RecurrenceRule


def _parse_update(item: Any, *, schedule_id: Optional[int] = None) -> ScheduleUpdate:
    if not isinstance(item, dict):
        raise ValidationError("Each update must be an object")

    if schedule_id is None:
        schedule_id = require_positive_int(item.get("id", item.get("scheduleId")), "Schedule ID")

    work_date = item.get("date")
    return ScheduleUpdate(
        schedule_id=int(schedule_id),
        employee_id=optional_int(item.get("employeeId"), "Employee ID"),
        work_date=parse_iso_date(work_date) if work_date else None,
        start_time=item.get("startTime") or None,
        end_time=item.get("endTime") or None,
        shift_type=item.get("shiftType"),
        notes=item.get("notes"),
    )


def register(app: Flask, container: Container) -> None:
    svc = container.schedule_service

    @app.route("/api/schedules", methods=["GET"], endpoint="list_schedules")
    def list_schedules():
        start_s = request.args.get("startDate")
        end_s = request.args.get("endDate")
        schedules = svc.list_range(
            start=parse_iso_date(start_s) if start_s else None,
            end=parse_iso_date(end_s) if end_s else None,
            employee_id=optional_int(request.args.get("employeeId"), "Employee ID"),
            department=request.args.get("department") or None,
        )
        return jsonify([sc.to_dict() for sc in schedules])

    @app.route("/api/schedules/<int:schedule_id>", methods=["GET"], endpoint="get_schedule")
    def get_schedule(schedule_id: int):
        return jsonify(svc.get(schedule_id).to_dict())

    @app.route("/api/schedules/employee/<int:employee_id>", methods=["GET"], endpoint="employee_schedules")
    def employee_schedules(employee_id: int):
        return jsonify([sc.to_dict() for sc in svc.list_for_employee(employee_id)])

    @app.route("/api/schedules", methods=["POST"], endpoint="create_schedule")
    def create_schedule():
        body = json_body()
        count = svc.create(
            employee_id=body.get("employeeId"),
            work_date=body.get("date") or "",
            start_time=body.get("startTime"),
            end_time=body.get("endTime"),
            shift_type=body.get("shiftType"),
            notes=body.get("notes"),
            repeat=RecurrenceRule.from_payload(body.get("repeat")),
        )
        return jsonify({"message": f"Successfully created {count} schedule(s)", "count": count}), 201

    @app.route("/api/schedules/check-conflicts", methods=["POST"], endpoint="check_schedule_conflicts")
    def check_schedule_conflicts():
        body = json_body()
        conflicts = svc.check_conflicts(
            employee_id=body.get("employeeId"),
            work_date=body.get("date") or "",
            start_time=body.get("startTime"),
            end_time=body.get("endTime"),
            exclude_id=optional_int(body.get("excludeId"), "Exclude ID"),
        )
        return jsonify({"hasConflicts": bool(conflicts), "conflicts": [c.to_dict() for c in conflicts]})

    @app.route("/api/schedules/preview-dates", methods=["POST"], endpoint="preview_schedule_dates")
    def preview_schedule_dates():
        body = json_body()
        rule = RecurrenceRule.from_payload(body.get("repeat"))
        if rule is None:
            raise ValidationError("repeat is required")
        dates = svc.preview_dates(start_date=body.get("date") or "", rule=rule)
        return jsonify({"dates": dates, "count": len(dates)})

    @app.route("/api/schedules/bulk-update", methods=["PUT"], endpoint="bulk_update_schedules")
    def bulk_update_schedules():
        updates = json_body().get("updates")
        if not isinstance(updates, list) or not updates:
            raise ValidationError("No updates provided")

        updated = svc.bulk_update([_parse_update(item) for item in updates])
        return jsonify(
            {
                "message": f"Successfully updated {len(updated)} schedules",
                "schedules": [sc.to_dict() for sc in updated],
            }
        )

    @app.route("/api/schedules/<int:schedule_id>", methods=["PUT"], endpoint="update_schedule")
    def update_schedule(schedule_id: int):
        updated = svc.update(_parse_update(json_body(), schedule_id=schedule_id))
        return jsonify(updated.to_dict())

    @app.route("/api/schedules/<int:schedule_id>", methods=["DELETE"], endpoint="delete_schedule")
    def delete_schedule(schedule_id: int):
        svc.delete(schedule_id)
        return jsonify({"message": "Schedule deleted successfully"})
