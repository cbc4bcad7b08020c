from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, optional_json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.leave_service

    @app.route("/api/leaves", methods=["GET"], endpoint="list_leaves")
    def list_leaves():
        return jsonify({"leaves": [lv.to_dict() for lv in svc.list_all()]})

    @app.route("/api/leaves/pending", methods=["GET"], endpoint="pending_leaves")
    def pending_leaves():
        return jsonify([lv.to_dict() for lv in svc.list_pending()])

    @app.route("/api/leaves/employee/<int:employee_id>", methods=["GET"], endpoint="employee_leaves")
    def employee_leaves(employee_id: int):
        return jsonify({"leaves": [lv.to_dict() for lv in svc.list_for_employee(employee_id)]})

    @app.route("/api/leaves/<int:leave_id>", methods=["GET"], endpoint="get_leave")
    def get_leave(leave_id: int):
        return jsonify({"leave": svc.get(leave_id).to_dict()})

    @app.route("/api/leaves", methods=["POST"], endpoint="create_leave")
    def create_leave():
        body = json_body()
        leave = svc.create(
            employee_id=body.get("employeeId"),
            start_date=body.get("startDate") or "",
            end_date=body.get("endDate") or "",
            leave_type=body.get("type"),
            reason=body.get("reason"),
        )
        return jsonify({"message": "Leave request created successfully", "leave": leave.to_dict()}), 201

    @app.route("/api/leaves/<int:leave_id>", methods=["PUT"], endpoint="update_leave")
    def update_leave(leave_id: int):
        body = json_body()
        leave = svc.update(
            leave_id,
            employee_id=body.get("employeeId"),
            start_date=body.get("startDate"),
            end_date=body.get("endDate"),
            leave_type=body.get("type"),
            reason=body.get("reason"),
            status=body.get("status"),
        )
        return jsonify({"message": "Leave request updated successfully", "leave": leave.to_dict()})

    @app.route("/api/leaves/<int:leave_id>", methods=["DELETE"], endpoint="delete_leave")
    def delete_leave(leave_id: int):
        svc.delete(leave_id)
        return jsonify({"message": "Leave request deleted successfully"})

    @app.route("/api/leaves/<int:leave_id>/approve", methods=["PUT"], endpoint="approve_leave")
    def approve_leave(leave_id: int):
        body = optional_json_body()
        leave = svc.approve(leave_id, comment=body.get("comment"))
        return jsonify({"message": "Leave request approved", "leave": leave.to_dict()})

    @app.route("/api/leaves/<int:leave_id>/reject", methods=["PUT"], endpoint="reject_leave")
    def reject_leave(leave_id: int):
        body = optional_json_body()
        leave = svc.reject(leave_id, comment=body.get("comment"))
        return jsonify({"message": "Leave request rejected", "leave": leave.to_dict()})
