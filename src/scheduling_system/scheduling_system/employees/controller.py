from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    def list_employees():
        employees = svc.list_all(department=request.args.get("department"), search=request.args.get("search"))
        return jsonify([e.to_dict() for e in employees])

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="get_employee")
    def get_employee(employee_id: int):
        return jsonify(svc.get(employee_id).to_dict())

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    def create_employee():
        body = json_body()
        employee = svc.create(
            name=body.get("name"),
            email=body.get("email"),
            position=body.get("position"),
            department=body.get("department"),
            phone=body.get("phone"),
            address=body.get("address"),
        )
        return jsonify({"message": "Employee created successfully", "employee": employee.to_dict()}), 201

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="update_employee")
    def update_employee(employee_id: int):
        body = json_body()
        allowed = {k: body[k] for k in ("name", "email", "position", "department", "phone", "address") if k in body}
        employee = svc.update(employee_id, **allowed)
        return jsonify({"message": "Employee updated successfully", "employee": employee.to_dict()})

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="delete_employee")
    def delete_employee(employee_id: int):
        svc.delete(employee_id)
        return jsonify({"message": "Employee deleted successfully"})

    @app.route("/api/employees/<int:employee_id>/schedules", methods=["GET"], endpoint="get_employee_schedules")
    def get_employee_schedules(employee_id: int):
        employee = svc.get(employee_id)
        schedules = svc.schedules_for(employee_id)
        return jsonify({"employee": employee.to_dict(), "schedules": [sc.to_dict() for sc in schedules]})
