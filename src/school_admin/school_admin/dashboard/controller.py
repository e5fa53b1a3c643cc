from __future__ import annotations

from flask import Flask

from ..common.web import api_errors, json_ok, login_required, request_payload, roles_required, uploaded_files
from ..core.enums import Role
from ..container import Container
from .model import public_settings


def register(app: Flask, container: Container) -> None:
    users = container.user_store

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required(users)
    @api_errors
    def dashboard():
        return json_ok(container.dashboard_service.summary())

    @app.route("/api/dashboard/data", methods=["GET"], endpoint="dashboard_data")
    @login_required(users)
    @api_errors
    def dashboard_data():
        data = container.dashboard_service.load()
        return json_ok(
            {
                "personnel": [p.to_ui() for p in data.personnel],
                "students": [s.to_ui() for s in data.students],
                "studentAttendance": [r.to_remote() for r in data.student_attendance],
                "personnelAttendance": [r.to_remote() for r in data.personnel_attendance],
                "academicPlans": [p.to_ui() for p in data.academic_plans],
                "serviceRecords": [r.to_ui() for r in data.service_records],
                "mealPlans": [p.to_remote() for p in data.meal_plans],
                "ingredients": [i.to_remote() for i in data.ingredients],
                "dutyRecords": [r.to_remote() for r in data.duty_records],
                "procurements": [r.to_remote() for r in data.procurements],
                "settings": public_settings(data.settings),
            }
        )

    @app.route("/api/settings", methods=["GET"], endpoint="settings_get")
    @api_errors
    def settings_get():
        return json_ok(public_settings(container.settings_service.get()))

    @app.route("/api/settings", methods=["POST"], endpoint="settings_update")
    @roles_required(users, Role.ADMIN)
    @api_errors
    def settings_update():
        changes = request_payload()
        logo = uploaded_files("schoolLogo")
        if logo:
            changes["schoolLogo"] = logo[0]
        saved = container.settings_service.update(current=container.auth_service.require_user(), changes=changes)
        return json_ok(public_settings(saved), message="บันทึกการตั้งค่าเรียบร้อยแล้ว")
