from __future__ import annotations

from flask import Flask, request

from ..common.normalize import normalize_array
from ..common.validators import to_int
from ..common.web import api_errors, json_ok, login_required, request_payload, roles_required, uploaded_files
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container
from .model import DormitoryReport


def register(app: Flask, container: Container) -> None:
    users = container.user_store
    dormitory = container.dormitory_service

    @app.route("/api/dormitory/reports", methods=["GET"], endpoint="dormitory_reports")
    @login_required(users)
    @api_errors
    def dormitory_reports():
        rows = dormitory.list_reports(date=request.args.get("date"), dormitory=request.args.get("dormitory"))
        return json_ok([r.to_ui() for r in rows])

    @app.route("/api/dormitory/reports", methods=["POST"], endpoint="dormitory_report_save")
    @login_required(users)
    @api_errors
    def dormitory_report_save():
        data = request_payload()
        details = data.get("studentDetails")
        if details is not None and not isinstance(details, (list, str)):
            raise ValidationError("รูปแบบข้อมูลไม่ถูกต้อง")
        data["images"] = normalize_array(data.get("images")) + uploaded_files("images")
        report = dormitory.save(
            current=container.auth_service.require_user(),
            report=DormitoryReport.from_remote(data),
            is_new=not to_int(data.get("id")),
        )
        return json_ok(report.to_ui(), message="บันทึกรายงานเรียบร้อย")

    @app.route("/api/dormitory/reports/delete", methods=["POST"], endpoint="dormitory_report_delete")
    @roles_required(users, Role.ADMIN)
    @api_errors
    def dormitory_report_delete():
        ids = request_payload().get("ids") or []
        dormitory.delete(current=container.auth_service.require_user(), ids=ids)
        return json_ok(message="ลบข้อมูลเรียบร้อย")

    @app.route("/api/dormitory/summary", methods=["GET"], endpoint="dormitory_summary")
    @login_required(users)
    @api_errors
    def dormitory_summary():
        return json_ok(dormitory.daily_summary(date=request.args.get("date")).to_ui())
