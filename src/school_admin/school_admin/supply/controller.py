from __future__ import annotations

from flask import Flask

from ..common.validators import require_choice, to_int
from ..common.web import api_errors, json_ok, login_required, request_payload, roles_required
from ..core.enums import ProcurementStatus, Role
from ..core.exceptions import ValidationError
from ..container import Container
from ..reports.exporters import csv_response
from .model import ProcurementRecord

PROCUREMENT_CSV_COLUMNS = (
    ("docNumber", "เลขที่เอกสาร"),
    ("docDate", "วันที่"),
    ("subject", "เรื่อง"),
    ("requesterName", "ผู้ขอเบิก"),
    ("procurementType", "ประเภท"),
    ("totalPrice", "ยอดรวม (บาท)"),
    ("status", "สถานะ"),
    ("approverName", "ผู้อนุมัติ"),
)


def register(app: Flask, container: Container) -> None:
    users = container.user_store
    supply = container.procurement_service

    @app.route("/api/supply/procurements", methods=["GET"], endpoint="procurement_list")
    @login_required(users)
    @api_errors
    def procurement_list():
        return json_ok([r.to_remote() for r in supply.list_records()])

    @app.route("/api/supply/procurements", methods=["POST"], endpoint="procurement_save")
    @login_required(users)
    @api_errors
    def procurement_save():
        data = request_payload()
        if not isinstance(data.get("items") or [], list):
            raise ValidationError("รูปแบบข้อมูลไม่ถูกต้อง")
        is_new = not to_int(data.get("id"))
        record = supply.save(
            current=container.auth_service.require_user(),
            record=ProcurementRecord.from_remote(data),
            is_new=is_new,
        )
        return json_ok(record.to_remote(), message="บันทึกรายการเรียบร้อย")

    @app.route("/api/supply/procurements/<int:record_id>/decision", methods=["POST"], endpoint="procurement_decide")
    @roles_required(users, Role.ADMIN)
    @api_errors
    def procurement_decide(record_id: int):
        data = request_payload()
        record = supply.decide(
            current=container.auth_service.require_user(),
            record_id=record_id,
            status=require_choice(data.get("status"), ProcurementStatus, "สถานะ"),
        )
        return json_ok(record.to_remote(), message="อัปเดตสถานะเรียบร้อย")

    @app.route("/api/supply/procurements/delete", methods=["POST"], endpoint="procurement_delete")
    @roles_required(users, Role.ADMIN)
    @api_errors
    def procurement_delete():
        ids = request_payload().get("ids") or []
        if not isinstance(ids, list):
            raise ValidationError("รูปแบบข้อมูลไม่ถูกต้อง")
        supply.delete(current=container.auth_service.require_user(), ids=ids)
        return json_ok(message="ลบข้อมูลเรียบร้อย")

    @app.route("/api/supply/stats", methods=["GET"], endpoint="procurement_stats")
    @login_required(users)
    @api_errors
    def procurement_stats():
        return json_ok(supply.stats())

    @app.route("/api/supply/procurements.csv", methods=["GET"], endpoint="procurement_csv")
    @roles_required(users, Role.ADMIN)
    @api_errors
    def procurement_csv():
        rows = [r.to_remote() for r in supply.list_records()]
        return csv_response("procurements.csv", PROCUREMENT_CSV_COLUMNS, rows)
