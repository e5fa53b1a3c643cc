from __future__ import annotations

from flask import Flask, request

from ..common.validators import require_choice, to_int
from ..common.web import api_errors, json_ok, login_required, request_payload, roles_required
from ..core.enums import LeaveStatus, Role
from ..container import Container
from .model import LeaveRecord


def register(app: Flask, container: Container) -> None:
    users = container.user_store
    leave = container.leave_service

    @app.route("/api/leave", methods=["GET"], endpoint="leave_list")
    @login_required(users)
    @api_errors
    def leave_list():
        status = request.args.get("status")
        rows = leave.list_records(
            current=container.auth_service.require_user(),
            name=request.args.get("q", ""),
            leave_type=request.args.get("type", ""),
            status=require_choice(status, LeaveStatus, "สถานะ") if status else None,
        )
        return json_ok([r.to_remote() for r in rows])

    @app.route("/api/leave", methods=["POST"], endpoint="leave_save")
    @login_required(users)
    @api_errors
    def leave_save():
        data = request_payload()
        record = leave.save(
            current=container.auth_service.require_user(),
            record=LeaveRecord.from_remote(data),
            is_new=not to_int(data.get("id")),
        )
        return json_ok(record.to_remote(), message="บันทึกใบลาเรียบร้อย")

    @app.route("/api/leave/pending", methods=["GET"], endpoint="leave_pending")
    @login_required(users)
    @api_errors
    def leave_pending():
        rows = leave.pending_approvals(current=container.auth_service.require_user())
        return json_ok([r.to_remote() for r in rows])

    @app.route("/api/leave/<int:record_id>/decision", methods=["POST"], endpoint="leave_decide")
    @login_required(users)
    @api_errors
    def leave_decide(record_id: int):
        data = request_payload()
        record = leave.decide(
            current=container.auth_service.require_user(),
            record_id=record_id,
            status=require_choice(data.get("status"), LeaveStatus, "สถานะ"),
            comment=str(data.get("comment") or ""),
        )
        return json_ok(record.to_remote(), message="อัปเดตสถานะเรียบร้อย")

    @app.route("/api/leave/delete", methods=["POST"], endpoint="leave_delete")
    @login_required(users)
    @api_errors
    def leave_delete():
        leave.delete(current=container.auth_service.require_user(), ids=request_payload().get("ids") or [])
        return json_ok(message="ลบข้อมูลเรียบร้อย")

    @app.route("/api/leave/stats", methods=["GET"], endpoint="leave_stats")
    @login_required(users)
    @api_errors
    def leave_stats():
        return json_ok(leave.stats(current=container.auth_service.require_user()))

    @app.route("/api/leave/types", methods=["GET"], endpoint="leave_types")
    @login_required(users)
    @api_errors
    def leave_types():
        return json_ok(leave.leave_types())

    @app.route("/api/leave/types", methods=["POST"], endpoint="leave_type_add")
    @roles_required(users, Role.ADMIN)
    @api_errors
    def leave_type_add():
        name = str(request_payload().get("name") or "")
        types = leave.add_leave_type(current=container.auth_service.require_user(), name=name)
        return json_ok(types, message="เพิ่มประเภทการลาเรียบร้อย")

    @app.route("/api/leave/types/delete", methods=["POST"], endpoint="leave_type_remove")
    @roles_required(users, Role.ADMIN)
    @api_errors
    def leave_type_remove():
        name = str(request_payload().get("name") or "")
        types = leave.remove_leave_type(current=container.auth_service.require_user(), name=name)
        return json_ok(types, message="ลบประเภทการลาเรียบร้อย")
