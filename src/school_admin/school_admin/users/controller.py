from __future__ import annotations

from dataclasses import replace

from flask import Flask

from ..common.ids import new_record_id
from ..common.normalize import normalize_array
from ..common.validators import require_choice, to_int
from ..common.web import api_errors, json_ok, login_required, request_payload, roles_required, uploaded_files
from ..core.enums import PersonnelStatus, Role
from ..core.exceptions import ValidationError
from ..container import Container
from .model import Personnel


def _personnel_from_payload(data: dict, *, existing: Personnel | None = None) -> Personnel:
    merged = existing.to_remote() if existing else {}
    merged.update(data)
    person = Personnel.from_remote(merged)
    # Kept remote images first, new uploads after them.
    images = tuple(normalize_array(data.get("profileImage", merged.get("profileImage")))) + tuple(
        uploaded_files("profileImage")
    )
    return replace(person, profile_image=images)


def register(app: Flask, container: Container) -> None:
    users = container.user_store

    @app.route("/api/login", methods=["POST"], endpoint="login")
    @api_errors
    def login():
        data = request_payload()
        person = container.auth_service.login(
            str(data.get("idCard", "")),
            str(data.get("password", "")),
            remember=bool(data.get("rememberMe")),
        )
        return json_ok(person.to_ui(), message="เข้าสู่ระบบสำเร็จ")

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        container.auth_service.logout()
        return json_ok(message="ออกจากระบบแล้ว")

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required(users)
    @api_errors
    def me():
        return json_ok(container.auth_service.require_user().to_ui())

    @app.route("/api/register/otp", methods=["POST"], endpoint="register_otp")
    @api_errors
    def register_otp():
        data = request_payload()
        container.registration_service.request_otp(id_card=str(data.get("idCard", "")), email=str(data.get("email", "")))
        return json_ok(message="ส่งรหัสยืนยันไปยังอีเมลแล้ว")

    @app.route("/api/register/verify", methods=["POST"], endpoint="register_verify")
    @api_errors
    def register_verify():
        data = request_payload()
        container.registration_service.verify_code(email=str(data.get("email", "")), code=str(data.get("code", "")))
        return json_ok(message="ยืนยันอีเมลสำเร็จ")

    @app.route("/api/register", methods=["POST"], endpoint="register_personnel")
    @api_errors
    def register_personnel():
        data = request_payload()
        person = container.registration_service.register(
            title=str(data.get("personnelTitle", "")),
            title_other=str(data.get("personnelTitleOther", "")),
            name=str(data.get("personnelName", "")),
            position=str(data.get("position", "")),
            id_card=str(data.get("idCard", "")),
            email=str(data.get("email", "")),
            phone=str(data.get("phone", "")),
            password=str(data.get("password", "")),
            dob=str(data.get("dob", "")),
            profile_image=uploaded_files("profileImage"),
        )
        return json_ok(
            person.to_ui(),
            message="ลงทะเบียนสำเร็จ! กรุณารอการอนุมัติจากผู้ดูแลระบบก่อนเข้าใช้งาน",
            status=201,
        )

    @app.route("/api/personnel", methods=["GET"], endpoint="personnel_list")
    @login_required(users)
    @api_errors
    def personnel_list():
        return json_ok([p.to_ui() for p in container.personnel_service.list_all()])

    @app.route("/api/personnel", methods=["POST"], endpoint="personnel_save")
    @login_required(users)
    @api_errors
    def personnel_save():
        current = container.auth_service.require_user()
        data = request_payload()
        is_new = not data.get("id")
        existing = None if is_new else container.personnel_service.get(to_int(data["id"]))
        if is_new:
            data["id"] = new_record_id()
        person = _personnel_from_payload(data, existing=existing)
        saved = container.personnel_service.save(current=current, person=person, is_new=is_new)
        return json_ok(saved.to_ui(), message="บันทึกข้อมูลบุคลากรเรียบร้อย")

    @app.route("/api/personnel/<int:personnel_id>/status", methods=["POST"], endpoint="personnel_status")
    @roles_required(users, Role.ADMIN)
    @api_errors
    def personnel_status(personnel_id: int):
        data = request_payload()
        status = require_choice(data.get("status"), PersonnelStatus, "สถานะ")
        saved = container.personnel_service.set_status(
            current=container.auth_service.require_user(),
            personnel_id=personnel_id,
            status=status,
        )
        return json_ok(saved.to_ui(), message="อัปเดตสถานะเรียบร้อย")

    @app.route("/api/personnel/delete", methods=["POST"], endpoint="personnel_delete")
    @roles_required(users, Role.ADMIN)
    @api_errors
    def personnel_delete():
        ids = request_payload().get("ids") or []
        if not isinstance(ids, list):
            raise ValidationError("รูปแบบข้อมูลไม่ถูกต้อง")
        container.personnel_service.delete(current=container.auth_service.require_user(), ids=ids)
        return json_ok(message="ลบข้อมูลเรียบร้อย")
