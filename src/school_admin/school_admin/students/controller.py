from __future__ import annotations

from dataclasses import replace

from flask import Flask, request

from ..common.ids import new_record_id
from ..common.normalize import normalize_array
from ..common.validators import to_int
from ..common.web import api_errors, json_ok, login_required, request_payload, uploaded_files
from ..core.exceptions import ValidationError
from ..container import Container
from .model import IMAGE_FIELDS, Student


def _student_from_payload(data: dict, *, existing: Student | None = None) -> Student:
    merged = existing.to_remote() if existing else {}
    merged.update(data)
    student = Student.from_remote(merged)
    images = {
        name: tuple(normalize_array(merged.get(name))) + tuple(uploaded_files(name)) for name in IMAGE_FIELDS
    }
    return replace(student, images=images)


def register(app: Flask, container: Container) -> None:
    users = container.user_store

    @app.route("/api/students", methods=["GET"], endpoint="students_list")
    @login_required(users)
    @api_errors
    def students_list():
        rows = container.student_service.list_all(
            dormitory=request.args.get("dormitory"),
            student_class=request.args.get("class"),
        )
        return json_ok([s.to_ui() for s in rows])

    @app.route("/api/students", methods=["POST"], endpoint="students_save")
    @login_required(users)
    @api_errors
    def students_save():
        data = request_payload()
        is_new = not data.get("id")
        existing = None if is_new else container.student_service.get(to_int(data["id"]))
        if is_new:
            data["id"] = new_record_id()
        saved = container.student_service.save(student=_student_from_payload(data, existing=existing), is_new=is_new)
        return json_ok(saved.to_ui(), message="บันทึกข้อมูลนักเรียนเรียบร้อย")

    @app.route("/api/students/delete", methods=["POST"], endpoint="students_delete")
    @login_required(users)
    @api_errors
    def students_delete():
        ids = request_payload().get("ids") or []
        if not isinstance(ids, list):
            raise ValidationError("รูปแบบข้อมูลไม่ถูกต้อง")
        container.student_service.delete(current=container.auth_service.require_user(), ids=ids)
        return json_ok(message="ลบข้อมูลเรียบร้อย")
