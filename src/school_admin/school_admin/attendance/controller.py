from __future__ import annotations

from flask import Flask, request

from ..common.dates import today_display
from ..common.validators import require_choice, to_float, to_int
from ..common.web import api_errors, json_ok, login_required, request_payload
from ..core.enums import AttendanceStatus, DressCode, DutyStatus, DutyType, TimePeriod
from ..core.exceptions import ValidationError
from ..container import Container
from ..reports.exporters import csv_response
from .model import PersonnelAttendance, StudentAttendance

DUTY_CSV_COLUMNS = (
    ("date", "วันที่"),
    ("time", "เวลา"),
    ("personnelName", "ชื่อ-นามสกุล"),
    ("typeLabel", "ประเภท"),
    ("latitude", "พิกัด Latitude"),
    ("longitude", "พิกัด Longitude"),
    ("distance", "ระยะห่าง (ม.)"),
    ("statusLabel", "สถานะพิกัด"),
)


def _slot(data: dict) -> tuple[str, TimePeriod]:
    date = str(data.get("date") or today_display())
    period = require_choice(data.get("period") or TimePeriod.MORNING.value, TimePeriod, "ช่วงเวลา")
    return date, period


def _rows(data: dict) -> list:
    rows = data.get("records") or []
    if not isinstance(rows, list):
        raise ValidationError("รูปแบบข้อมูลไม่ถูกต้อง")
    return [r for r in rows if isinstance(r, dict)]


def _period_arg():
    value = request.args.get("period")
    return require_choice(value, TimePeriod, "ช่วงเวลา") if value else None


def register(app: Flask, container: Container) -> None:
    users = container.user_store

    @app.route("/api/attendance/students", methods=["GET"], endpoint="student_attendance_list")
    @login_required(users)
    @api_errors
    def student_attendance_list():
        rows = container.attendance_service.list_students(date=request.args.get("date"), period=_period_arg())
        return json_ok([r.to_remote() for r in rows])

    @app.route("/api/attendance/students", methods=["POST"], endpoint="student_attendance_save")
    @login_required(users)
    @api_errors
    def student_attendance_save():
        data = request_payload()
        date, period = _slot(data)
        records = [
            StudentAttendance.create(
                date=date,
                period=period,
                student_id=to_int(r.get("studentId")),
                status=require_choice(r.get("status"), AttendanceStatus, "สถานะ"),
                note=str(r.get("note") or ""),
            )
            for r in _rows(data)
        ]
        merged = container.attendance_service.save_student_attendance(records)
        saved = [r.to_remote() for r in merged if r.date == date and r.period == period]
        return json_ok(saved, message="บันทึกการเช็คชื่อนักเรียนเรียบร้อย")

    @app.route("/api/attendance/personnel", methods=["GET"], endpoint="personnel_attendance_list")
    @login_required(users)
    @api_errors
    def personnel_attendance_list():
        rows = container.attendance_service.list_personnel(date=request.args.get("date"), period=_period_arg())
        return json_ok([r.to_remote() for r in rows])

    @app.route("/api/attendance/personnel", methods=["POST"], endpoint="personnel_attendance_save")
    @login_required(users)
    @api_errors
    def personnel_attendance_save():
        data = request_payload()
        date, period = _slot(data)
        records = [
            PersonnelAttendance.create(
                date=date,
                period=period,
                personnel_id=to_int(r.get("personnelId")),
                status=require_choice(r.get("status"), AttendanceStatus, "สถานะ"),
                dress_code=require_choice(r.get("dressCode") or DressCode.TIDY.value, DressCode, "การแต่งกาย"),
                note=str(r.get("note") or ""),
            )
            for r in _rows(data)
        ]
        merged = container.attendance_service.save_personnel_attendance(records)
        saved = [r.to_remote() for r in merged if r.date == date and r.period == period]
        return json_ok(saved, message="บันทึกการเช็คชื่อบุคลากรเรียบร้อย")

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    @login_required(users)
    @api_errors
    def attendance_summary():
        date = request.args.get("date") or today_display()
        svc = container.attendance_service
        rows = svc.list_personnel() if request.args.get("kind") == "personnel" else svc.list_students()
        summary = svc.daily_summary(rows, date=date)
        return json_ok(
            [
                {
                    "period": s.period.value,
                    "total": s.total,
                    "byStatus": s.by_status,
                    "tidy": s.tidy,
                    "untidy": s.untidy,
                }
                for s in summary
            ]
        )

    @app.route("/api/duty", methods=["GET"], endpoint="duty_list")
    @login_required(users)
    @api_errors
    def duty_list():
        rows = container.duty_service.list_records(name=request.args.get("name", ""))
        return json_ok([r.to_remote() for r in rows])

    @app.route("/api/duty/check-in", methods=["POST"], endpoint="duty_check_in")
    @login_required(users)
    @api_errors
    def duty_check_in():
        data = request_payload()
        if data.get("latitude") in (None, "") or data.get("longitude") in (None, ""):
            raise ValidationError("กรุณายืนยันพิกัด GPS ก่อนบันทึก")
        record = container.duty_service.check_in(
            current=container.auth_service.require_user(),
            duty_type=require_choice(data.get("type") or DutyType.CHECK_IN.value, DutyType, "ประเภท"),
            latitude=to_float(data.get("latitude")),
            longitude=to_float(data.get("longitude")),
            image=str(data.get("image") or ""),
            confirmed=bool(data.get("confirmed")),
        )
        return json_ok(record.to_remote(), message="บันทึกเวลาปฏิบัติหน้าที่สำเร็จ", status=201)

    @app.route("/api/duty/export.csv", methods=["GET"], endpoint="duty_export_csv")
    @login_required(users)
    @api_errors
    def duty_export_csv():
        rows = []
        for r in container.duty_service.list_records(name=request.args.get("name", "")):
            row = r.to_remote()
            row["typeLabel"] = "เริ่มงาน" if r.duty_type == DutyType.CHECK_IN else "เลิกงาน"
            row["statusLabel"] = "ในระยะ" if r.status == DutyStatus.WITHIN_RANGE else "นอกระยะ"
            rows.append(row)
        filename = f"ประวัติการลงเวลา_{today_display().replace('/', '-')}.csv"
        return csv_response(filename, DUTY_CSV_COLUMNS, rows)
