from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.normalize import normalize_array
from ..common.validators import to_int
from ..common.web import api_errors, json_ok, login_required, request_payload, uploaded_files
from ..core.constants import BUDDHIST_ERA_OFFSET
from ..core.exceptions import ValidationError
from ..container import Container
from ..reports.exporters import doc_response
from .model import ServiceStudent

STATS_COLUMNS = (
    ("no", "ลำดับ"),
    ("date", "วันที่"),
    ("time", "เวลา"),
    ("location", "สถานที่"),
    ("teacherName", "ครูผู้ดูแล"),
    ("studentCount", "จำนวนนักเรียน"),
)


def _month_args():
    today = date.today()
    month = to_int(request.args.get("month"), today.month)
    year = to_int(request.args.get("year"), today.year + BUDDHIST_ERA_OFFSET)
    return month, year, request.args.get("location", "")


def register(app: Flask, container: Container) -> None:
    users = container.user_store
    services = container.service_registration_service

    @app.route("/api/services", methods=["GET"], endpoint="service_records")
    @login_required(users)
    @api_errors
    def service_records():
        return json_ok([r.to_ui() for r in services.list_records(search=request.args.get("q", ""))])

    @app.route("/api/services", methods=["POST"], endpoint="service_save")
    @login_required(users)
    @api_errors
    def service_save():
        data = request_payload()
        students = data.get("students") or []
        if not isinstance(students, list):
            raise ValidationError("รูปแบบข้อมูลไม่ถูกต้อง")
        record = services.save(
            current=container.auth_service.require_user(),
            record_id=to_int(data.get("id")) or None,
            date=str(data.get("date") or ""),
            time=str(data.get("time") or ""),
            location=str(data.get("location", "")),
            purpose=str(data.get("purpose", "")),
            students=[ServiceStudent.from_remote(s) for s in students if isinstance(s, dict)],
            images=normalize_array(data.get("images")) + uploaded_files("images"),
        )
        return json_ok(record.to_ui(), message="บันทึกการใช้บริการเรียบร้อย")

    @app.route("/api/services/delete", methods=["POST"], endpoint="service_delete")
    @login_required(users)
    @api_errors
    def service_delete():
        ids = request_payload().get("ids") or []
        if not isinstance(ids, list):
            raise ValidationError("รูปแบบข้อมูลไม่ถูกต้อง")
        services.delete(current=container.auth_service.require_user(), ids=ids)
        return json_ok(message="ลบข้อมูลเรียบร้อย")

    @app.route("/api/services/stats", methods=["GET"], endpoint="service_stats")
    @login_required(users)
    @api_errors
    def service_stats():
        month, year, location = _month_args()
        stats = services.monthly_stats(month=month, year=year, location=location)
        return json_ok(
            {
                "month": stats.month,
                "year": stats.year,
                "totalRequests": stats.total_requests,
                "totalStudentsServed": stats.total_students,
                "dailyData": [{"day": str(d), "students": n} for d, n in enumerate(stats.daily_students, start=1)],
                "locationData": [{"name": name, "value": n} for name, n in stats.by_location],
                "popularLocation": stats.popular_location,
                "topLocations": [{"name": name, "value": n} for name, n in stats.top_locations],
            }
        )

    @app.route("/api/services/stats.doc", methods=["GET"], endpoint="service_stats_doc")
    @login_required(users)
    @api_errors
    def service_stats_doc():
        month, year, location = _month_args()
        stats = services.monthly_stats(month=month, year=year, location=location)
        rows = [
            {
                "no": n,
                "date": r.date,
                "time": f"{r.time} น.",
                "location": r.location,
                "teacherName": r.teacher_name,
                "studentCount": r.student_count,
            }
            for n, r in enumerate(stats.records, start=1)
        ]
        return doc_response(
            f"service_stats_{month}_{year}.doc",
            f"รายงานสถิติการใช้บริการแหล่งเรียนรู้ ประจำเดือน {month}/{year}",
            STATS_COLUMNS,
            rows,
            footer=f"จำนวนครั้งที่ใช้บริการ {stats.total_requests} ครั้ง จำนวนนักเรียนที่เข้าร่วม {stats.total_students} คน",
        )
