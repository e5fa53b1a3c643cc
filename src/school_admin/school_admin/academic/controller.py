from __future__ import annotations

from flask import Flask, request

from ..common.normalize import normalize_array
from ..common.validators import require_choice
from ..common.web import api_errors, json_ok, login_required, request_payload, roles_required, uploaded_files
from ..core.enums import PlanStatus, Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    users = container.user_store

    @app.route("/api/academic/plans", methods=["GET"], endpoint="academic_plans")
    @roles_required(users, Role.PRO, Role.ADMIN)
    @api_errors
    def academic_plans():
        rows = container.academic_service.list_for_review(
            teacher=request.args.get("teacher", ""),
            subject=request.args.get("subject", ""),
        )
        return json_ok([p.to_ui() for p in rows])

    @app.route("/api/academic/plans/mine", methods=["GET"], endpoint="academic_my_plans")
    @login_required(users)
    @api_errors
    def academic_my_plans():
        rows = container.academic_service.list_mine(container.auth_service.require_user())
        return json_ok([p.to_ui() for p in rows])

    @app.route("/api/academic/stats", methods=["GET"], endpoint="academic_stats")
    @login_required(users)
    @api_errors
    def academic_stats():
        return json_ok(container.academic_service.stats())

    @app.route("/api/academic/plans", methods=["POST"], endpoint="academic_submit")
    @login_required(users)
    @api_errors
    def academic_submit():
        data = request_payload()
        plan = container.academic_service.submit(
            current=container.auth_service.require_user(),
            learning_area=str(data.get("learningArea", "")),
            subject_code=str(data.get("subjectCode", "")),
            subject_name=str(data.get("subjectName", "")),
            course_structure_file=normalize_array(data.get("courseStructureFile")) + uploaded_files("courseStructureFile"),
            lesson_plan_file=normalize_array(data.get("lessonPlanFile")) + uploaded_files("lessonPlanFile"),
            additional_link=str(data.get("additionalLink", "")),
        )
        return json_ok(plan.to_ui(), message="ส่งแผนการสอนเรียบร้อย", status=201)

    @app.route("/api/academic/plans/<int:plan_id>/status", methods=["POST"], endpoint="academic_status")
    @roles_required(users, Role.PRO, Role.ADMIN)
    @api_errors
    def academic_status(plan_id: int):
        data = request_payload()
        plan = container.academic_service.update_status(
            current=container.auth_service.require_user(),
            plan_id=plan_id,
            status=require_choice(data.get("status"), PlanStatus, "สถานะ"),
            comment=str(data.get("comment", "")),
        )
        return json_ok(plan.to_ui(), message="อัปเดตสถานะเรียบร้อย")
