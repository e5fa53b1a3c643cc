from __future__ import annotations

from flask import Flask, request

from ..common.dates import age_on, today_display
from ..common.ids import new_record_id
from ..common.validators import require_choice, to_float, to_int
from ..common.web import api_errors, json_ok, login_required, request_payload, roles_required
from ..core.constants import MALE_TITLES
from ..core.enums import ActivityLevel, Gender, MealType, Role, TargetGroup
from ..core.exceptions import ValidationError
from ..container import Container
from ..reports.exporters import doc_response
from .calculator import personal_needs
from .model import Ingredient, MealItem

SHOPPING_COLUMNS = (
    ("no", "ลำดับ"),
    ("name", "รายการ"),
    ("totalAmount", "จำนวน"),
    ("unit", "หน่วย"),
    ("price", "ราคา/หน่วย"),
    ("totalPrice", "รวมเงิน"),
)


def _group_and_date():
    group = require_choice(request.args.get("group") or TargetGroup.PRIMARY.value, TargetGroup, "กลุ่มเป้าหมาย")
    return request.args.get("date") or today_display(), group


def _ids(data: dict) -> list:
    ids = data.get("ids") or []
    if not isinstance(ids, list):
        raise ValidationError("รูปแบบข้อมูลไม่ถูกต้อง")
    return ids


def register(app: Flask, container: Container) -> None:
    users = container.user_store
    nutrition = container.nutrition_service

    @app.route("/api/nutrition/ingredients", methods=["GET"], endpoint="ingredients_list")
    @login_required(users)
    @api_errors
    def ingredients_list():
        return json_ok([i.to_remote() for i in nutrition.list_ingredients()])

    @app.route("/api/nutrition/ingredients", methods=["POST"], endpoint="ingredients_save")
    @roles_required(users, Role.PRO, Role.ADMIN)
    @api_errors
    def ingredients_save():
        data = request_payload()
        data["id"] = to_int(data.get("id")) or new_record_id()
        saved = nutrition.save_ingredient(Ingredient.from_remote(data))
        return json_ok(saved.to_remote(), message="บันทึกวัตถุดิบเรียบร้อย")

    @app.route("/api/nutrition/ingredients/delete", methods=["POST"], endpoint="ingredients_delete")
    @roles_required(users, Role.PRO, Role.ADMIN)
    @api_errors
    def ingredients_delete():
        nutrition.delete_ingredients(_ids(request_payload()))
        return json_ok(message="ลบข้อมูลเรียบร้อย")

    @app.route("/api/nutrition/meal-plans", methods=["GET"], endpoint="meal_plans_list")
    @login_required(users)
    @api_errors
    def meal_plans_list():
        date, group = _group_and_date()
        return json_ok([p.to_remote() for p in nutrition.daily_plans(date=date, target_group=group)])

    @app.route("/api/nutrition/meal-plans", methods=["POST"], endpoint="meal_plans_save")
    @roles_required(users, Role.PRO, Role.ADMIN)
    @api_errors
    def meal_plans_save():
        data = request_payload()
        raw_items = data.get("items") or []
        if not isinstance(raw_items, list):
            raise ValidationError("รูปแบบข้อมูลไม่ถูกต้อง")
        plan = nutrition.save_meal_plan(
            plan_id=to_int(data.get("id")) or None,
            date=str(data.get("date") or today_display()),
            target_group=require_choice(data.get("targetGroup"), TargetGroup, "กลุ่มเป้าหมาย"),
            meal_type=require_choice(data.get("mealType"), MealType, "มื้ออาหาร"),
            menu_name=str(data.get("menuName", "")),
            items=[
                MealItem(ingredient_id=to_int(i.get("ingredientId")), amount=to_float(i.get("amount")))
                for i in raw_items
                if isinstance(i, dict)
            ],
        )
        return json_ok(plan.to_remote(), message="บันทึกเมนูอาหารเรียบร้อย")

    @app.route("/api/nutrition/meal-plans/delete", methods=["POST"], endpoint="meal_plans_delete")
    @roles_required(users, Role.PRO, Role.ADMIN)
    @api_errors
    def meal_plans_delete():
        nutrition.delete_meal_plans(_ids(request_payload()))
        return json_ok(message="ลบข้อมูลเรียบร้อย")

    @app.route("/api/nutrition/daily", methods=["GET"], endpoint="nutrition_daily")
    @login_required(users)
    @api_errors
    def nutrition_daily():
        date, group = _group_and_date()
        return json_ok(nutrition.daily_report(date=date, target_group=group))

    @app.route("/api/nutrition/shopping-list", methods=["GET"], endpoint="shopping_list")
    @login_required(users)
    @api_errors
    def shopping_list():
        date, group = _group_and_date()
        lines = nutrition.shopping_list(date=date, target_group=group)
        return json_ok(
            {
                "items": [line.to_row() for line in lines],
                "grandTotal": sum(line.total_price for line in lines),
            }
        )

    @app.route("/api/nutrition/shopping-list.doc", methods=["GET"], endpoint="shopping_list_doc")
    @login_required(users)
    @api_errors
    def shopping_list_doc():
        date, group = _group_and_date()
        lines = nutrition.shopping_list(date=date, target_group=group)
        rows = [dict(line.to_row(), no=n) for n, line in enumerate(lines, start=1)]
        grand_total = sum(line.total_price for line in lines)
        return doc_response(
            f"shopping_list_{date.replace('/', '-')}.doc",
            f"รายการวัตถุดิบ (Shopping List) วันที่ {date}",
            SHOPPING_COLUMNS,
            rows,
            footer=f"รวมเป็นเงินทั้งสิ้น {grand_total:,.2f} บาท",
        )

    @app.route("/api/nutrition/students/<int:student_id>/needs", methods=["GET"], endpoint="student_needs")
    @login_required(users)
    @api_errors
    def student_needs(student_id: int):
        student = container.student_service.get(student_id)
        age = to_int(request.args.get("age")) or age_on(student.dob)
        gender = Gender.MALE if student.title in MALE_TITLES else Gender.FEMALE
        needs = personal_needs(
            weight=to_float(request.args.get("weight") or student.details.get("weight")),
            height=to_float(request.args.get("height") or student.details.get("height")),
            age=age,
            gender=gender,
            activity=require_choice(
                request.args.get("activity") or ActivityLevel.MODERATE.value, ActivityLevel, "ระดับกิจกรรม"
            ),
        )
        if needs is None:
            raise ValidationError("กรุณาระบุน้ำหนัก ส่วนสูง และอายุให้ครบถ้วน")
        return json_ok(
            {
                "bmr": needs.bmr,
                "tdee": needs.tdee,
                "bmi": needs.bmi,
                "bmiLabel": needs.bmi_label,
                "protein": needs.protein,
                "fat": needs.fat,
                "carbs": needs.carbs,
                "water": needs.water,
            }
        )
