from __future__ import annotations

from collections import OrderedDict
from typing import Iterable, Optional, Sequence

from ..common.ids import new_record_id
from ..common.validators import require_ids, require_non_empty
from ..core.constants import NUTRITION_STANDARDS
from ..core.enums import MealType, TargetGroup
from ..core.exceptions import ValidationError
from .model import Ingredient, MealItem, MealPlan, NutritionTotals, ShoppingLine
from .repository import IngredientRepository, MealPlanRepository


def daily_totals(plans: Sequence[MealPlan], ingredients: Sequence[Ingredient]) -> NutritionTotals:
    """Ingredient values times amount, summed over every item of every plan.

    Items whose ingredient no longer exists are skipped.
    """
    by_id = {i.ingredient_id: i for i in ingredients}
    cal = pro = fat = carbs = 0.0
    for plan in plans:
        for item in plan.items:
            ing = by_id.get(item.ingredient_id)
            if ing is None:
                continue
            cal += ing.calories * item.amount
            pro += ing.protein * item.amount
            fat += ing.fat * item.amount
            carbs += ing.carbs * item.amount
    return NutritionTotals(calories=cal, protein=pro, fat=fat, carbs=carbs)


def shopping_list(plans: Sequence[MealPlan], ingredients: Sequence[Ingredient]) -> list[ShoppingLine]:
    by_id = {i.ingredient_id: i for i in ingredients}
    amounts: "OrderedDict[int, float]" = OrderedDict()
    for plan in plans:
        for item in plan.items:
            amounts[item.ingredient_id] = amounts.get(item.ingredient_id, 0.0) + item.amount

    lines = []
    for ingredient_id, amount in amounts.items():
        ing = by_id.get(ingredient_id)
        if ing is None:
            continue
        lines.append(ShoppingLine(ingredient=ing, total_amount=amount, total_price=amount * (ing.price or 0)))
    return lines


class NutritionService:
    """Use case: ingredient catalogue, meal planning and daily nutrition checks."""

    def __init__(self, ingredients: IngredientRepository, meal_plans: MealPlanRepository):
        self._ingredients = ingredients
        self._meal_plans = meal_plans

    def list_ingredients(self) -> Sequence[Ingredient]:
        return sorted(self._ingredients.list_all(), key=lambda i: i.name)

    def save_ingredient(self, ingredient: Ingredient) -> Ingredient:
        require_non_empty(ingredient.name, "ชื่อวัตถุดิบ")
        require_non_empty(ingredient.unit, "หน่วย")
        for value in (ingredient.calories, ingredient.protein, ingredient.fat, ingredient.carbs, ingredient.price):
            if value < 0:
                raise ValidationError("ค่าโภชนาการและราคาต้องไม่ติดลบ")
        return self._ingredients.save(ingredient)

    def delete_ingredients(self, ids: Iterable[int]) -> None:
        ids = require_ids(ids)
        used = {item.ingredient_id for plan in self._meal_plans.list_all() for item in plan.items}
        if used.intersection(ids):
            raise ValidationError("มีวัตถุดิบที่ถูกใช้ในเมนูอาหารอยู่ ไม่สามารถลบได้")
        self._ingredients.delete(ids)

    def daily_plans(self, *, date: str, target_group: TargetGroup) -> list[MealPlan]:
        order = {m: i for i, m in enumerate(MealType)}
        rows = [p for p in self._meal_plans.list_all() if p.date == date and p.target_group == target_group]
        return sorted(rows, key=lambda p: order[p.meal_type])

    def save_meal_plan(
        self,
        *,
        date: str,
        target_group: TargetGroup,
        meal_type: MealType,
        menu_name: str,
        items: Sequence[MealItem],
        plan_id: Optional[int] = None,
    ) -> MealPlan:
        require_non_empty(date, "วันที่")
        items = tuple(i for i in items if i.ingredient_id and i.amount > 0)
        if not items:
            raise ValidationError("กรุณาเพิ่มวัตถุดิบอย่างน้อย 1 รายการ")
        known = {i.ingredient_id for i in self._ingredients.list_all()}
        if any(i.ingredient_id not in known for i in items):
            raise ValidationError("ไม่พบวัตถุดิบที่เลือก")
        plan = MealPlan(
            plan_id=plan_id or new_record_id(),
            date=date,
            target_group=target_group,
            meal_type=meal_type,
            menu_name=require_non_empty(menu_name, "ชื่อเมนู"),
            items=items,
        )
        return self._meal_plans.save(plan)

    def delete_meal_plans(self, ids: Iterable[int]) -> None:
        self._meal_plans.delete(require_ids(ids))

    def daily_report(self, *, date: str, target_group: TargetGroup) -> dict:
        plans = self.daily_plans(date=date, target_group=target_group)
        totals = daily_totals(plans, self._ingredients.list_all())
        standard = NUTRITION_STANDARDS[target_group.value]
        return {
            "date": date,
            "targetGroup": target_group.value,
            "totals": {
                "calories": totals.calories,
                "protein": totals.protein,
                "fat": totals.fat,
                "carbs": totals.carbs,
            },
            "standard": dict(standard),
            "caloriePercent": round(totals.calories / standard["calories"] * 100) if standard["calories"] else 0,
        }

    def shopping_list(self, *, date: str, target_group: TargetGroup) -> list[ShoppingLine]:
        plans = self.daily_plans(date=date, target_group=target_group)
        return shopping_list(plans, self._ingredients.list_all())
