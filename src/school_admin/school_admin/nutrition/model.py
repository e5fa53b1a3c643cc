from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..common.normalize import normalize_array
from ..common.validators import to_enum, to_float, to_int
from ..core.enums import MealType, TargetGroup


@dataclass(frozen=True)
class Ingredient:
    """วัตถุดิบ; nutrition values are per one unit."""

    ingredient_id: int
    name: str
    unit: str
    calories: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    carbs: float = 0.0
    price: float = 0.0

    @classmethod
    def from_remote(cls, row: Mapping[str, Any]) -> "Ingredient":
        return cls(
            ingredient_id=to_int(row.get("id")),
            name=str(row.get("name") or ""),
            unit=str(row.get("unit") or ""),
            calories=to_float(row.get("calories")),
            protein=to_float(row.get("protein")),
            fat=to_float(row.get("fat")),
            carbs=to_float(row.get("carbs")),
            price=to_float(row.get("price")),
        )

    def to_remote(self) -> dict:
        return {
            "id": self.ingredient_id,
            "name": self.name,
            "unit": self.unit,
            "calories": self.calories,
            "protein": self.protein,
            "fat": self.fat,
            "carbs": self.carbs,
            "price": self.price,
        }


@dataclass(frozen=True)
class MealItem:
    ingredient_id: int
    amount: float


@dataclass(frozen=True)
class MealPlan:
    plan_id: int
    date: str
    target_group: TargetGroup
    meal_type: MealType
    menu_name: str
    items: tuple[MealItem, ...] = ()

    @classmethod
    def from_remote(cls, row: Mapping[str, Any]) -> "MealPlan":
        items = tuple(
            MealItem(ingredient_id=to_int(i.get("ingredientId")), amount=to_float(i.get("amount")))
            for i in normalize_array(row.get("items"))
            if isinstance(i, dict)
        )
        return cls(
            plan_id=to_int(row.get("id")),
            date=str(row.get("date") or ""),
            target_group=to_enum(row.get("targetGroup"), TargetGroup, TargetGroup.PRIMARY),
            meal_type=to_enum(row.get("mealType"), MealType, MealType.LUNCH),
            menu_name=str(row.get("menuName") or ""),
            items=items,
        )

    def to_remote(self) -> dict:
        return {
            "id": self.plan_id,
            "date": self.date,
            "targetGroup": self.target_group.value,
            "mealType": self.meal_type.value,
            "menuName": self.menu_name,
            "items": [{"ingredientId": i.ingredient_id, "amount": i.amount} for i in self.items],
        }


@dataclass(frozen=True)
class NutritionTotals:
    calories: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    carbs: float = 0.0


@dataclass(frozen=True)
class ShoppingLine:
    ingredient: Ingredient
    total_amount: float
    total_price: float

    def to_row(self) -> dict:
        return {
            "name": self.ingredient.name,
            "unit": self.ingredient.unit,
            "price": self.ingredient.price,
            "totalAmount": self.total_amount,
            "totalPrice": self.total_price,
        }
