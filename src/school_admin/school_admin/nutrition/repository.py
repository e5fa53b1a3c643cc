from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from .model import Ingredient, MealPlan


class IngredientRepository(Protocol):
    def list_all(self) -> Sequence[Ingredient]:
        raise NotImplementedError

    def save(self, ingredient: Ingredient) -> Ingredient:
        raise NotImplementedError

    def delete(self, ids: Iterable[int]) -> None:
        raise NotImplementedError


class MealPlanRepository(Protocol):
    def list_all(self) -> Sequence[MealPlan]:
        raise NotImplementedError

    def save(self, plan: MealPlan) -> MealPlan:
        raise NotImplementedError

    def delete(self, ids: Iterable[int]) -> None:
        raise NotImplementedError
