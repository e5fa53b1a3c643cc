from __future__ import annotations

from typing import Iterable, Sequence

from ..sync.remote_base import RemoteRecordStore
from .model import Ingredient, MealPlan
from .repository import IngredientRepository, MealPlanRepository


class RemoteIngredientRepository(IngredientRepository):
    def __init__(self, store: RemoteRecordStore):
        self._store = store

    def list_all(self) -> Sequence[Ingredient]:
        return [Ingredient.from_remote(r) for r in self._store.fetch_sheet("ingredients")]

    def save(self, ingredient: Ingredient) -> Ingredient:
        saved = self._store.save("saveIngredient", ingredient.to_remote())
        return Ingredient.from_remote(saved) if saved else ingredient

    def delete(self, ids: Iterable[int]) -> None:
        self._store.delete("deleteIngredients", ids)


class RemoteMealPlanRepository(MealPlanRepository):
    def __init__(self, store: RemoteRecordStore):
        self._store = store

    def list_all(self) -> Sequence[MealPlan]:
        return [MealPlan.from_remote(r) for r in self._store.fetch_sheet("mealPlans")]

    def save(self, plan: MealPlan) -> MealPlan:
        saved = self._store.save("saveMealPlan", plan.to_remote())
        return MealPlan.from_remote(saved) if saved else plan

    def delete(self, ids: Iterable[int]) -> None:
        self._store.delete("deleteMealPlans", ids)
