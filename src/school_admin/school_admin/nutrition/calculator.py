"""Daily energy needs for one student (Harris-Benedict)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import ACTIVITY_MULTIPLIERS
from ..core.enums import ActivityLevel, Gender


@dataclass(frozen=True)
class PersonalNeeds:
    bmr: int
    tdee: int
    bmi: float
    protein: int
    fat: int
    carbs: int
    water: int

    @property
    def bmi_label(self) -> str:
        if self.bmi < 18.5:
            return "น้ำหนักน้อย"
        if self.bmi < 23:
            return "สมส่วน (ปกติ)"
        if self.bmi < 25:
            return "ท้วม"
        if self.bmi < 30:
            return "อ้วน"
        return "อ้วนมาก"


def personal_needs(
    *, weight: float, height: float, age: int, gender: Gender, activity: ActivityLevel = ActivityLevel.MODERATE
) -> Optional[PersonalNeeds]:
    """``None`` unless weight (kg), height (cm) and age are all positive."""
    if not weight or not height or not age or weight <= 0 or height <= 0 or age <= 0:
        return None

    if gender == Gender.MALE:
        bmr = 88.362 + 13.397 * weight + 4.799 * height - 5.677 * age
    else:
        bmr = 447.593 + 9.247 * weight + 3.098 * height - 4.330 * age
    tdee = bmr * ACTIVITY_MULTIPLIERS[ActivityLevel(activity).value]

    height_m = height / 100
    return PersonalNeeds(
        bmr=round(bmr),
        tdee=round(tdee),
        bmi=round(weight / (height_m * height_m), 1),
        protein=round(tdee * 0.15 / 4),
        fat=round(tdee * 0.30 / 9),
        carbs=round(tdee * 0.55 / 4),
        water=round(weight * 33),
    )
