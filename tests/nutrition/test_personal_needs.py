import pytest

from src.school_admin.school_admin.core.enums import ActivityLevel, Gender
from src.school_admin.school_admin.nutrition.calculator import personal_needs


def test_boy_moderate_activity():
    needs = personal_needs(weight=30, height=130, age=10, gender=Gender.MALE, activity=ActivityLevel.MODERATE)

    assert needs.bmr == 1057
    assert needs.tdee == 1639
    assert needs.bmi == pytest.approx(17.8)
    assert needs.bmi_label == "น้ำหนักน้อย"
    assert (needs.protein, needs.fat, needs.carbs) == (61, 55, 225)
    assert needs.water == 990


def test_girl_uses_female_formula():
    boy = personal_needs(weight=40, height=150, age=12, gender=Gender.MALE)
    girl = personal_needs(weight=40, height=150, age=12, gender=Gender.FEMALE)
    assert girl.bmr != boy.bmr
    assert girl.bmi == boy.bmi == pytest.approx(17.8)


@pytest.mark.parametrize("weight, height, age", [(0, 130, 10), (30, 0, 10), (30, 130, 0), (-1, 130, 10)])
def test_missing_measurements_give_none(weight, height, age):
    assert personal_needs(weight=weight, height=height, age=age, gender=Gender.MALE) is None
