import pytest

from src.school_admin.school_admin.common.validators import (
    normalize_time,
    require_choice,
    require_ids,
    require_non_empty,
    to_enum,
    to_float,
    to_int,
)
from src.school_admin.school_admin.core.enums import TimePeriod
from src.school_admin.school_admin.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("8:5", "08:05"),
        ("08.30", "08:30"),
        ("13:45:00", "13:45"),
        ("1899-12-30T07:15:00.000Z", "07:15"),
        ("25:00", None),
        ("noon", None),
        (None, None),
    ],
)
def test_normalize_time(raw, expected):
    assert normalize_time(raw) == expected


def test_require_non_empty_strips():
    assert require_non_empty("  x ", "ชื่อ") == "x"
    with pytest.raises(ValidationError):
        require_non_empty("   ", "ชื่อ")


def test_require_choice():
    assert require_choice("lunch", TimePeriod, "ช่วงเวลา") == TimePeriod.LUNCH
    with pytest.raises(ValidationError):
        require_choice("night", TimePeriod, "ช่วงเวลา")


def test_lenient_number_and_enum_reads():
    assert to_int("12.0") == 12
    assert to_int("abc", 7) == 7
    assert to_float("") == 0.0
    assert to_enum("bogus", TimePeriod, TimePeriod.MORNING) == TimePeriod.MORNING


def test_overflowing_numbers_fall_back_to_default():
    assert to_int("1e400") == 0
    assert to_int(float("inf"), 3) == 3
    assert to_float(10**400, 1.5) == 1.5


def test_require_ids_accepts_numeric_items():
    assert require_ids([3, "4", " 5 ", 6.0]) == [3, 4, 5, 6]


@pytest.mark.parametrize("raw", [["abc"], [1, "x"], [True], [None], "1,2", {"id": 1}, None])
def test_require_ids_rejects_malformed_items(raw):
    with pytest.raises(ValidationError, match="รูปแบบข้อมูลไม่ถูกต้อง"):
        require_ids(raw)


def test_require_ids_rejects_empty_selection():
    with pytest.raises(ValidationError, match="กรุณาเลือกรายการ"):
        require_ids([])
