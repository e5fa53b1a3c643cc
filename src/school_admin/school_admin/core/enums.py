from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """บทบาทผู้ใช้ ใช้สำหรับกำหนดสิทธิ์"""

    USER = "user"
    PRO = "pro"
    ADMIN = "admin"


class PersonnelStatus(str, Enum):
    """Approval state of a personnel account."""

    PENDING = "pending"
    APPROVED = "approved"
    BLOCKED = "blocked"


class ResponseStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class Era(str, Enum):
    GREGORIAN = "gregorian"
    BUDDHIST = "buddhist"


class TimePeriod(str, Enum):
    MORNING = "morning"
    LUNCH = "lunch"
    EVENING = "evening"


class AttendanceStatus(str, Enum):
    """Roll-call status; ACTIVITY is mostly used for personnel."""

    PRESENT = "present"
    SICK = "sick"
    LEAVE = "leave"
    ABSENT = "absent"
    ACTIVITY = "activity"


class DressCode(str, Enum):
    TIDY = "tidy"
    UNTIDY = "untidy"


class DutyType(str, Enum):
    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"


class DutyStatus(str, Enum):
    WITHIN_RANGE = "within_range"
    OUT_OF_RANGE = "out_of_range"


class PlanStatus(str, Enum):
    """สถานะการอนุมัติแผนการสอน"""

    PENDING = "pending"
    APPROVED = "approved"
    NEEDS_EDIT = "needs_edit"


class ProcurementStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TargetGroup(str, Enum):
    KINDERGARTEN = "kindergarten"
    PRIMARY = "primary"
    SECONDARY = "secondary"


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class ActivityLevel(str, Enum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveSession(str, Enum):
    """Full day, or the morning/afternoon half."""

    FULL = "full"
    MORNING = "morning"
    AFTERNOON = "afternoon"
