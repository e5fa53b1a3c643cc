from __future__ import annotations

from datetime import datetime

import pytest

from src.school_admin.school_admin.attendance.geo import haversine_distance
from src.school_admin.school_admin.attendance.model import DutyRecord
from src.school_admin.school_admin.attendance.service import DutyService
from src.school_admin.school_admin.core.enums import DutyStatus, DutyType
from src.school_admin.school_admin.core.exceptions import ValidationError
from src.school_admin.school_admin.users.model import OTHER_TITLE, Personnel

SCHOOL = (16.4322, 103.5061)


class InMemoryDuties:
    def __init__(self, *records):
        self.records = list(records)

    def list_all(self):
        return list(self.records)

    def save(self, record):
        self.records.append(record)
        return record


TEACHER = Personnel(personnel_id=3, title="นาง", name="สมใจ", position="ครู", id_card="3")
NOW = datetime(2024, 3, 15, 7, 45, 10)


def _svc(repo=None):
    return DutyService(repo or InMemoryDuties(), school_lat=SCHOOL[0], school_lng=SCHOOL[1], radius_m=200)


def test_haversine_whole_metres():
    assert haversine_distance(*SCHOOL, *SCHOOL) == 0
    assert haversine_distance(SCHOOL[0], SCHOOL[1], SCHOOL[0] + 0.001, SCHOOL[1]) == 111


def test_check_in_within_radius():
    repo = InMemoryDuties()

    rec = _svc(repo).check_in(
        current=TEACHER, duty_type=DutyType.CHECK_IN, latitude=SCHOOL[0] + 0.001, longitude=SCHOOL[1], now=NOW
    )

    assert rec.status == DutyStatus.WITHIN_RANGE
    assert rec.distance == 111
    assert rec.date == "15/03/2567"
    assert rec.time == "07:45"
    assert rec.personnel_name == "นางสมใจ"
    assert rec.record_id == int(NOW.timestamp() * 1000)
    assert repo.records == [rec]


def test_out_of_range_requires_confirmation():
    repo = InMemoryDuties()
    svc = _svc(repo)
    far = dict(latitude=SCHOOL[0] + 0.01, longitude=SCHOOL[1])

    with pytest.raises(ValidationError):
        svc.check_in(current=TEACHER, duty_type=DutyType.CHECK_OUT, now=NOW, **far)
    assert repo.records == []

    rec = svc.check_in(current=TEACHER, duty_type=DutyType.CHECK_OUT, now=NOW, confirmed=True, **far)
    assert rec.status == DutyStatus.OUT_OF_RANGE
    assert rec.duty_type == DutyType.CHECK_OUT
    assert rec.to_remote()["type"] == "check_out"


def test_other_title_used_in_name():
    person = Personnel(personnel_id=4, title=OTHER_TITLE, title_other="ดร.", name="ปัญญา", position="ครู", id_card="4")
    rec = _svc().check_in(current=person, duty_type=DutyType.CHECK_IN, latitude=SCHOOL[0], longitude=SCHOOL[1], now=NOW)
    assert rec.personnel_name == "ดร.ปัญญา"


def _duty(record_id, personnel_id, name):
    return DutyRecord(
        record_id=record_id,
        date="15/03/2567",
        time="07:00",
        personnel_id=personnel_id,
        personnel_name=name,
        duty_type=DutyType.CHECK_IN,
        latitude=0.0,
        longitude=0.0,
        distance=0,
        status=DutyStatus.WITHIN_RANGE,
    )


def test_list_records_newest_first_with_filters():
    repo = InMemoryDuties(_duty(1, 3, "นางสมใจ"), _duty(3, 4, "นายมานะ"), _duty(2, 3, "นางสมใจ"))
    svc = _svc(repo)

    assert [r.record_id for r in svc.list_records()] == [3, 2, 1]
    assert [r.record_id for r in svc.list_records(name="มานะ")] == [3]
    assert [r.record_id for r in svc.list_records(personnel_id=3)] == [2, 1]


class StaticSchoolData:
    def __init__(self, settings):
        self.settings = settings

    def load_all(self):
        return {"settings": self.settings}


def test_saved_school_location_overrides_configured_one():
    bangkok = (13.7563, 100.5018)
    svc = DutyService(
        InMemoryDuties(),
        school_lat=SCHOOL[0],
        school_lng=SCHOOL[1],
        radius_m=200,
        settings=StaticSchoolData({"schoolLat": bangkok[0], "schoolLng": bangkok[1], "checkInRadius": "500"}),
    )

    assert svc.check_in_site() == (bangkok, 500)
    rec = svc.check_in(
        current=TEACHER, duty_type=DutyType.CHECK_IN, latitude=bangkok[0] + 0.004, longitude=bangkok[1], now=NOW
    )
    assert rec.status == DutyStatus.WITHIN_RANGE
    assert rec.distance == haversine_distance(*bangkok, bangkok[0] + 0.004, bangkok[1])


@pytest.mark.parametrize(
    "settings",
    [None, {}, {"schoolLat": "", "schoolLng": None, "checkInRadius": 0}, {"checkInRadius": "wide"}],
)
def test_missing_saved_location_falls_back_to_configured(settings):
    svc = DutyService(
        InMemoryDuties(), school_lat=SCHOOL[0], school_lng=SCHOOL[1], radius_m=200, settings=StaticSchoolData(settings)
    )

    assert svc.check_in_site() == (SCHOOL, 200)
