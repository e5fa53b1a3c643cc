from datetime import date

import pytest

from src.school_admin.school_admin.common.dates import (
    CalendarDate,
    age_on,
    parse_display,
    thai_date_parts,
    to_buddhist,
    to_iso,
    today_display,
)
from src.school_admin.school_admin.core.enums import Era


def test_iso_to_buddhist_display():
    assert to_buddhist("2024-03-15") == "15/03/2567"


def test_buddhist_display_to_iso():
    assert to_iso("15/03/2567") == "2024-03-15"


@pytest.mark.parametrize("iso", ["2024-02-29", "1999-12-31", "2025-01-01"])
def test_round_trip_for_valid_dates(iso):
    assert to_iso(to_buddhist(iso)) == iso


def test_display_year_below_threshold_is_taken_as_gregorian():
    assert to_iso("15/03/2024") == "2024-03-15"


def test_year_first_display_is_accepted():
    assert to_iso("2567/03/15") == "2024-03-15"


@pytest.mark.parametrize("bad", ["", "15-03-2567", "15/03", "aa/bb/cccc", "31/02/2567", None, 12345])
def test_malformed_display_gives_empty_string(bad):
    assert to_iso(bad) == ""


@pytest.mark.parametrize("bad", ["", "2024/03/15", "2024-13-01", "not-a-date", None])
def test_malformed_iso_gives_empty_string(bad):
    assert to_buddhist(bad) == ""


def test_calendar_date_converts_between_eras():
    cd = parse_display("01/01/2568")
    assert cd == CalendarDate(2568, 1, 1, Era.BUDDHIST)
    assert cd.to_gregorian() == CalendarDate(2025, 1, 1, Era.GREGORIAN)
    assert cd.to_date() == date(2025, 1, 1)
    assert cd.to_gregorian().format_display() == "01/01/2568"


def test_today_display_uses_buddhist_year():
    assert today_display(date(2024, 3, 5)) == "05/03/2567"


def test_thai_date_parts_accepts_several_layouts():
    assert thai_date_parts("15/03/2567") == (15, 3, 2567)
    assert thai_date_parts("2024-03-15") == (15, 3, 2567)
    assert thai_date_parts("15-03-2024") == (15, 3, 2567)
    assert thai_date_parts("garbage") == (0, 0, 0)
    assert thai_date_parts(None) == (0, 0, 0)


def test_age_on_counts_full_years():
    assert age_on("16/03/2557", on=date(2024, 3, 15)) == 9
    assert age_on("15/03/2557", on=date(2024, 3, 15)) == 10
    assert age_on("", on=date(2024, 3, 15)) == 0
