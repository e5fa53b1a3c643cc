from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Optional

from ..core.constants import BUDDHIST_ERA_OFFSET, BUDDHIST_YEAR_THRESHOLD
from ..core.enums import Era


@dataclass(frozen=True)
class CalendarDate:
    """A calendar day with an explicit era.

    Display strings (``DD/MM/YYYY`` in Buddhist era) and ISO strings only exist
    at the boundary; everything in between works with this value.
    """

    year: int
    month: int
    day: int
    era: Era = Era.GREGORIAN

    @classmethod
    def from_date(cls, value: date) -> "CalendarDate":
        return cls(year=value.year, month=value.month, day=value.day, era=Era.GREGORIAN)

    def to_gregorian(self) -> "CalendarDate":
        if self.era == Era.GREGORIAN:
            return self
        return replace(self, year=self.year - BUDDHIST_ERA_OFFSET, era=Era.GREGORIAN)

    def to_buddhist(self) -> "CalendarDate":
        if self.era == Era.BUDDHIST:
            return self
        return replace(self, year=self.year + BUDDHIST_ERA_OFFSET, era=Era.BUDDHIST)

    def to_date(self) -> date:
        g = self.to_gregorian()
        return date(g.year, g.month, g.day)

    def format_display(self) -> str:
        b = self.to_buddhist()
        return f"{b.day:02d}/{b.month:02d}/{b.year:04d}"

    def format_iso(self) -> str:
        g = self.to_gregorian()
        return f"{g.year:04d}-{g.month:02d}-{g.day:02d}"


def _numeric_tokens(value: Any, sep: str) -> Optional[list[str]]:
    if not isinstance(value, str):
        return None
    tokens = [t.strip() for t in value.strip().split(sep)]
    if len(tokens) != 3 or not all(t.isdecimal() for t in tokens):
        return None
    return tokens


def _valid(cd: CalendarDate) -> Optional[CalendarDate]:
    try:
        cd.to_date()
    except ValueError:
        return None
    return cd


def parse_display(value: Any) -> Optional[CalendarDate]:
    """Parse a ``DD/MM/YYYY`` display string.

    ``YYYY/MM/DD`` is accepted too. Years above 2400 are Buddhist era, anything
    else is assumed to be Gregorian already (older stored rows).
    """
    tokens = _numeric_tokens(value, "/")
    if tokens is None:
        return None

    first, second, third = tokens
    if len(first) == 4:
        year, month, day = int(first), int(second), int(third)
    elif len(first) <= 2 and len(third) == 4:
        day, month, year = int(first), int(second), int(third)
    else:
        return None

    era = Era.BUDDHIST if year > BUDDHIST_YEAR_THRESHOLD else Era.GREGORIAN
    return _valid(CalendarDate(year=year, month=month, day=day, era=era))


def parse_iso(value: Any) -> Optional[CalendarDate]:
    """Parse ``YYYY-MM-DD`` as produced by date-picker inputs (always Gregorian)."""
    tokens = _numeric_tokens(value, "-")
    if tokens is None:
        return None
    year, month, day = (int(t) for t in tokens)
    return _valid(CalendarDate(year=year, month=month, day=day, era=Era.GREGORIAN))


def to_iso(buddhist: Any) -> str:
    """``15/03/2567`` -> ``2024-03-15``; ``""`` for anything unparseable."""
    cd = parse_display(buddhist)
    return cd.format_iso() if cd else ""


def to_buddhist(iso: Any) -> str:
    """``2024-03-15`` -> ``15/03/2567``; ``""`` for anything unparseable."""
    cd = parse_iso(iso)
    return cd.format_display() if cd else ""


def today_display(today: Optional[date] = None) -> str:
    return CalendarDate.from_date(today or date.today()).format_display()


def thai_date_parts(value: Any) -> tuple[int, int, int]:
    """Lenient ``(day, month, buddhist_year)`` extraction for statistics.

    Accepts ``/`` or ``-`` separators in either day-first or year-first order
    and returns ``(0, 0, 0)`` when nothing sensible can be read.
    """
    if not isinstance(value, str) or not value.strip():
        return 0, 0, 0

    parts = value.strip().replace("-", "/").split("/")
    if len(parts) != 3:
        return 0, 0, 0
    try:
        if len(parts[0].strip()) == 4:
            y, m, d = (int(p) for p in parts)
        else:
            d, m, y = (int(p) for p in parts)
    except ValueError:
        return 0, 0, 0

    if 1900 < y < BUDDHIST_YEAR_THRESHOLD:
        y += BUDDHIST_ERA_OFFSET
    return d, m, y


def age_on(dob: Any, on: Optional[date] = None) -> int:
    cd = parse_display(dob)
    if cd is None:
        return 0
    born = cd.to_date()
    on = on or date.today()
    age = on.year - born.year
    if (on.month, on.day) < (born.month, born.day):
        age -= 1
    return max(age, 0)
