"""
Calendar math for the weekly and monthly chore views.

Weeks are Sunday aligned and identified by the ISO date of their Sunday. A day
inside a week is addressed by its index, 0 for Sunday through 6 for Saturday.
All functions are pure; the grid builders are memoized on their (immutable)
date arguments.
"""

import re
from collections import defaultdict
from datetime import date, datetime, timedelta
from functools import lru_cache
from typing import Any, Dict, Iterable, Optional, Tuple

DAYS_IN_WEEK = 7
DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def _as_date(value: date) -> date:
    # Drops the time part, the equivalent of truncating to midnight
    if isinstance(value, datetime):
        return value.date()
    return value


def to_iso_date(value: date) -> str:
    return _as_date(value).isoformat()


def parse_iso_date(value: str) -> date:
    """Parse ``YYYY-MM-DD``; raises ``ValueError`` for anything else."""
    if not isinstance(value, str) or not _ISO_DATE.fullmatch(value):
        raise ValueError(f"Invalid ISO date: {value!r}")
    return date.fromisoformat(value)


def day_index(value: date) -> int:
    """Day of week with Sunday as 0."""
    return (_as_date(value).weekday() + 1) % DAYS_IN_WEEK


def week_start(value: date) -> date:
    """The Sunday on or before ``value``."""
    d = _as_date(value)
    return d - timedelta(days=day_index(d))


def week_end(start: date) -> date:
    return _as_date(start) + timedelta(days=DAYS_IN_WEEK - 1)


def week_dates(start: date) -> Tuple[date, ...]:
    return _week_dates(_as_date(start))


@lru_cache(maxsize=256)
def _week_dates(start: date) -> Tuple[date, ...]:
    return tuple(start + timedelta(days=offset) for offset in range(DAYS_IN_WEEK))


def first_of_month(value: date) -> date:
    return _as_date(value).replace(day=1)


def shift_month(value: date, months: int) -> date:
    """First day of the month ``months`` away from the month of ``value``."""
    d = _as_date(value)
    total = d.year * 12 + (d.month - 1) + months
    return date(total // 12, total % 12 + 1, 1)


def last_of_month(value: date) -> date:
    return shift_month(value, 1) - timedelta(days=1)


def month_matrix(month: date) -> Tuple[Tuple[date, ...], ...]:
    """
    Full calendar weeks covering the month of ``month``.

    Rows start on the Sunday on or before the 1st and include the leading and
    trailing days of the neighbouring months. Generation stops with the first
    row whose last date reaches or passes the month's final day.
    """
    return _month_matrix(first_of_month(month))


@lru_cache(maxsize=64)
def _month_matrix(first: date) -> Tuple[Tuple[date, ...], ...]:
    end = last_of_month(first)
    rows = []
    current = week_start(first)
    while True:
        row = _week_dates(current)
        rows.append(row)
        if row[-1] >= end:
            break
        current = current + timedelta(days=DAYS_IN_WEEK)
    return tuple(rows)


def _field(record: Any, name: str) -> Any:
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


AssignmentKey = Tuple[str, str, int]


class AssignmentIndex:
    """
    Assignments grouped by ``(person_id, week_start_iso, day_index)``.

    Accepts API dictionaries or ORM rows. The index is built once and never
    mutated; rebuild it from a fresh snapshot instead.
    """

    def __init__(self, assignments: Iterable[Any] = ()):
        grouped: Dict[AssignmentKey, list] = defaultdict(list)
        for record in assignments:
            key = (
                _field(record, "person_id"),
                _field(record, "week_start_iso"),
                int(_field(record, "day_index")),
            )
            grouped[key].append(record)
        self._by_key: Dict[AssignmentKey, Tuple[Any, ...]] = {
            key: tuple(records) for key, records in grouped.items()
        }

    def __len__(self) -> int:
        return sum(len(records) for records in self._by_key.values())

    @staticmethod
    def key_for(person_id: str, on: date) -> AssignmentKey:
        return person_id, to_iso_date(week_start(on)), day_index(on)

    def lookup(self, person_id: str, week_start_iso: str, index: int) -> Tuple[Any, ...]:
        return self._by_key.get((person_id, week_start_iso, index), ())

    def chores_for(self, person_id: str, on: date) -> Tuple[Any, ...]:
        return self._by_key.get(self.key_for(person_id, on), ())

    def chore_ids_on(self, person_id: str, on: date) -> Tuple[str, ...]:
        return tuple(_field(record, "chore_id") for record in self.chores_for(person_id, on))

    def has_chore(self, person_id: str, on: date) -> bool:
        return bool(self.chores_for(person_id, on))

    def find(self, person_id: str, week_start_iso: str, index: int, chore_id: str) -> Optional[Any]:
        for record in self.lookup(person_id, week_start_iso, index):
            if _field(record, "chore_id") == chore_id:
                return record
        return None
