"""
Client-side state for the chore calendar.

``ChoreBoard`` holds what the calendar screen needs between API calls: the
selected week and month, the cached family snapshot and who is looking at it.
Every mutation goes through the API first and only then patches the cached
snapshot, so a failed call leaves the board as it was.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from enum import Enum
from functools import cached_property
from typing import Any, Dict, List, Optional, Tuple

from chore_calendar.client.api_client import ApiClient, ApiError
from chore_calendar.utils.calendar_utils import (
    AssignmentIndex,
    DAY_NAMES,
    first_of_month,
    month_matrix,
    shift_month,
    to_iso_date,
    week_dates,
    week_end,
    week_start,
)

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class BoardError(Exception):
    """An action the board refuses before calling the API"""


class ViewMode(str, Enum):
    weekly = "weekly"
    monthly = "monthly"


@dataclass(frozen=True)
class FamilySnapshot:
    id: str
    name: str
    admins: Tuple[Record, ...] = ()
    people: Tuple[Record, ...] = ()
    chores: Tuple[Record, ...] = ()
    assignments: Tuple[Record, ...] = ()

    @classmethod
    def from_payload(cls, payload: Record) -> "FamilySnapshot":
        return cls(
            id=payload["id"],
            name=payload["name"],
            admins=tuple(payload.get("admins", ())),
            people=tuple(payload.get("people", ())),
            chores=tuple(payload.get("chores", ())),
            assignments=tuple(payload.get("assignments", ())),
        )

    def with_changes(self, **changes) -> "FamilySnapshot":
        return replace(self, **changes)

    @cached_property
    def index(self) -> AssignmentIndex:
        return AssignmentIndex(self.assignments)

    @cached_property
    def chores_by_id(self) -> Dict[str, Record]:
        return {chore["id"]: chore for chore in self.chores}

    def person(self, person_id: str) -> Optional[Record]:
        return next((p for p in self.people if p["id"] == person_id), None)


@dataclass(frozen=True)
class WeekRow:
    person: Record
    # One entry per day, Sunday first; each holds the chore records for that day
    days: Tuple[Tuple[Record, ...], ...]


@dataclass(frozen=True)
class MonthCell:
    day: date
    in_month: bool
    in_current_week: bool
    people: Tuple[Record, ...] = field(default=())


def _without(records: Tuple[Record, ...], record_id: str) -> Tuple[Record, ...]:
    return tuple(r for r in records if r["id"] != record_id)


def _replacing(records: Tuple[Record, ...], updated: Record) -> Tuple[Record, ...]:
    return tuple(updated if r["id"] == updated["id"] else r for r in records)


class ChoreBoard:
    def __init__(self, api: ApiClient, today: Optional[date] = None):
        self.api = api
        self._today = today
        start = week_start(self.today())
        self.current_week_start: date = start
        self.current_month: date = first_of_month(self.today())
        self.view_mode = ViewMode.weekly
        self.family_id: Optional[str] = None
        self.snapshot: Optional[FamilySnapshot] = None
        self.logged_in_admin_id: Optional[str] = None
        self.viewing_person_id: Optional[str] = None

    def today(self) -> date:
        return self._today or date.today()

    # Session

    @property
    def is_admin(self) -> bool:
        return self.logged_in_admin_id is not None

    @property
    def is_read_only(self) -> bool:
        return self.viewing_person_id is not None and not self.is_admin

    def create_family(self, name: str, admin_email: str, admin_password: str) -> FamilySnapshot:
        name, admin_email, admin_password = name.strip(), admin_email.strip(), admin_password.strip()
        if not name:
            raise BoardError("Family name is required")
        if not admin_email or not admin_password:
            raise BoardError("Admin email and password are required")

        result = self.api.create_family(name, admin_email, admin_password)
        self.family_id = result["family"]["id"]
        self.logged_in_admin_id = result["admin"]["id"]
        self.viewing_person_id = None
        return self.load_family()

    def login_admin(self, email: str, password: str) -> FamilySnapshot:
        email, password = email.strip(), password.strip()
        if not email or not password:
            raise BoardError("Email and password are required")

        result = self.api.admin_login(email, password)
        self.family_id = result["admin"]["familyId"]
        self.logged_in_admin_id = result["admin"]["id"]
        self.viewing_person_id = None
        return self.load_family()

    def login_member(self, email: str) -> FamilySnapshot:
        email = email.strip()
        if not email:
            raise BoardError("Email is required")

        result = self.api.user_login(email)
        self.family_id = result["person"]["familyId"]
        self.viewing_person_id = result["person"]["id"]
        self.logged_in_admin_id = None
        # Members always land on the current week
        self.snapshot = None
        self._move_to_week(week_start(self.today()))
        return self.load_family()

    def logout(self) -> None:
        self.api.logout()
        self.logged_in_admin_id = None
        self.viewing_person_id = None
        self.family_id = None
        self.snapshot = None

    # Loading

    def _require_family(self) -> str:
        if not self.family_id:
            raise BoardError("No family loaded")
        return self.family_id

    def _require_snapshot(self) -> FamilySnapshot:
        self._require_family()
        if self.snapshot is None:
            raise BoardError("No family loaded")
        return self.snapshot

    def _require_admin(self) -> None:
        if not self.is_admin:
            raise BoardError("Admin access required")

    def load_family(self) -> FamilySnapshot:
        family_id = self._require_family()
        self.snapshot = FamilySnapshot.from_payload(self.api.get_family(family_id))
        return self.refresh_assignments()

    def refresh_assignments(self) -> FamilySnapshot:
        """Swap the cached assignments for the ones of the selected week."""
        snapshot = self._require_snapshot()
        assignments = self.api.get_assignments(snapshot.id, self.current_week_key)
        self.snapshot = snapshot.with_changes(assignments=tuple(assignments))
        return self.snapshot

    # Navigation

    @property
    def current_week_key(self) -> str:
        return to_iso_date(self.current_week_start)

    @property
    def current_week_end(self) -> date:
        return week_end(self.current_week_start)

    @property
    def current_week_dates(self) -> Tuple[date, ...]:
        return week_dates(self.current_week_start)

    def _move_to_week(self, start: date) -> None:
        self.current_week_start = start
        self.current_month = first_of_month(start)
        if self.snapshot is not None:
            self.refresh_assignments()

    def set_week(self, day: date) -> None:
        self._move_to_week(week_start(day))

    def previous_week(self) -> None:
        self._move_to_week(self.current_week_start - timedelta(days=7))

    def next_week(self) -> None:
        self._move_to_week(self.current_week_start + timedelta(days=7))

    def this_week(self) -> None:
        self._move_to_week(week_start(self.today()))

    def set_month(self, day: date) -> None:
        self.current_month = first_of_month(day)

    def previous_month(self) -> None:
        self.current_month = shift_month(self.current_month, -1)

    def next_month(self) -> None:
        self.current_month = shift_month(self.current_month, 1)

    def this_month(self) -> None:
        today = self.today()
        self._move_to_week(week_start(today))
        self.current_month = first_of_month(today)

    def select_week(self, day: date) -> None:
        """Jump from a month cell to the week containing it."""
        month = self.current_month
        self._move_to_week(week_start(day))
        self.current_month = month
        self.view_mode = ViewMode.weekly

    def set_view_mode(self, mode: ViewMode) -> None:
        self.view_mode = ViewMode(mode)

    # People

    def add_person(self, name: str, email: str, phone: Optional[str] = None) -> Record:
        self._require_admin()
        snapshot = self._require_snapshot()
        person = self.api.add_person(snapshot.id, name.strip(), email.strip(), (phone or "").strip() or None)
        self.snapshot = snapshot.with_changes(people=snapshot.people + (person,))
        return person

    def update_person(
        self,
        person_id: str,
        name: str,
        email: str,
        phone: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Record:
        self._require_admin()
        snapshot = self._require_snapshot()
        person = self.api.update_person(
            person_id, name.strip(), email.strip(), (phone or "").strip() or None, color
        )
        self.snapshot = snapshot.with_changes(people=_replacing(snapshot.people, person))
        return person

    def change_person_color(self, person_id: str, color: str) -> Record:
        person = self._require_snapshot().person(person_id)
        if person is None:
            raise BoardError("Person not found")
        return self.update_person(person_id, person["name"], person["email"], person.get("phone"), color)

    def remove_person(self, person_id: str) -> None:
        self._require_admin()
        snapshot = self._require_snapshot()
        self.api.delete_person(person_id)
        self.snapshot = snapshot.with_changes(
            people=_without(snapshot.people, person_id),
            assignments=tuple(a for a in snapshot.assignments if a["person_id"] != person_id),
        )

    # Chores

    def add_chore(self, label: str) -> Record:
        self._require_admin()
        snapshot = self._require_snapshot()
        label = label.strip()
        if not label:
            raise BoardError("Chore label is required")
        chore = self.api.add_chore(snapshot.id, label)
        self.snapshot = snapshot.with_changes(chores=snapshot.chores + (chore,))
        return chore

    def rename_chore(self, chore_id: str, label: str) -> Record:
        self._require_admin()
        snapshot = self._require_snapshot()
        label = label.strip()
        if not label:
            raise BoardError("Chore label is required")
        chore = self.api.update_chore(chore_id, label)
        self.snapshot = snapshot.with_changes(chores=_replacing(snapshot.chores, chore))
        return chore

    def remove_chore(self, chore_id: str) -> None:
        self._require_admin()
        snapshot = self._require_snapshot()
        self.api.delete_chore(chore_id)
        self.snapshot = snapshot.with_changes(
            chores=_without(snapshot.chores, chore_id),
            assignments=tuple(a for a in snapshot.assignments if a["chore_id"] != chore_id),
        )

    # Admins

    def add_admin(self, email: str, password: str) -> Record:
        self._require_admin()
        snapshot = self._require_snapshot()
        email, password = email.strip(), password.strip()
        if not email or not password:
            raise BoardError("Email and password are required")
        admin = self.api.add_admin(snapshot.id, email, password)
        entry = {"id": admin["id"], "email": admin["email"]}
        self.snapshot = snapshot.with_changes(admins=snapshot.admins + (entry,))
        return admin

    def remove_admin(self, admin_id: str) -> None:
        self._require_admin()
        snapshot = self._require_snapshot()
        if len(snapshot.admins) <= 1:
            raise BoardError("Cannot remove the last admin")

        self.api.remove_admin(snapshot.id, admin_id)
        self.snapshot = snapshot.with_changes(admins=_without(snapshot.admins, admin_id))

        if self.logged_in_admin_id == admin_id:
            self.logout()

    # Assignments

    def assign_day(self, person_id: str, day_index: int, chore_id: str) -> Optional[Record]:
        """Assign a chore for one day of the selected week; a repeat click is a no-op."""
        self._require_admin()
        snapshot = self._require_snapshot()
        try:
            assignment = self.api.add_assignment(
                snapshot.id, person_id, chore_id, self.current_week_key, day_index
            )
        except ApiError as e:
            if e.is_duplicate:
                logger.debug(f"Chore {chore_id} already assigned to {person_id} on day {day_index}")
                return None
            raise
        self.snapshot = snapshot.with_changes(assignments=snapshot.assignments + (assignment,))
        return assignment

    def unassign_day(self, person_id: str, day_index: int, chore_id: str) -> bool:
        self._require_admin()
        snapshot = self._require_snapshot()
        assignment = snapshot.index.find(person_id, self.current_week_key, day_index, chore_id)
        if assignment is None:
            return False

        self.api.delete_assignment(assignment["id"])
        self.snapshot = snapshot.with_changes(assignments=_without(snapshot.assignments, assignment["id"]))
        return True

    def assign_week(self, person_id: str, chore_id: str) -> List[Record]:
        self._require_admin()
        snapshot = self._require_snapshot()
        created = self.api.add_week_assignment(snapshot.id, person_id, chore_id, self.current_week_key)
        self.snapshot = snapshot.with_changes(assignments=snapshot.assignments + tuple(created))
        return created

    # Grids

    def visible_people(self) -> Tuple[Record, ...]:
        snapshot = self._require_snapshot()
        if self.is_read_only:
            return tuple(p for p in snapshot.people if p["id"] == self.viewing_person_id)
        return snapshot.people

    def weekly_rows(self) -> List[WeekRow]:
        snapshot = self._require_snapshot()
        rows = []
        for person in self.visible_people():
            days = []
            for index in range(len(DAY_NAMES)):
                records = snapshot.index.lookup(person["id"], self.current_week_key, index)
                days.append(tuple(
                    snapshot.chores_by_id[r["chore_id"]] for r in records if r["chore_id"] in snapshot.chores_by_id
                ))
            rows.append(WeekRow(person=person, days=tuple(days)))
        return rows

    def month_cells(self) -> List[Tuple[MonthCell, ...]]:
        snapshot = self._require_snapshot()
        people = self.visible_people()
        current = set(self.current_week_dates)
        cells = []
        for row in month_matrix(self.current_month):
            cells.append(tuple(
                MonthCell(
                    day=day,
                    in_month=day.month == self.current_month.month,
                    in_current_week=day in current,
                    people=tuple(p for p in people if snapshot.index.has_chore(p["id"], day)),
                )
                for day in row
            ))
        return cells
