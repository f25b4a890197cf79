import logging
from typing import List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from chore_calendar.controllers.family import get_family_or_404
from chore_calendar.core.exceptions import ValidationError, NotFoundError, ConflictError
from chore_calendar.core.permissions import ensure_family_admin
from chore_calendar.core.security import SessionClaims
from chore_calendar.models import Assignment, Person, Chore
from chore_calendar.schemas.assignment import AssignmentCreate, WeekAssignmentCreate
from chore_calendar.utils.calendar_utils import DAYS_IN_WEEK, parse_iso_date
from chore_calendar.utils.identifiers import generate_id
from chore_calendar.utils.logging_decorator import log_create, log_delete
from chore_calendar.utils.validation import clean_text

logger = logging.getLogger(__name__)

DUPLICATE_ASSIGNMENT = "Assignment already exists"


def _validate_week(week_start_iso: str) -> str:
    try:
        parse_iso_date(week_start_iso)
    except ValueError:
        raise ValidationError("weekStartISO must be a date in YYYY-MM-DD format")
    return week_start_iso


def _resolve_person_and_chore(db: Session, family_id: str, person_id: str, chore_id: str) -> Tuple[Person, Chore]:
    person = db.query(Person).filter(Person.id == person_id, Person.family_id == family_id).first()
    if not person:
        raise NotFoundError("Person not found")
    chore = db.query(Chore).filter(Chore.id == chore_id, Chore.family_id == family_id).first()
    if not chore:
        raise NotFoundError("Chore not found")
    return person, chore


def _same_slot(db: Session, family_id: str, person_id: str, chore_id: str, week_start_iso: str):
    return db.query(Assignment).filter(
        Assignment.family_id == family_id,
        Assignment.person_id == person_id,
        Assignment.chore_id == chore_id,
        Assignment.week_start_iso == week_start_iso,
    )


def get_assignments_for_week(db: Session, family_id: str, week_start_iso: str) -> List[Assignment]:
    _validate_week(week_start_iso)
    get_family_or_404(db, family_id)
    return (
        db.query(Assignment)
        .filter(Assignment.family_id == family_id, Assignment.week_start_iso == week_start_iso)
        .order_by(Assignment.day_index, Assignment.created_at)
        .all()
    )


def get_assignment_or_404(db: Session, assignment_id: str) -> Assignment:
    assignment = db.query(Assignment).filter(Assignment.id == assignment_id).first()
    if not assignment:
        raise NotFoundError("Assignment not found")
    return assignment


@log_create("assignments", "Assigned chore")
def create_assignment(db: Session, session: SessionClaims, family_id: str, payload: AssignmentCreate) -> Assignment:
    person_id = clean_text(payload.person_id)
    chore_id = clean_text(payload.chore_id)
    week_start_iso = clean_text(payload.week_start_iso)
    day_index = payload.day_index
    if not person_id or not chore_id or not week_start_iso or day_index is None:
        raise ValidationError("personId, choreId, weekStartISO, and dayIndex required")
    if not 0 <= day_index < DAYS_IN_WEEK:
        raise ValidationError("dayIndex must be between 0 (Sunday) and 6 (Saturday)")
    _validate_week(week_start_iso)

    _resolve_person_and_chore(db, family_id, person_id, chore_id)

    existing = _same_slot(db, family_id, person_id, chore_id, week_start_iso).filter(
        Assignment.day_index == day_index
    ).first()
    if existing:
        raise ConflictError(DUPLICATE_ASSIGNMENT)

    assignment = Assignment(
        id=generate_id("assignment"),
        family_id=family_id,
        person_id=person_id,
        chore_id=chore_id,
        week_start_iso=week_start_iso,
        day_index=day_index,
    )
    db.add(assignment)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(DUPLICATE_ASSIGNMENT)

    db.refresh(assignment)
    return assignment


@log_create(
    "assignments",
    "Assigned chore for a whole week",
    get_details=lambda result, bound: {"created_days": [a.day_index for a in result]},
)
def create_week_assignments(
    db: Session, session: SessionClaims, family_id: str, payload: WeekAssignmentCreate
) -> List[Assignment]:
    """Fill every day of the week, silently skipping days that already have this chore."""
    person_id = clean_text(payload.person_id)
    chore_id = clean_text(payload.chore_id)
    week_start_iso = clean_text(payload.week_start_iso)
    if not person_id or not chore_id or not week_start_iso:
        raise ValidationError("personId, choreId, and weekStartISO required")
    _validate_week(week_start_iso)

    _resolve_person_and_chore(db, family_id, person_id, chore_id)

    taken_days = {
        row.day_index for row in _same_slot(db, family_id, person_id, chore_id, week_start_iso).all()
    }

    created = []
    for day_index in range(DAYS_IN_WEEK):
        if day_index in taken_days:
            continue
        assignment = Assignment(
            id=generate_id("assignment"),
            family_id=family_id,
            person_id=person_id,
            chore_id=chore_id,
            week_start_iso=week_start_iso,
            day_index=day_index,
        )
        db.add(assignment)
        try:
            db.commit()
        except IntegrityError:
            # Filled by another request since taken_days was read
            db.rollback()
            logger.debug(f"Skipping day {day_index} for {person_id} in week {week_start_iso}")
            continue
        created.append(assignment)

    for assignment in created:
        db.refresh(assignment)
    logger.debug(f"Created {len(created)} assignments for {person_id} in week {week_start_iso}")
    return created


@log_delete("assignments", "assignment_id", "Removed assignment")
def delete_assignment(db: Session, session: SessionClaims, assignment_id: str) -> dict:
    assignment = get_assignment_or_404(db, assignment_id)
    ensure_family_admin(session, assignment.family_id)

    db.delete(assignment)
    db.commit()
    return {"message": "Assignment deleted successfully"}
