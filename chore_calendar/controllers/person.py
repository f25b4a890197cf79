from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from chore_calendar.controllers.family import get_family_or_404
from chore_calendar.core.exceptions import ValidationError, NotFoundError, ConflictError
from chore_calendar.core.permissions import ensure_family_admin
from chore_calendar.core.security import SessionClaims
from chore_calendar.models import Person
from chore_calendar.schemas.person import PersonCreate, PersonUpdate
from chore_calendar.utils.identifiers import generate_id
from chore_calendar.utils.logging_decorator import log_create, log_update, log_delete
from chore_calendar.utils.validation import clean_text, is_hex_color

PALETTE = ("#f97373", "#f97316", "#eab308", "#22c55e", "#0ea5e9", "#a855f7")

DUPLICATE_EMAIL = "Person with this email already exists"


def default_color_for_index(index: int) -> str:
    return PALETTE[index % len(PALETTE)]


def get_person_or_404(db: Session, person_id: str) -> Person:
    person = db.query(Person).filter(Person.id == person_id).first()
    if not person:
        raise NotFoundError("Person not found")
    return person


def get_people_by_family_id(db: Session, family_id: str) -> List[Person]:
    get_family_or_404(db, family_id)
    return db.query(Person).filter(Person.family_id == family_id).order_by(Person.created_at).all()


def _email_taken(db: Session, family_id: str, email: str, exclude_id: str | None = None) -> bool:
    query = db.query(Person).filter(Person.family_id == family_id, Person.email == email)
    if exclude_id:
        query = query.filter(Person.id != exclude_id)
    return query.first() is not None


def _commit_or_conflict(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(DUPLICATE_EMAIL)


@log_create("people", "Added person")
def create_person(db: Session, session: SessionClaims, family_id: str, payload: PersonCreate) -> Person:
    name = clean_text(payload.name)
    email = clean_text(payload.email)
    if not name or not email:
        raise ValidationError("Name and email required")

    get_family_or_404(db, family_id)

    if _email_taken(db, family_id, email):
        raise ConflictError(DUPLICATE_EMAIL)

    # Colors go round the palette in order of joining
    person_count = db.query(Person).filter(Person.family_id == family_id).count()

    person = Person(
        id=generate_id(name),
        family_id=family_id,
        name=name,
        email=email,
        phone=clean_text(payload.phone),
        color=default_color_for_index(person_count),
    )
    db.add(person)
    _commit_or_conflict(db)
    db.refresh(person)
    return person


@log_update("people", "Updated person")
def update_person(db: Session, session: SessionClaims, person_id: str, payload: PersonUpdate) -> Person:
    person = get_person_or_404(db, person_id)
    ensure_family_admin(session, person.family_id)

    name = clean_text(payload.name)
    email = clean_text(payload.email)
    if not name or not email:
        raise ValidationError("Name and email required")

    color = clean_text(payload.color)
    if color and not is_hex_color(color):
        raise ValidationError("Color must be a hex value like #22c55e")

    if _email_taken(db, person.family_id, email, exclude_id=person.id):
        raise ConflictError(DUPLICATE_EMAIL)

    person.name = name
    person.email = email
    person.phone = clean_text(payload.phone)
    person.color = color or person.color

    _commit_or_conflict(db)
    db.refresh(person)
    return person


@log_delete("people", "person_id", "Removed person")
def delete_person(db: Session, session: SessionClaims, person_id: str) -> dict:
    person = get_person_or_404(db, person_id)
    ensure_family_admin(session, person.family_id)

    db.delete(person)
    db.commit()
    return {"message": "Person deleted successfully"}
