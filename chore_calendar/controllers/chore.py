from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from chore_calendar.controllers.family import get_family_or_404
from chore_calendar.core.exceptions import ValidationError, NotFoundError, ConflictError
from chore_calendar.core.permissions import ensure_family_admin
from chore_calendar.core.security import SessionClaims
from chore_calendar.models import Chore
from chore_calendar.models.chore import chore_label_key
from chore_calendar.schemas.chore import ChoreCreate, ChoreUpdate
from chore_calendar.utils.identifiers import generate_id
from chore_calendar.utils.logging_decorator import log_create, log_update, log_delete
from chore_calendar.utils.validation import clean_text

DUPLICATE_LABEL = "Chore with this label already exists"


def get_chore_or_404(db: Session, chore_id: str) -> Chore:
    chore = db.query(Chore).filter(Chore.id == chore_id).first()
    if not chore:
        raise NotFoundError("Chore not found")
    return chore


def get_chores_by_family_id(db: Session, family_id: str) -> List[Chore]:
    get_family_or_404(db, family_id)
    return db.query(Chore).filter(Chore.family_id == family_id).order_by(Chore.created_at).all()


def _label_taken(db: Session, family_id: str, label: str, exclude_id: str | None = None) -> bool:
    query = db.query(Chore).filter(Chore.family_id == family_id, Chore.label_key == chore_label_key(label))
    if exclude_id:
        query = query.filter(Chore.id != exclude_id)
    return query.first() is not None


def _commit_or_conflict(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(DUPLICATE_LABEL)


@log_create("chores", "Added chore")
def create_chore(db: Session, session: SessionClaims, family_id: str, payload: ChoreCreate) -> Chore:
    label = clean_text(payload.label)
    if not label:
        raise ValidationError("Chore label required")

    get_family_or_404(db, family_id)

    if _label_taken(db, family_id, label):
        raise ConflictError(DUPLICATE_LABEL)

    chore = Chore(id=generate_id(label), family_id=family_id, label=label, label_key=chore_label_key(label))
    db.add(chore)
    _commit_or_conflict(db)
    db.refresh(chore)
    return chore


@log_update("chores", "Renamed chore")
def update_chore(db: Session, session: SessionClaims, chore_id: str, payload: ChoreUpdate) -> Chore:
    chore = get_chore_or_404(db, chore_id)
    ensure_family_admin(session, chore.family_id)

    label = clean_text(payload.label)
    if not label:
        raise ValidationError("Chore label required")

    if _label_taken(db, chore.family_id, label, exclude_id=chore.id):
        raise ConflictError(DUPLICATE_LABEL)

    chore.label = label
    chore.label_key = chore_label_key(label)
    _commit_or_conflict(db)
    db.refresh(chore)
    return chore


@log_delete("chores", "chore_id", "Removed chore")
def delete_chore(db: Session, session: SessionClaims, chore_id: str) -> dict:
    chore = get_chore_or_404(db, chore_id)
    ensure_family_admin(session, chore.family_id)

    db.delete(chore)
    db.commit()
    return {"message": "Chore deleted successfully"}
