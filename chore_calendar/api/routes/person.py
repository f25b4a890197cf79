import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from chore_calendar.controllers.person import (
    get_people_by_family_id,
    create_person,
    update_person,
    delete_person,
)
from chore_calendar.core.exceptions import InternalError
from chore_calendar.core.permissions import get_current_session, ensure_family_access, ensure_family_admin
from chore_calendar.core.security import SessionClaims
from chore_calendar.db.session import get_db
from chore_calendar.schemas.family import MessageResponse
from chore_calendar.schemas.person import PersonCreate, PersonUpdate, PersonOut

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/family/{family_id}", response_model=List[PersonOut])
def list_people(
    family_id: str,
    db: Session = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
):
    ensure_family_access(session, family_id)
    try:
        return get_people_by_family_id(db, family_id)
    except HTTPException as e:
        raise e
    except Exception:
        logger.exception("Get people error")
        raise InternalError()


@router.post("/family/{family_id}", response_model=PersonOut, status_code=status.HTTP_201_CREATED)
def add_person(
    family_id: str,
    payload: PersonCreate,
    db: Session = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
):
    ensure_family_admin(session, family_id)
    try:
        return create_person(db, session, family_id, payload)
    except HTTPException as e:
        raise e
    except Exception:
        logger.exception("Add person error")
        raise InternalError()


@router.put("/{person_id}", response_model=PersonOut)
def edit_person(
    person_id: str,
    payload: PersonUpdate,
    db: Session = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
):
    try:
        return update_person(db, session, person_id, payload)
    except HTTPException as e:
        raise e
    except Exception:
        logger.exception("Update person error")
        raise InternalError()


@router.delete("/{person_id}", response_model=MessageResponse)
def remove_person(
    person_id: str,
    db: Session = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
):
    try:
        return delete_person(db, session, person_id)
    except HTTPException as e:
        raise e
    except Exception:
        logger.exception("Delete person error")
        raise InternalError()
