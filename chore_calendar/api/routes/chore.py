import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from chore_calendar.controllers.chore import (
    get_chores_by_family_id,
    create_chore,
    update_chore,
    delete_chore,
)
from chore_calendar.core.exceptions import InternalError
from chore_calendar.core.permissions import get_current_session, ensure_family_access, ensure_family_admin
from chore_calendar.core.security import SessionClaims
from chore_calendar.db.session import get_db
from chore_calendar.schemas.chore import ChoreCreate, ChoreUpdate, ChoreOut
from chore_calendar.schemas.family import MessageResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/family/{family_id}", response_model=List[ChoreOut])
def list_chores(
    family_id: str,
    db: Session = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
):
    ensure_family_access(session, family_id)
    try:
        return get_chores_by_family_id(db, family_id)
    except HTTPException as e:
        raise e
    except Exception:
        logger.exception("Get chores error")
        raise InternalError()


@router.post("/family/{family_id}", response_model=ChoreOut, status_code=status.HTTP_201_CREATED)
def add_chore(
    family_id: str,
    payload: ChoreCreate,
    db: Session = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
):
    ensure_family_admin(session, family_id)
    try:
        return create_chore(db, session, family_id, payload)
    except HTTPException as e:
        raise e
    except Exception:
        logger.exception("Add chore error")
        raise InternalError()


@router.put("/{chore_id}", response_model=ChoreOut)
def rename_chore(
    chore_id: str,
    payload: ChoreUpdate,
    db: Session = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
):
    try:
        return update_chore(db, session, chore_id, payload)
    except HTTPException as e:
        raise e
    except Exception:
        logger.exception("Update chore error")
        raise InternalError()


@router.delete("/{chore_id}", response_model=MessageResponse)
def remove_chore(
    chore_id: str,
    db: Session = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
):
    try:
        return delete_chore(db, session, chore_id)
    except HTTPException as e:
        raise e
    except Exception:
        logger.exception("Delete chore error")
        raise InternalError()
