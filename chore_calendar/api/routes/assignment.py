import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from chore_calendar.controllers.assignment import (
    get_assignments_for_week,
    create_assignment,
    create_week_assignments,
    delete_assignment,
)
from chore_calendar.core.exceptions import InternalError
from chore_calendar.core.permissions import get_current_session, ensure_family_access, ensure_family_admin
from chore_calendar.core.security import SessionClaims
from chore_calendar.db.session import get_db
from chore_calendar.schemas.assignment import AssignmentCreate, WeekAssignmentCreate, AssignmentOut
from chore_calendar.schemas.family import MessageResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/family/{family_id}/week/{week_start_iso}", response_model=List[AssignmentOut])
def list_week_assignments(
    family_id: str,
    week_start_iso: str,
    db: Session = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
):
    ensure_family_access(session, family_id)
    try:
        return get_assignments_for_week(db, family_id, week_start_iso)
    except HTTPException as e:
        raise e
    except Exception:
        logger.exception("Get assignments error")
        raise InternalError()


@router.post("/family/{family_id}", response_model=AssignmentOut, status_code=status.HTTP_201_CREATED)
def assign_chore(
    family_id: str,
    payload: AssignmentCreate,
    db: Session = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
):
    ensure_family_admin(session, family_id)
    try:
        return create_assignment(db, session, family_id, payload)
    except HTTPException as e:
        raise e
    except Exception:
        logger.exception("Add assignment error")
        raise InternalError()


@router.post("/family/{family_id}/week", response_model=List[AssignmentOut], status_code=status.HTTP_201_CREATED)
def assign_chore_for_week(
    family_id: str,
    payload: WeekAssignmentCreate,
    db: Session = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
):
    ensure_family_admin(session, family_id)
    try:
        return create_week_assignments(db, session, family_id, payload)
    except HTTPException as e:
        raise e
    except Exception:
        logger.exception("Add week assignments error")
        raise InternalError()


@router.delete("/{assignment_id}", response_model=MessageResponse)
def remove_assignment(
    assignment_id: str,
    db: Session = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
):
    try:
        return delete_assignment(db, session, assignment_id)
    except HTTPException as e:
        raise e
    except Exception:
        logger.exception("Delete assignment error")
        raise InternalError()
