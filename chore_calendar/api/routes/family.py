import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from chore_calendar.controllers.auth import admin_session
from chore_calendar.controllers.family import (
    create_family,
    get_family_or_404,
    delete_family,
    add_admin,
    remove_admin,
    get_family_activity,
)
from chore_calendar.core.exceptions import InternalError
from chore_calendar.core.permissions import get_current_session, ensure_family_access, ensure_family_admin
from chore_calendar.core.security import SessionClaims, create_access_token
from chore_calendar.db.session import get_db
from chore_calendar.schemas.activity_log import ActivityLogResponse
from chore_calendar.schemas.auth import AdminSummary
from chore_calendar.schemas.family import (
    FamilyCreate,
    FamilyCreateResponse,
    FamilyDetail,
    AdminCreate,
    MessageResponse,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=FamilyCreateResponse, status_code=status.HTTP_201_CREATED)
def create_new_family(payload: FamilyCreate, db: Session = Depends(get_db)):
    try:
        family, admin = create_family(db, payload)
        token = create_access_token(admin_session(admin))
        return FamilyCreateResponse(
            token=token,
            family=FamilyDetail.model_validate(family),
            admin=AdminSummary.model_validate(admin),
        )
    except HTTPException as e:
        raise e
    except Exception:
        logger.exception("Create family error")
        raise InternalError()


@router.get("/{family_id}", response_model=FamilyDetail)
def read_family(
    family_id: str,
    db: Session = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
):
    ensure_family_access(session, family_id)
    try:
        return FamilyDetail.model_validate(get_family_or_404(db, family_id))
    except HTTPException as e:
        raise e
    except Exception:
        logger.exception("Get family error")
        raise InternalError()


@router.delete("/{family_id}", response_model=MessageResponse)
def delete_existing_family(
    family_id: str,
    db: Session = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
):
    ensure_family_admin(session, family_id)
    try:
        return delete_family(db, family_id)
    except HTTPException as e:
        raise e
    except Exception:
        logger.exception("Delete family error")
        raise InternalError()


@router.post("/{family_id}/admins", response_model=AdminSummary, status_code=status.HTTP_201_CREATED)
def create_admin(
    family_id: str,
    payload: AdminCreate,
    db: Session = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
):
    ensure_family_admin(session, family_id)
    try:
        return AdminSummary.model_validate(add_admin(db, session, family_id, payload))
    except HTTPException as e:
        raise e
    except Exception:
        logger.exception("Add admin error")
        raise InternalError()


@router.delete("/{family_id}/admins/{admin_id}", response_model=MessageResponse)
def delete_admin(
    family_id: str,
    admin_id: str,
    db: Session = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
):
    ensure_family_admin(session, family_id)
    try:
        return remove_admin(db, session, family_id, admin_id)
    except HTTPException as e:
        raise e
    except Exception:
        logger.exception("Remove admin error")
        raise InternalError()


@router.get("/{family_id}/activity", response_model=List[ActivityLogResponse])
def read_family_activity(
    family_id: str,
    limit: int = Query(50, ge=1, le=500, description="Most recent entries to return"),
    db: Session = Depends(get_db),
    session: SessionClaims = Depends(get_current_session),
):
    ensure_family_admin(session, family_id)
    try:
        return get_family_activity(db, family_id, limit=limit)
    except HTTPException as e:
        raise e
    except Exception:
        logger.exception("Get family activity error")
        raise InternalError()
