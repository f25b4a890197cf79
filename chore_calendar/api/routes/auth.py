import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from chore_calendar.controllers.auth import login_admin, login_member
from chore_calendar.core.exceptions import InternalError
from chore_calendar.db.session import get_db
from chore_calendar.schemas.auth import (
    AdminLoginRequest,
    AdminLoginResponse,
    AdminSummary,
    MemberLoginRequest,
    MemberLoginResponse,
    PersonSummary,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/admin/login", response_model=AdminLoginResponse)
def admin_login(payload: AdminLoginRequest, db: Session = Depends(get_db)):
    try:
        token, admin = login_admin(db, payload)
        return AdminLoginResponse(token=token, admin=AdminSummary.model_validate(admin))
    except HTTPException as e:
        raise e
    except Exception:
        logger.exception("Admin login error")
        raise InternalError()


@router.post("/user/login", response_model=MemberLoginResponse)
def user_login(payload: MemberLoginRequest, db: Session = Depends(get_db)):
    try:
        token, person = login_member(db, payload)
        return MemberLoginResponse(token=token, person=PersonSummary.model_validate(person))
    except HTTPException as e:
        raise e
    except Exception:
        logger.exception("Member login error")
        raise InternalError()
