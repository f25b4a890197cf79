import logging
from typing import Tuple

from sqlalchemy.orm import Session

from chore_calendar.core.exceptions import ValidationError, AuthenticationError, NotFoundError
from chore_calendar.core.security import SessionClaims, PrincipalRole, create_access_token, verify_password
from chore_calendar.models import Admin, Person
from chore_calendar.schemas.auth import AdminLoginRequest, MemberLoginRequest
from chore_calendar.services.logging_service import LoggingService
from chore_calendar.utils.validation import clean_text, is_blank

logger = logging.getLogger(__name__)


def admin_session(admin: Admin) -> SessionClaims:
    return SessionClaims(principal_id=admin.id, family_id=admin.family_id, role=PrincipalRole.admin)


def member_session(person: Person) -> SessionClaims:
    return SessionClaims(principal_id=person.id, family_id=person.family_id, role=PrincipalRole.member)


def _record_login(db: Session, session: SessionClaims) -> None:
    try:
        LoggingService.log_login(db, session)
    except Exception as e:
        logger.error(f"Failed to log login for {session.principal_id}: {e}")
        db.rollback()


def login_admin(db: Session, payload: AdminLoginRequest) -> Tuple[str, Admin]:
    email = clean_text(payload.email)
    if not email or is_blank(payload.password):
        raise ValidationError("Email and password required")

    # The same email may administer several families; take the first whose password matches
    candidates = db.query(Admin).filter(Admin.email == email).order_by(Admin.created_at).all()
    admin = next((a for a in candidates if verify_password(payload.password, a.password_hash)), None)
    if admin is None:
        logger.info("Rejected admin login")
        raise AuthenticationError("Invalid email or password")

    session = admin_session(admin)
    token = create_access_token(session)
    _record_login(db, session)
    return token, admin


def login_member(db: Session, payload: MemberLoginRequest) -> Tuple[str, Person]:
    """Members sign in with their email alone and get a read-only session."""
    email = clean_text(payload.email)
    if not email:
        raise ValidationError("Email required")

    person = db.query(Person).filter(Person.email == email).order_by(Person.created_at).first()
    if not person:
        raise NotFoundError("No account found with that email address")

    session = member_session(person)
    token = create_access_token(session)
    _record_login(db, session)
    return token, person
