import logging
from typing import List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from chore_calendar.core.exceptions import ValidationError, NotFoundError, ConflictError
from chore_calendar.core.security import SessionClaims, PrincipalRole, get_password_hash
from chore_calendar.models import Family, Admin, Chore, ActivityLog
from chore_calendar.models.chore import chore_label_key
from chore_calendar.schemas.family import FamilyCreate, AdminCreate
from chore_calendar.services.logging_service import LoggingService
from chore_calendar.utils.identifiers import generate_id
from chore_calendar.utils.logging_decorator import log_create, log_delete
from chore_calendar.utils.validation import clean_text, is_blank

logger = logging.getLogger(__name__)

DEFAULT_CHORES = ("Dishes", "Trash", "Laundry", "Vacuum")


def get_family_or_404(db: Session, family_id: str) -> Family:
    family = db.query(Family).filter(Family.id == family_id).first()
    if not family:
        raise NotFoundError("Family not found")
    return family


def create_family(db: Session, payload: FamilyCreate) -> Tuple[Family, Admin]:
    """Create a family, its first admin and the default chores in one transaction."""
    name = clean_text(payload.name)
    admin_email = clean_text(payload.admin_email)
    if not name or not admin_email or is_blank(payload.admin_password):
        raise ValidationError("Family name, admin email, and password required")

    family = Family(id=generate_id(name), name=name)
    admin = Admin(
        id=generate_id("admin"),
        email=admin_email,
        password_hash=get_password_hash(payload.admin_password),
    )
    family.admins.append(admin)
    family.chores.extend(
        Chore(id=generate_id(label), label=label, label_key=chore_label_key(label)) for label in DEFAULT_CHORES
    )

    try:
        db.add(family)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(family)
    logger.info(f"Created family {family.id} with admin {admin.id}")

    try:
        LoggingService.log_family_creation(db, family, admin)
    except Exception as e:
        logger.error(f"Failed to log family creation for {family.id}: {e}")
        db.rollback()
    return family, admin


def delete_family(db: Session, family_id: str) -> dict:
    family = get_family_or_404(db, family_id)

    db.delete(family)
    db.commit()
    logger.info(f"Deleted family {family_id} and everything it owned")
    return {"message": "Family deleted successfully"}


@log_create("admins", "Added admin")
def add_admin(db: Session, session: SessionClaims, family_id: str, payload: AdminCreate) -> Admin:
    email = clean_text(payload.email)
    if not email or is_blank(payload.password):
        raise ValidationError("Email and password required")

    get_family_or_404(db, family_id)

    existing = db.query(Admin).filter(Admin.family_id == family_id, Admin.email == email).first()
    if existing:
        raise ConflictError("Admin with this email already exists")

    admin = Admin(
        id=generate_id("admin"),
        family_id=family_id,
        email=email,
        password_hash=get_password_hash(payload.password),
    )
    db.add(admin)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Admin with this email already exists")

    db.refresh(admin)
    return admin


@log_delete("admins", "admin_id", "Removed admin")
def remove_admin(db: Session, session: SessionClaims, family_id: str, admin_id: str) -> dict:
    admin_count = db.query(Admin).filter(Admin.family_id == family_id).count()
    if admin_count <= 1:
        raise ValidationError("Cannot remove the last admin")

    if session.role == PrincipalRole.admin and session.principal_id == admin_id:
        raise ValidationError("Cannot remove yourself")

    admin = db.query(Admin).filter(Admin.id == admin_id, Admin.family_id == family_id).first()
    if not admin:
        raise NotFoundError("Admin not found")

    db.delete(admin)
    db.commit()
    return {"message": "Admin removed successfully"}


def get_family_activity(db: Session, family_id: str, limit: int = 50) -> List[ActivityLog]:
    get_family_or_404(db, family_id)
    return LoggingService.get_family_activity(db, family_id, limit=limit)
