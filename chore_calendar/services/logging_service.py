from sqlalchemy.orm import Session
from typing import Optional, Dict, Any, List

from chore_calendar.core.security import SessionClaims, PrincipalRole
from chore_calendar.models.activity_log import ActivityLog


class LoggingService:
    """Service for recording who changed what inside a family"""

    @staticmethod
    def log_activity(
        db: Session,
        session: SessionClaims,
        action: str,
        description: str,
        table_name: Optional[str] = None,
        record_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        family_id: Optional[str] = None,
    ) -> ActivityLog:
        """
        Log a family activity

        Args:
            db: Database session
            session: Claims of the admin or member who acted
            action: Action type (CREATE, UPDATE, DELETE, LOGIN)
            description: Human-readable description of the action
            table_name: Name of the table affected
            record_id: ID of the record affected
            details: Additional context as dictionary
            family_id: Family to file the entry under, defaults to the session's
        """
        log_entry = ActivityLog(
            family_id=family_id or session.family_id,
            principal_id=session.principal_id,
            principal_role=session.role.value,
            action=action.upper(),
            description=description,
            table_name=table_name,
            record_id=record_id,
            details=details,
        )

        db.add(log_entry)
        db.commit()
        db.refresh(log_entry)

        return log_entry

    @staticmethod
    def log_family_creation(db: Session, family, admin) -> ActivityLog:
        return LoggingService.log_activity(
            db=db,
            session=SessionClaims(principal_id=admin.id, family_id=family.id, role=PrincipalRole.admin),
            action="CREATE",
            description=f"Created family: {family.name}",
            table_name="families",
            record_id=family.id,
        )

    @staticmethod
    def log_login(db: Session, session: SessionClaims) -> ActivityLog:
        return LoggingService.log_activity(
            db=db,
            session=session,
            action="LOGIN",
            description=f"{session.role.value.capitalize()} logged in",
            table_name="admins" if session.is_admin else "people",
            record_id=session.principal_id,
        )

    @staticmethod
    def get_family_activity(db: Session, family_id: str, limit: int = 50) -> List[ActivityLog]:
        return (
            db.query(ActivityLog)
            .filter(ActivityLog.family_id == family_id)
            .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
            .limit(limit)
            .all()
        )
