from functools import wraps
import inspect
from typing import Optional, Callable, Any
import logging

from sqlalchemy.orm import Session

from chore_calendar.core.security import SessionClaims
from chore_calendar.services.logging_service import LoggingService

# Decorators that file an activity log entry after a controller call succeeds.
# The controller must take the SQLAlchemy session and the acting SessionClaims
# among its arguments; a call that raises is not logged.

logger = logging.getLogger(__name__)


def log_activity(
    action: str,
    description: Optional[str] = None,
    table_name: Optional[str] = None,
    get_record_id: Optional[Callable] = None,
    get_details: Optional[Callable] = None,
):
    """
    Decorator to log activities in controller functions

    Args:
        action: Action type (CREATE, UPDATE, DELETE)
        description: Custom description
        table_name: Table the controller writes to
        get_record_id: Function of (result, bound_arguments) returning the record ID
        get_details: Function of (result, bound_arguments) returning extra context
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            result = func(*args, **kwargs)

            db = None
            try:
                bound = signature.bind(*args, **kwargs).arguments
                db = next((value for value in bound.values() if isinstance(value, Session)), None)
                session = next((value for value in bound.values() if isinstance(value, SessionClaims)), None)

                if db is not None and session is not None:
                    record_id = get_record_id(result, bound) if get_record_id else None
                    details = get_details(result, bound) if get_details else None

                    LoggingService.log_activity(
                        db=db,
                        session=session,
                        action=action,
                        description=description or f"Performed {action.lower()} action",
                        table_name=table_name,
                        record_id=str(record_id) if record_id is not None else None,
                        details=details,
                    )
            except Exception as e:
                logger.error(f"Failed to log activity for {func.__name__}: {e}")
                if db is not None:
                    db.rollback()

            return result

        return wrapper

    return decorator


# Helper functions for common use cases
def extract_id_from_result(result: Any, bound: dict):
    """Extract ID from function result"""
    if hasattr(result, 'id'):
        return result.id
    if isinstance(result, dict) and 'id' in result:
        return result['id']
    if isinstance(result, (list, tuple)) and len(result) > 0:
        first_item = result[0]
        if hasattr(first_item, 'id'):
            return first_item.id
        if isinstance(first_item, dict) and 'id' in first_item:
            return first_item['id']
    return None


def extract_id_from_argument(name: str) -> Callable:
    """Read the record ID from one of the controller's own arguments"""
    def extractor(result: Any, bound: dict):
        return bound.get(name)
    return extractor


def log_create(table_name: str, description: Optional[str] = None, get_details: Optional[Callable] = None):
    """
    Decorator for CREATE operations

    Usage:
        @log_create("chores", "Added chore")
        def create_chore(db, session, family_id, payload):
            return created_chore
    """
    return log_activity(
        action="CREATE",
        description=description or f"Created new {table_name}",
        table_name=table_name,
        get_record_id=extract_id_from_result,
        get_details=get_details,
    )


def log_update(table_name: str, description: Optional[str] = None, get_details: Optional[Callable] = None):
    """Decorator for UPDATE operations"""
    return log_activity(
        action="UPDATE",
        description=description or f"Updated {table_name}",
        table_name=table_name,
        get_record_id=extract_id_from_result,
        get_details=get_details,
    )


def log_delete(table_name: str, id_argument: str, description: Optional[str] = None):
    """
    Decorator for DELETE operations

    Usage:
        @log_delete("people", "person_id", "Removed person")
        def delete_person(db, session, person_id):
            return {"message": "..."}
    """
    return log_activity(
        action="DELETE",
        description=description or f"Deleted {table_name}",
        table_name=table_name,
        get_record_id=extract_id_from_argument(id_argument),
    )
