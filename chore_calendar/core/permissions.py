import logging

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from chore_calendar.core.exceptions import AuthenticationError, AuthorizationError
from chore_calendar.core.security import SessionClaims, ExpiredToken, InvalidToken, verify_token

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is a 401 like any other bad token
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> SessionClaims:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token required")
    try:
        return verify_token(credentials.credentials)
    except ExpiredToken:
        logger.debug("Rejected expired token")
        raise AuthenticationError("Invalid or expired token")
    except InvalidToken:
        logger.debug("Rejected invalid token")
        raise AuthenticationError("Invalid or expired token")


def ensure_family_access(session: SessionClaims, family_id: str) -> SessionClaims:
    if session.family_id != family_id:
        raise AuthorizationError("Access denied")
    return session


def ensure_family_admin(session: SessionClaims, family_id: str) -> SessionClaims:
    if not session.is_admin or session.family_id != family_id:
        raise AuthorizationError("Admin access required")
    return session
