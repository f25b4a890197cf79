from datetime import datetime, timedelta, timezone
from enum import Enum

from jose import JWTError, ExpiredSignatureError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from chore_calendar.core.config import settings

# Password hashing setup
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)


class InvalidToken(Exception):
    """Token signature, format or claims are not acceptable."""


class ExpiredToken(InvalidToken):
    """Token was valid but its lifetime is over."""


class PrincipalRole(str, Enum):
    admin = "admin"
    member = "member"


class SessionClaims(BaseModel):
    """Who a token speaks for: an admin or a member of exactly one family."""

    principal_id: str
    family_id: str
    role: PrincipalRole

    @property
    def is_admin(self) -> bool:
        return self.role == PrincipalRole.admin


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        # Unknown or corrupt hash format
        return False


def create_access_token(claims: SessionClaims, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {
        "sub": claims.principal_id,
        "familyId": claims.family_id,
        "role": claims.role.value,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> SessionClaims:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError as e:
        raise ExpiredToken("Token has expired") from e
    except JWTError as e:
        raise InvalidToken("Token could not be decoded") from e

    principal_id = payload.get("sub")
    family_id = payload.get("familyId")
    role = payload.get("role")
    if not principal_id or not family_id or role not in {r.value for r in PrincipalRole}:
        raise InvalidToken("Token is missing required claims")

    return SessionClaims(principal_id=principal_id, family_id=family_id, role=PrincipalRole(role))
