"""Session identity handed to the workflows.

Sign-in happens at the identity provider; this service only receives the
signed session token it issues and turns it into a SessionUser. A missing
or invalid token yields None, the well-defined unauthenticated state.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

import jwt
from fastapi import Header

from src.config.settings import settings
from src.errors import UnauthenticatedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    user_id: str
    name: str | None = None
    email: str | None = None


class SessionConfig(Protocol):
    secret_key: str
    algorithm: str


def decode_session_token(token: str, config: SessionConfig = settings) -> SessionUser | None:
    try:
        claims = jwt.decode(token, config.secret_key, algorithms=[config.algorithm])
    except jwt.PyJWTError as e:
        logger.warning("Rejected session token: %s", e)
        return None

    user_id = claims.get("sub")
    if not user_id:
        logger.warning("Rejected session token without subject")
        return None

    return SessionUser(
        user_id=str(user_id),
        name=claims.get("name"),
        email=claims.get("email"),
    )


def get_session_user(authorization: str | None = Header(default=None)) -> SessionUser | None:
    """Dependency resolving the bearer token, if any, into a SessionUser."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return decode_session_token(token.strip())


def require_session(session: SessionUser | None, login_url: str = settings.login_url) -> SessionUser:
    """Return the session or raise UnauthenticatedError pointing at the sign-in page."""
    if session is None or not session.user_id:
        raise UnauthenticatedError(login_url=login_url)
    return session
