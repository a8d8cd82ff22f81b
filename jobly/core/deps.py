"""
FastAPI dependencies for authentication and authorization.

Every request first passes through get_current_identity, which never fails:
a missing or invalid token just leaves the request anonymous. Routes then
list the policy they need (require_logged_in, require_admin,
require_admin_or_self) and the policy raises UnauthorizedError when the
identity does not satisfy it.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from jobly.core.config import Settings
from jobly.core.exceptions import UnauthorizedError
from jobly.core.security import decode_token

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>); absence is not an error
optional_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """Who is calling, as recovered from a verified token."""
    username: str
    is_admin: bool = False


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_bearer),
    settings: Settings = Depends(get_settings),
) -> Optional[Identity]:
    """
    Extract the caller's identity from the Authorization header.

    Returns None (anonymous) if no token was sent or it does not verify.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials, settings)
    except JWTError as e:
        logger.debug(f"Ignoring invalid bearer token: {e}")
        return None

    return Identity(username=payload["username"], is_admin=bool(payload.get("isAdmin", False)))


def require_logged_in(identity: Optional[Identity] = Depends(get_current_identity)) -> Identity:
    """
    Require any authenticated caller.

    Raises:
        UnauthorizedError: If the request is anonymous
    """
    if identity is None:
        raise UnauthorizedError()
    return identity


def require_admin(identity: Optional[Identity] = Depends(get_current_identity)) -> Identity:
    """
    Require an authenticated admin.

    Raises:
        UnauthorizedError: If anonymous or not an admin
    """
    if identity is None or not identity.is_admin:
        raise UnauthorizedError("Admin privileges required")
    return identity


def require_admin_or_self(
    username: str,
    identity: Optional[Identity] = Depends(get_current_identity),
) -> Identity:
    """
    Require an admin, or the user named by the route's {username}.

    Raises:
        UnauthorizedError: If anonymous, or neither admin nor that user
    """
    if identity is None:
        raise UnauthorizedError()
    if identity.is_admin or identity.username == username:
        return identity
    raise UnauthorizedError()
