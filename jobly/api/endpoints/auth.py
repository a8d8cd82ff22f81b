"""
Authentication endpoints.

- POST /auth/token: Exchange username/password for a JWT
- POST /auth/register: Create a new account and receive a JWT
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobly.core.config import Settings
from jobly.core.database import get_db
from jobly.core.deps import Identity, get_current_identity, get_settings
from jobly.core.exceptions import UnauthorizedError
from jobly.core.security import create_token
from jobly.crud import user as user_crud
from jobly.schemas.user import TokenResponse, UserAuthRequest, UserRegisterRequest

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def get_token(
    request: UserAuthRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Authenticate a user and return a JWT for further requests.

    Authorization required: none
    """
    user = user_crud.authenticate(db, request.username, request.password)
    logger.info(f"User logged in: {user.username}")
    return TokenResponse(token=create_token(user, settings))


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=TokenResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    """
    Register a new user account and return a JWT.

    Anyone may register. Only an authenticated admin may register
    another admin (isAdmin: true); everyone else gets isAdmin: false.
    """
    if request.is_admin and (identity is None or not identity.is_admin):
        raise UnauthorizedError("Only admins can register new admins.")

    new_user = user_crud.register(
        db,
        username=request.username,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        is_admin=bool(request.is_admin),
    )
    return TokenResponse(token=create_token(new_user, settings))
