"""
User management endpoints.

POST /users is the admin path for adding accounts (possibly admins); the
public path is POST /auth/register.
"""

import logging
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobly.core.config import Settings
from jobly.core.database import get_db
from jobly.core.deps import require_admin, require_admin_or_self, get_settings
from jobly.core.security import create_token, generate_password
from jobly.crud import user as user_crud
from jobly.models.application import ApplicationState
from jobly.schemas.user import (
    ApplicationResponse,
    UserCreatedResponse,
    UserDeletedResponse,
    UserDetailResponse,
    UserEnvelope,
    UserListEnvelope,
    UserNewRequest,
    UserResponse,
    UserUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserCreatedResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
)
def create_user(
    request: UserNewRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Add a new user and return it with a token for them.

    If no password is given a random one is generated and returned once
    as tempPassword.

    Authorization required: admin
    """
    temp_password = None
    password = request.password
    if not password:
        password = temp_password = generate_password()

    user = user_crud.register(
        db,
        username=request.username,
        password=password,
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        is_admin=request.is_admin,
    )

    return UserCreatedResponse(
        user=UserResponse.model_validate(user),
        token=create_token(user, settings),
        temp_password=temp_password,
    )


@router.post(
    "/{username}/jobs/{job_id}",
    response_model=ApplicationResponse,
    dependencies=[Depends(require_admin_or_self)],
)
def apply_for_job(
    username: str,
    job_id: int,
    state: ApplicationState = Query(ApplicationState.APPLIED),
    db: Session = Depends(get_db),
):
    """
    Record that a user applied for (or is interested in) a job.

    Authorization required: admin or same user
    """
    applied = user_crud.apply_for_job(db, username, job_id, state.value)
    return ApplicationResponse(applied=applied)


@router.get("", response_model=UserListEnvelope, dependencies=[Depends(require_admin)])
def list_users(db: Session = Depends(get_db)):
    """
    List all users with the ids of the jobs they applied for.

    Authorization required: admin
    """
    users = user_crud.find_all(db)
    return UserListEnvelope(users=[UserDetailResponse.model_validate(u) for u in users])


@router.get("/{username}", response_model=UserEnvelope, dependencies=[Depends(require_admin_or_self)])
def get_user(username: str, db: Session = Depends(get_db)):
    """
    Authorization required: admin or same user
    """
    user = user_crud.get(db, username)
    return UserEnvelope(user=UserDetailResponse.model_validate(user))


@router.patch("/{username}", response_model=UserEnvelope, dependencies=[Depends(require_admin_or_self)])
def update_user(username: str, request: UserUpdateRequest, db: Session = Depends(get_db)):
    """
    Update any of firstName, lastName, password, email.

    Authorization required: admin or same user
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    user = user_crud.update(db, username, data)
    return UserEnvelope(user=UserDetailResponse.model_validate(user))


@router.delete("/{username}", response_model=UserDeletedResponse, dependencies=[Depends(require_admin_or_self)])
def delete_user(username: str, db: Session = Depends(get_db)):
    """
    Authorization required: admin or same user
    """
    user_crud.remove(db, username)
    return UserDeletedResponse(deleted=username)
