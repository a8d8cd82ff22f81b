"""
CRUD operations for User model, authentication and job applications.

Duplicate usernames and duplicate applications are ultimately rejected by
the primary keys in the store; IntegrityError is mapped to ConflictError
so concurrent writers get the same error as sequential ones.
"""

import logging
from typing import List
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from psycopg2 import errorcodes
from jobly.core.exceptions import BadRequestError, ConflictError, NotFoundError, UnauthorizedError
from jobly.core.security import get_password_hash, verify_password
from jobly.core.sql import bind_positional, sql_for_partial_update
from jobly.models.application import Application, ApplicationState
from jobly.models.job import Job
from jobly.models.user import User

logger = logging.getLogger(__name__)

# Wire field name -> users column, for the fields a user update may touch
UPDATABLE_COLUMNS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "password": "hashed_password",
    "email": "email",
}


def authenticate(db: Session, username: str, password: str) -> User:
    """
    Check a username/password pair.

    Unknown usernames and wrong passwords raise the same error so callers
    cannot probe which usernames exist.

    Raises:
        UnauthorizedError: If the credentials do not match
    """
    user = db.query(User).filter(User.username == username).first()
    if user and verify_password(password, user.hashed_password):
        return user

    logger.warning(f"Failed login attempt for username '{username}'")
    raise UnauthorizedError("Invalid username/password")


def register(
    db: Session,
    username: str,
    password: str,
    first_name: str,
    last_name: str,
    email: str,
    is_admin: bool = False,
) -> User:
    """
    Create a user with a hashed password.

    Raises:
        ConflictError: If the username is taken
    """
    if db.query(User).filter(User.username == username).first():
        raise ConflictError(f"Duplicate username: {username}")

    user = User(
        username=username,
        hashed_password=get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        email=email,
        is_admin=is_admin,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Duplicate username: {username}")
    db.refresh(user)

    logger.info(f"Registered user {username} (admin: {is_admin})")
    return user


def find_all(db: Session) -> List[User]:
    """All users ordered by username, with their applications loaded in one query."""
    return (
        db.query(User)
        .options(selectinload(User.applications))
        .order_by(User.username)
        .all()
    )


def get(db: Session, username: str) -> User:
    """
    Retrieve a user (with applications) by username.

    Raises:
        NotFoundError: If no such user
    """
    user = (
        db.query(User)
        .options(selectinload(User.applications))
        .filter(User.username == username)
        .first()
    )
    if not user:
        raise NotFoundError(f"No user: {username}")
    return user


def update(db: Session, username: str, data: dict) -> User:
    """
    Apply a partial update to firstName, lastName, password and/or email.

    A new password is hashed before it is stored.

    Raises:
        BadRequestError: If data is empty or names a non-updatable field
        NotFoundError: If no such user
    """
    unknown = set(data) - set(UPDATABLE_COLUMNS)
    if unknown:
        raise BadRequestError(f"Cannot update user fields: {sorted(unknown)}")

    data = dict(data)
    if "password" in data:
        data["password"] = get_password_hash(data["password"])

    set_cols, values = sql_for_partial_update(data, UPDATABLE_COLUMNS)
    statement, params = bind_positional(
        f"UPDATE users SET {set_cols} WHERE username = ${len(values) + 1}",
        [*values, username],
    )

    result = db.execute(text(statement), params)
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No user: {username}")
    db.commit()

    logger.info(f"Updated user {username}: {sorted(data)}")
    return get(db, username)


def remove(db: Session, username: str) -> None:
    """
    Delete a user and their applications.

    Raises:
        NotFoundError: If no such user
    """
    user = get(db, username)

    db.delete(user)
    db.commit()

    logger.info(f"Deleted user {username}")


def apply_for_job(db: Session, username: str, job_id: int, state: str = ApplicationState.APPLIED.value) -> int:
    """
    Record a user's application to a job.

    Args:
        db: Database session
        username: Applicant
        job_id: Job applied for
        state: One of ApplicationState's values (default "applied")

    Returns:
        The job id

    Raises:
        BadRequestError: If state is not a known application state
        NotFoundError: If the user or the job does not exist
        ConflictError: If the user already has an application for the job
    """
    try:
        application_state = ApplicationState(state)
    except ValueError:
        allowed = ", ".join(s.value for s in ApplicationState)
        raise BadRequestError(f"Invalid application state: {state} (expected one of: {allowed})")

    _check_applicant_and_job(db, username, job_id)
    if db.get(Application, (username, job_id)) is not None:
        raise ConflictError(f"{username} already has an application for job {job_id}")

    db.add(Application(username=username, job_id=job_id, state=application_state))
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if _is_foreign_key_violation(exc):
            # The user or the job was deleted after the existence check
            _check_applicant_and_job(db, username, job_id)
            raise
        raise ConflictError(f"{username} already has an application for job {job_id}")

    logger.info(f"User {username} -> job {job_id}: {application_state.value}")
    return job_id


def _check_applicant_and_job(db: Session, username: str, job_id: int) -> None:
    if not db.query(User.username).filter(User.username == username).first():
        raise NotFoundError(f"No username: {username}")
    if not db.query(Job.id).filter(Job.id == job_id).first():
        raise NotFoundError(f"No job: {job_id}")


def _is_foreign_key_violation(exc: IntegrityError) -> bool:
    """PostgreSQL reports SQLSTATE 23503; SQLite only says so in the message."""
    if getattr(exc.orig, "pgcode", None) == errorcodes.FOREIGN_KEY_VIOLATION:
        return True
    return "FOREIGN KEY" in str(exc.orig).upper()
