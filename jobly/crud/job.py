"""
CRUD operations for Job model.

Implements the Repository pattern to encapsulate all database operations
for jobs, providing a clean interface for the API layer.
"""

import logging
from typing import Dict, List, Optional
from sqlalchemy import bindparam, select, text
from sqlalchemy.orm import Session
from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.core.sql import bind_positional, sql_for_job_filters, sql_for_partial_update
from jobly.models.job import Job, Technology, job_technologies
from jobly.schemas.job import JobCreateRequest

logger = logging.getLogger(__name__)

# Fields a job update may touch; company_handle is deliberately absent
UPDATABLE_COLUMNS = {
    "title": "title",
    "salary": "salary",
    "equity": "equity",
}


def create(db: Session, job_data: JobCreateRequest) -> Job:
    """
    Create a new job in the database.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        Created Job instance with id
    """
    db_job = Job(
        title=job_data.title,
        salary=job_data.salary,
        equity=job_data.equity,
        company_handle=job_data.company_handle,
    )

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    logger.info(f"Created job {db_job.id}: {db_job.title} ({db_job.company_handle})")
    return db_job


def find_all(
    db: Session,
    title: Optional[str] = None,
    min_salary: Optional[int] = None,
    has_equity: Optional[bool] = None,
) -> List[Job]:
    """
    Retrieve jobs matching the optional filters, ordered by title.

    Args:
        db: Database session
        title: Case-insensitive substring of the title
        min_salary: Inclusive lower bound on salary
        has_equity: True restricts to jobs offering equity

    Returns:
        List of Job instances
    """
    where, values = sql_for_job_filters(title=title, min_salary=min_salary, has_equity=has_equity)
    statement, params = bind_positional(
        f"SELECT id, title, salary, equity, company_handle FROM jobs {where} ORDER BY title, id",
        values,
    )
    query = text(statement).bindparams(**params).columns(*Job.__table__.columns)
    return list(db.scalars(select(Job).from_statement(query)))


def get_all_technologies(db: Session) -> Dict[int, List[str]]:
    """
    Fetch technology names for every job in a single query.

    Returns:
        Mapping of job id -> technology names (jobs without tags are absent)
    """
    rows = (
        db.query(job_technologies.c.job_id, Technology.name)
        .join(Technology, job_technologies.c.technology_id == Technology.id)
        .order_by(job_technologies.c.job_id, Technology.name)
        .all()
    )

    tech_map: Dict[int, List[str]] = {}
    for job_id, name in rows:
        tech_map.setdefault(job_id, []).append(name)
    return tech_map


def get(db: Session, job_id: int) -> Job:
    """
    Retrieve a job by its ID.

    Raises:
        NotFoundError: If no job has this id
    """
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise NotFoundError(f"No job found with id: {job_id}")
    return job


def update(db: Session, job_id: int, data: dict) -> Job:
    """
    Apply a partial update to title, salary and/or equity.

    Args:
        db: Database session
        job_id: Job ID to update
        data: Subset of {"title", "salary", "equity"}

    Returns:
        Updated Job instance

    Raises:
        BadRequestError: If data is empty or names a non-updatable field
        NotFoundError: If no job has this id
    """
    unknown = set(data) - set(UPDATABLE_COLUMNS)
    if unknown:
        raise BadRequestError(f"Cannot update job fields: {sorted(unknown)}")

    set_cols, values = sql_for_partial_update(data, UPDATABLE_COLUMNS)
    statement, params = bind_positional(
        f"UPDATE jobs SET {set_cols} WHERE id = ${len(values) + 1}",
        [*values, job_id],
    )

    # Typed binds so equity reaches the driver as an exact decimal
    column_types = [Job.__table__.c[UPDATABLE_COLUMNS[name]].type for name in data]
    query = text(statement).bindparams(
        *(bindparam(f"p{idx}", type_=type_) for idx, type_ in enumerate(column_types, start=1))
    )

    result = db.execute(query, params)
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No job found with id: {job_id}")
    db.commit()

    logger.info(f"Updated job {job_id}: {sorted(data)}")
    return get(db, job_id)


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: If no job has this id
    """
    job = get(db, job_id)

    db.delete(job)
    db.commit()

    logger.info(f"Deleted job {job_id}")
