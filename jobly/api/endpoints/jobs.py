import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import require_admin
from jobly.crud import job as job_crud
from jobly.schemas.job import (
    JobCreateRequest,
    JobDeletedResponse,
    JobEnvelope,
    JobListEnvelope,
    JobListItem,
    JobResponse,
    JobUpdateRequest,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=JobEnvelope,
    dependencies=[Depends(require_admin)],
)
def create_job(request: JobCreateRequest, db: Session = Depends(get_db)):
    """
    Create a new job posting.

    Authorization required: admin
    """
    job = job_crud.create(db, request)
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.get("", response_model=JobListEnvelope)
def list_jobs(
    title: Optional[str] = None,
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[str] = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db),
):
    """
    List jobs ordered by title, each with its technologies.

    Filters (all optional, combined with AND):
    - title: case-insensitive partial match
    - minSalary: minimum salary
    - hasEquity: "true" -> only jobs offering equity; any other value applies no equity filter

    Authorization required: none
    """
    jobs = job_crud.find_all(db, title=title, min_salary=min_salary, has_equity=has_equity == "true")
    tech_map = job_crud.get_all_technologies(db)

    return JobListEnvelope(jobs=[
        JobListItem(
            **JobResponse.model_validate(job).model_dump(),
            technologies=tech_map.get(job.id, []),
        )
        for job in jobs
    ])


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a job by ID.

    Authorization required: none
    """
    job = job_crud.get(db, job_id)
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.patch("/{job_id}", response_model=JobEnvelope, dependencies=[Depends(require_admin)])
def update_job(job_id: int, request: JobUpdateRequest, db: Session = Depends(get_db)):
    """
    Update title, salary and/or equity. companyHandle cannot change.

    Authorization required: admin
    """
    job = job_crud.update(db, job_id, request.model_dump(exclude_unset=True))
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.delete("/{job_id}", response_model=JobDeletedResponse, dependencies=[Depends(require_admin)])
def delete_job(job_id: int, db: Session = Depends(get_db)):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    job_crud.remove(db, job_id)
    return JobDeletedResponse(deleted=job_id)
