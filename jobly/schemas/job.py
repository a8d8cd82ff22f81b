from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    title: str = Field(..., min_length=1, max_length=200)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdateRequest(BaseModel):
    """
    Schema for updating a job.

    company_handle is not accepted: a job never moves between companies.
    """
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v):
        if v is None:
            raise ValueError("title may not be null")
        return v


class JobResponse(BaseModel):
    """Schema for job response"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None
    company_handle: str

    @field_serializer("equity")
    def serialize_equity(self, equity: Optional[Decimal]) -> Optional[str]:
        """NUMERIC goes out as a plain string ("0.2") so no precision is lost."""
        if equity is None:
            return None
        return format(Decimal(equity).normalize(), "f")


class JobListItem(JobResponse):
    """Job in a listing, annotated with its technology names"""
    technologies: List[str] = []


class JobEnvelope(BaseModel):
    job: JobResponse


class JobListEnvelope(BaseModel):
    jobs: List[JobListItem]


class JobDeletedResponse(BaseModel):
    deleted: int
