from sqlalchemy import Column, ForeignKey, Integer, String, Table, CheckConstraint
from sqlalchemy.orm import relationship
from jobly.core.database import Base
from jobly.models.types import ExactDecimal


# Many-to-many link between jobs and technologies
job_technologies = Table(
    "job_technologies",
    Base.metadata,
    Column("job_id", Integer, ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True),
    Column("technology_id", Integer, ForeignKey("technologies.id", ondelete="CASCADE"), primary_key=True),
)


class Job(Base):
    """
    Job posting.

    equity is an exact decimal (NUMERIC in PostgreSQL); it is
    serialized back to clients as a string.
    """
    __tablename__ = "jobs"
    __table_args__ = (
        CheckConstraint("salary >= 0", name="ck_jobs_salary_non_negative"),
        CheckConstraint("equity <= 1.0", name="ck_jobs_equity_max"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    salary = Column(Integer, nullable=True)
    equity = Column(ExactDecimal, nullable=True)

    # Set once on creation; the update path never touches it
    company_handle = Column(String(25), nullable=False, index=True)

    # Relationships
    technologies = relationship("Technology", secondary=job_technologies, back_populates="jobs")
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', company_handle='{self.company_handle}')>"


class Technology(Base):
    """Technology tag (e.g. Python, PostgreSQL) attached to jobs."""
    __tablename__ = "technologies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)

    jobs = relationship("Job", secondary=job_technologies, back_populates="technologies")

    def __repr__(self):
        return f"<Technology(id={self.id}, name='{self.name}')>"
