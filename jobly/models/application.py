import enum
from sqlalchemy import Column, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from jobly.core.database import Base


class ApplicationState(str, enum.Enum):
    """
    Where a user stands with a job.

    - INTERESTED: bookmarked, not applied yet
    - APPLIED: application submitted (default)
    - ACCEPTED: offer received
    - REJECTED: application turned down
    """
    INTERESTED = "interested"
    APPLIED = "applied"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Application(Base):
    """
    A user's application to a job.

    The (username, job_id) primary key allows at most one application
    per user and job.
    """
    __tablename__ = "applications"

    username = Column(String(25), ForeignKey("users.username", ondelete="CASCADE"), primary_key=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True)
    state = Column(
        Enum(
            ApplicationState,
            name="application_state",
            values_callable=lambda states: [s.value for s in states],
            create_constraint=True,
        ),
        default=ApplicationState.APPLIED,
        nullable=False,
    )

    # Relationships
    user = relationship("User", back_populates="applications")
    job = relationship("Job", back_populates="applications")

    def __repr__(self):
        return f"<Application(username='{self.username}', job_id={self.job_id}, state={self.state.value})>"
