"""
User model for authentication and job applications.

The username is the primary key: immutable and globally unique, so
duplicate registrations are rejected by the store itself.
"""

from sqlalchemy import Boolean, Column, String, text
from sqlalchemy.orm import relationship
from jobly.core.database import Base


class User(Base):
    """User account. Passwords are only ever stored as bcrypt hashes."""
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)

    # User profile
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False)

    # Authentication credentials
    hashed_password = Column(String, nullable=False)
    is_admin = Column(Boolean, default=False, server_default=text("false"), nullable=False)

    # Relationships
    applications = relationship("Application", back_populates="user", cascade="all, delete-orphan")

    @property
    def jobs(self):
        """Ids of the jobs this user has an application for."""
        return sorted(application.job_id for application in self.applications)

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
