"""
Database models package.
"""

from jobly.models.user import User
from jobly.models.job import Job, Technology, job_technologies
from jobly.models.application import Application, ApplicationState

__all__ = ["User", "Job", "Technology", "job_technologies", "Application", "ApplicationState"]
