"""
Database models module.

Imports every model so it is registered with Base.metadata before table creation.
"""
from app.db.models.company import Company
from app.db.models.job import Job
from app.db.models.user import User
from app.db.models.application import JobApplication

__all__ = [
    "Company",
    "Job",
    "User",
    "JobApplication",
]
