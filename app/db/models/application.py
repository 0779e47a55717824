from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base import Base


class JobApplication(Base):
    """
    A user's application to a job.

    company_id is copied from the job when the application is created.
    (user_id, job_id) is kept unique by the apply service, not by the schema.
    """
    __tablename__ = "job_applications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    status = Column(String, default="pending", nullable=False)
    date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User")
    job = relationship("Job")
    company = relationship("Company")

    __table_args__ = (
        Index("idx_applications_user_job", "user_id", "job_id"),
    )
