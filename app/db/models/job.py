from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base import Base


class Job(Base):
    """A job posting owned by a company."""
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String, nullable=False)
    salary = Column(Integer, nullable=False)
    level = Column(String, nullable=False)
    category = Column(String, nullable=False)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    visible = Column(Boolean, default=True, nullable=False)
    date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    company = relationship("Company", back_populates="jobs")

    __table_args__ = (
        Index("idx_jobs_company_date", "company_id", "date"),
    )

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', company_id={self.company_id})>"
