"""
Pydantic schemas for job endpoints.
"""
from datetime import datetime
from pydantic import BaseModel, Field

from app.schemas.company import CompanyPublic


class JobCreate(BaseModel):
    """Schema for posting a new job."""
    title: str = Field(..., min_length=1, max_length=255, description="Job title")
    description: str = Field(..., min_length=1, description="Job description (HTML allowed)")
    location: str = Field(..., min_length=1, description="Job location")
    salary: int = Field(..., ge=0, description="Yearly salary")
    level: str = Field(..., min_length=1, description="Seniority level")
    category: str = Field(..., min_length=1, description="Job category")

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Engineer",
                "description": "<p>Build things.</p>",
                "location": "Bangalore",
                "salary": 120000,
                "level": "Intermediate level",
                "category": "Programming"
            }
        }


class JobResponse(BaseModel):
    """A job as stored, with its owner referenced by id."""
    id: int = Field(..., serialization_alias="_id")
    title: str
    description: str
    location: str
    salary: int
    level: str
    category: str
    company_id: int = Field(..., serialization_alias="companyId")
    visible: bool
    date: datetime

    class Config:
        from_attributes = True


class PublicJobResponse(JobResponse):
    """A job with its company joined in, as listed on the public board."""
    company: CompanyPublic = Field(..., serialization_alias="companyId")
    company_id: int = Field(..., exclude=True)


class PostedJobResponse(JobResponse):
    """A company's own job annotated with its live applicant count."""
    applicants: int = Field(0, description="Number of applications for this job")
