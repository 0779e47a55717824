"""
Pydantic schemas for job applications, in the two joined shapes clients read.
"""
from datetime import datetime
from pydantic import BaseModel, Field

from app.schemas.company import CompanySummary


class ApplicantUser(BaseModel):
    id: str = Field(..., serialization_alias="_id")
    name: str
    image: str
    email: str
    resume: str = ""

    class Config:
        from_attributes = True


class ApplicantJob(BaseModel):
    id: int = Field(..., serialization_alias="_id")
    title: str
    location: str
    category: str
    level: str
    salary: int

    class Config:
        from_attributes = True


class AppliedJob(ApplicantJob):
    description: str


class ApplicationResponse(BaseModel):
    """A stored application with plain id references."""
    id: int = Field(..., serialization_alias="_id")
    user_id: str = Field(..., serialization_alias="userId")
    job_id: int = Field(..., serialization_alias="jobId")
    company_id: int = Field(..., serialization_alias="companyId")
    status: str
    date: datetime

    class Config:
        from_attributes = True


class ApplicantResponse(BaseModel):
    """An application as a company sees it: applicant and job joined in."""
    id: int = Field(..., serialization_alias="_id")
    user: ApplicantUser = Field(..., serialization_alias="userId")
    job: ApplicantJob = Field(..., serialization_alias="jobId")
    company_id: int = Field(..., serialization_alias="companyId")
    status: str
    date: datetime

    class Config:
        from_attributes = True


class UserApplicationResponse(BaseModel):
    """An application as the applicant sees it: job and company joined in."""
    id: int = Field(..., serialization_alias="_id")
    user_id: str = Field(..., serialization_alias="userId")
    job: AppliedJob = Field(..., serialization_alias="jobId")
    company: CompanySummary = Field(..., serialization_alias="companyId")
    status: str
    date: datetime

    class Config:
        from_attributes = True
