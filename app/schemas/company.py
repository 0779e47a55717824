"""
Pydantic schemas for company endpoints.
"""
from typing import Optional
from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Request schema for company login. Presence is checked by the service."""
    email: Optional[str] = Field(None, description="Company email")
    password: Optional[str] = Field(None, description="Company password")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "hr@acme.com",
                "password": "SecurePass123"
            }
        }


class CompanyPublic(BaseModel):
    """Company fields safe to return to clients (never the password hash)."""
    id: int = Field(..., serialization_alias="_id")
    name: str
    email: str
    image: str

    class Config:
        from_attributes = True


class CompanySummary(BaseModel):
    """Company fields joined into job and application listings."""
    id: int = Field(..., serialization_alias="_id")
    name: str
    image: str

    class Config:
        from_attributes = True


class ChangeStatusRequest(BaseModel):
    id: int = Field(..., description="Job application ID")
    status: str = Field(..., min_length=1, description="New application status, e.g. accepted")


class ChangeVisibilityRequest(BaseModel):
    id: int = Field(..., description="Job ID")
