"""
Pydantic schemas for job seeker endpoints.
"""
from pydantic import BaseModel, Field


class UserResponse(BaseModel):
    id: str = Field(..., serialization_alias="_id")
    name: str
    email: str
    image: str
    resume: str = ""

    class Config:
        from_attributes = True
