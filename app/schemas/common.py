"""
Response envelope shared by every endpoint: `{"success": bool, "message"?: str, ...data}`.
"""
from typing import Any, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Envelope returned on any failure."""
    success: bool = Field(False, description="Always false for errors")
    message: str = Field(..., description="Human readable error message")


def envelope(message: Optional[str] = None, **data: Any) -> dict:
    """Build a success envelope. Pydantic models in `data` are dumped with wire aliases."""
    body = {"success": True}
    if message is not None:
        body["message"] = message
    for key, value in data.items():
        if isinstance(value, BaseModel):
            value = value.model_dump(by_alias=True, mode="json")
        elif isinstance(value, list):
            value = [
                item.model_dump(by_alias=True, mode="json") if isinstance(item, BaseModel) else item
                for item in value
            ]
        body[key] = value
    return body
