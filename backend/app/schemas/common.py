"""
Shared request base class and the JSON response envelope
"""
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator

from app.utils.datetime_utils import ensure_utc

T = TypeVar("T")


class RequestModel(BaseModel):
    """Base for request bodies: unknown keys are rejected, strings are stripped"""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")


class ResponseModel(BaseModel):
    """Base for entity responses: timestamps are always returned as UTC"""

    @field_validator("*", mode="after")
    @classmethod
    def timestamps_as_utc(cls, v):
        if isinstance(v, datetime):
            return ensure_utc(v)
        return v


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope"""
    success: bool = True
    message: str = ""
    data: Optional[T] = None


class ErrorResponse(BaseModel):
    """Error envelope"""
    success: bool = False
    message: str
    errors: Optional[List[Dict[str, Any]]] = None


def envelope(data: Any = None, message: str = "OK") -> Dict[str, Any]:
    """Wrap a payload in the success envelope"""
    return {"success": True, "message": message, "data": data}


def blank_to_none(value: Any) -> Any:
    """Treat empty strings like missing values for optional fields"""
    if isinstance(value, str) and not value.strip():
        return None
    return value
