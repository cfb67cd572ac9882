"""
Event request/response schemas
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from app.schemas.common import RequestModel, ResponseModel, blank_to_none
from app.utils.datetime_utils import ensure_utc


class CreateEventRequest(RequestModel):
    """Request model for creating an event"""
    title: str = Field(..., min_length=1, max_length=150)
    user_id: UUID = Field(..., description="Organizer user ID")
    start_time: datetime
    end_time: Optional[datetime] = None
    description: Optional[str] = None
    location: Optional[str] = Field(default=None, max_length=255)
    community_id: Optional[UUID] = None

    @field_validator("end_time", "description", "location", "community_id", mode="before")
    @classmethod
    def normalize_optional(cls, v):
        return blank_to_none(v)

    @model_validator(mode="after")
    def check_time_range(self):
        if self.end_time is not None and ensure_utc(self.end_time) < ensure_utc(self.start_time):
            raise ValueError("end_time must not be before start_time")
        return self


class UpdateEventRequest(RequestModel):
    """Partial update; the time range is re-checked against stored values"""
    title: Optional[str] = Field(default=None, min_length=1, max_length=150)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    description: Optional[str] = None
    location: Optional[str] = Field(default=None, max_length=255)

    @field_validator("end_time", "description", "location", mode="before")
    @classmethod
    def normalize_optional(cls, v):
        return blank_to_none(v)


class EventResponse(ResponseModel):
    id: UUID
    community_id: Optional[UUID] = None
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    user_id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
