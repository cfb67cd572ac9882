"""
Community request/response schemas
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from app.schemas.common import RequestModel, ResponseModel, blank_to_none


class CreateCommunityRequest(RequestModel):
    """Request model for creating a community"""
    user_id: UUID = Field(..., description="Creator user ID")
    name: str = Field(..., min_length=1, max_length=100, description="Community name")
    description: Optional[str] = Field(default=None, description="Community description")

    @field_validator("description", mode="before")
    @classmethod
    def normalize_description(cls, v):
        return blank_to_none(v)


class UpdateCommunityRequest(RequestModel):
    """Request model for updating a community"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None


class CommunitySummary(ResponseModel):
    id: UUID
    name: str

    class Config:
        from_attributes = True


class CommunityResponse(ResponseModel):
    """Community response model"""
    id: UUID
    name: str
    description: Optional[str] = None
    user_id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
