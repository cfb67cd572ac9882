"""
Like request/response schemas
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.common import RequestModel, ResponseModel


class LikeRequest(RequestModel):
    """Body for toggling a like"""
    user_id: UUID = Field(..., description="User toggling the like")


class LikeResponse(ResponseModel):
    id: UUID
    user_id: UUID
    post_id: Optional[UUID] = None
    comment_id: Optional[UUID] = None
    created_at: datetime

    class Config:
        from_attributes = True


class LikeToggleResponse(BaseModel):
    """Result of a toggle: liked is the state after the call"""
    liked: bool
    like: Optional[LikeResponse] = None


class PostLikeCount(BaseModel):
    post_id: UUID
    like_count: int


class CommentLikeCount(BaseModel):
    comment_id: UUID
    like_count: int
