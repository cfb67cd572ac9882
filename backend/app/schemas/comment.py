"""
Comment request/response schemas
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field, field_validator

from app.schemas.common import RequestModel, ResponseModel, blank_to_none
from app.schemas.like import LikeResponse


class AddCommentRequest(RequestModel):
    """Request model for adding a comment or a reply"""
    post_id: UUID = Field(..., description="Post being commented on")
    user_id: UUID = Field(..., description="Comment author")
    content: str = Field(..., min_length=1, description="Comment text")
    parent_id: Optional[UUID] = Field(default=None, description="Comment being replied to")

    @field_validator("parent_id", mode="before")
    @classmethod
    def normalize_parent(cls, v):
        return blank_to_none(v)


class CommentSummary(ResponseModel):
    id: UUID
    post_id: UUID
    parent_id: Optional[UUID] = None
    content: str
    user_id: UUID
    like_count: int = 0
    created_at: datetime

    class Config:
        from_attributes = True


class CommentResponse(CommentSummary):
    """Comment with its direct replies and likes"""
    updated_at: datetime
    replies: List[CommentSummary] = []
    likes: List[LikeResponse] = []
