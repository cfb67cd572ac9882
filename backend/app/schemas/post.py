"""
Post request/response schemas
"""
from datetime import datetime
from typing import Annotated, List, Optional
from uuid import UUID

from pydantic import AnyUrl, Field, UrlConstraints, field_validator

from app.schemas.comment import CommentSummary
from app.schemas.common import RequestModel, ResponseModel, blank_to_none
from app.schemas.community import CommunitySummary
from app.schemas.like import LikeResponse

MediaUrl = Annotated[AnyUrl, UrlConstraints(max_length=500)]


class CreatePostRequest(RequestModel):
    """Request model for creating a post"""
    community_id: UUID = Field(..., description="Community the post belongs to")
    title: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1)
    user_id: UUID = Field(..., description="Post author")
    media_url: Optional[str] = Field(default=None, max_length=500)

    @field_validator("media_url", mode="before")
    @classmethod
    def normalize_media_url(cls, v):
        return blank_to_none(v)


class UpdatePostRequest(RequestModel):
    """
    Request model for updating a post.
    An omitted media_url keeps the stored one, a blank or null one clears it.
    """
    title: str = Field(..., min_length=3, max_length=100)
    category: str = Field(..., min_length=3, max_length=50)
    description: str = Field(..., min_length=10)
    media_url: Optional[MediaUrl] = None

    @field_validator("media_url", mode="before")
    @classmethod
    def normalize_media_url(cls, v):
        return blank_to_none(v)


class PostResponse(ResponseModel):
    """Post response model"""
    id: UUID
    community_id: UUID
    title: str
    category: str
    description: str
    media_url: Optional[str] = None
    user_id: UUID
    like_count: int = 0
    comment_count: int = 0
    created_at: datetime
    updated_at: datetime
    community: Optional[CommunitySummary] = None
    comments: List[CommentSummary] = []
    likes: List[LikeResponse] = []

    class Config:
        from_attributes = True
