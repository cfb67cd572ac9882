"""
API routes for posts
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import ValidationError
from app.schemas.comment import CommentResponse
from app.schemas.common import ApiResponse, envelope
from app.schemas.post import CreatePostRequest, PostResponse, UpdatePostRequest
from app.services.comment_service import CommentService
from app.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post(
    "",
    response_model=ApiResponse[PostResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    request: CreatePostRequest,
    db: Session = Depends(get_db)
):
    """Create a post in an existing community"""
    post = PostService(db).create_post(
        community_id=request.community_id,
        title=request.title,
        category=request.category,
        description=request.description,
        user_id=request.user_id,
        media_url=request.media_url,
    )
    return envelope(post, "Post created successfully")


@router.get("", response_model=ApiResponse[List[PostResponse]])
async def list_posts(
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db)
):
    """All posts, newest first"""
    posts = PostService(db).list_posts(limit=limit, offset=offset)
    return envelope(posts, "Posts fetched successfully")


@router.get("/search", response_model=ApiResponse[List[PostResponse]])
async def search_posts(
    query: str = Query(..., min_length=1, description="Text to look for in title or description"),
    db: Session = Depends(get_db)
):
    if not query.strip():
        raise ValidationError("Search query must not be empty")
    posts = PostService(db).search_posts(query.strip())
    return envelope(posts, "Posts fetched successfully")


@router.get("/{post_id}", response_model=ApiResponse[PostResponse])
async def get_post(
    post_id: UUID,
    db: Session = Depends(get_db)
):
    post = PostService(db).require_post(post_id)
    return envelope(post, "Post fetched successfully")


@router.put("/{post_id}", response_model=ApiResponse[PostResponse])
async def update_post(
    post_id: UUID,
    request: UpdatePostRequest,
    db: Session = Depends(get_db)
):
    changes = request.model_dump(exclude_unset=True)
    if changes.get("media_url") is not None:
        changes["media_url"] = str(changes["media_url"])
    post = PostService(db).update_post(post_id, **changes)
    return envelope(post, "Post updated successfully")


@router.delete("/{post_id}", response_model=ApiResponse[None])
async def delete_post(
    post_id: UUID,
    db: Session = Depends(get_db)
):
    """Delete a post with its comments and likes"""
    PostService(db).delete_post(post_id)
    return envelope(None, "Post deleted successfully")


@router.get("/{post_id}/comments", response_model=ApiResponse[List[CommentResponse]])
async def get_comments_by_post(
    post_id: UUID,
    top_level: bool = Query(default=False, description="Only comments that are not replies"),
    db: Session = Depends(get_db)
):
    """Comments of a post, oldest first, with direct replies"""
    comments = CommentService(db).list_comments_for_post(post_id, top_level_only=top_level)
    return envelope(comments, "Comments fetched successfully")
