"""
API routes for likes on posts and comments
"""
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.common import ApiResponse, envelope
from app.schemas.like import (CommentLikeCount, LikeRequest,
                              LikeToggleResponse, PostLikeCount)
from app.services.like_service import LikeService

router = APIRouter(tags=["likes"])


@router.post("/posts/{post_id}/like", response_model=ApiResponse[LikeToggleResponse])
async def like_post(
    post_id: UUID,
    request: LikeRequest,
    response: Response,
    db: Session = Depends(get_db)
):
    """Like the post, or remove the like if the user already liked it"""
    liked, like = LikeService(db).toggle_post_like(request.user_id, post_id)
    if liked:
        response.status_code = status.HTTP_201_CREATED
        return envelope({"liked": True, "like": like}, "Post liked")
    return envelope({"liked": False, "like": None}, "Post unliked")


@router.post("/comments/{comment_id}/like", response_model=ApiResponse[LikeToggleResponse])
async def like_comment(
    comment_id: UUID,
    request: LikeRequest,
    response: Response,
    db: Session = Depends(get_db)
):
    """Like the comment, or remove the like if the user already liked it"""
    liked, like = LikeService(db).toggle_comment_like(request.user_id, comment_id)
    if liked:
        response.status_code = status.HTTP_201_CREATED
        return envelope({"liked": True, "like": like}, "Comment liked")
    return envelope({"liked": False, "like": None}, "Comment unliked")


@router.get("/posts/{post_id}/likes/count", response_model=ApiResponse[PostLikeCount])
async def get_post_like_count(
    post_id: UUID,
    db: Session = Depends(get_db)
):
    count = LikeService(db).count_post_likes(post_id)
    return envelope({"post_id": post_id, "like_count": count}, "Like count fetched successfully")


@router.get("/comments/{comment_id}/likes/count", response_model=ApiResponse[CommentLikeCount])
async def get_comment_like_count(
    comment_id: UUID,
    db: Session = Depends(get_db)
):
    count = LikeService(db).count_comment_likes(comment_id)
    return envelope({"comment_id": comment_id, "like_count": count}, "Like count fetched successfully")
