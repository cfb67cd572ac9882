"""
API routes for comments
"""
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.comment import AddCommentRequest, CommentResponse
from app.schemas.common import ApiResponse, envelope
from app.services.comment_service import CommentService

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post(
    "",
    response_model=ApiResponse[CommentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    request: AddCommentRequest,
    db: Session = Depends(get_db)
):
    """Add a comment, or a reply when parent_id is set"""
    comment = CommentService(db).add_comment(
        post_id=request.post_id,
        user_id=request.user_id,
        content=request.content,
        parent_id=request.parent_id,
    )
    return envelope(comment, "Comment added successfully")


@router.get("/{comment_id}", response_model=ApiResponse[CommentResponse])
async def get_comment(
    comment_id: UUID,
    db: Session = Depends(get_db)
):
    comment = CommentService(db).require_comment(comment_id)
    return envelope(comment, "Comment fetched successfully")


@router.delete("/{comment_id}", response_model=ApiResponse[None])
async def delete_comment(
    comment_id: UUID,
    db: Session = Depends(get_db)
):
    """Delete a comment with all of its replies and likes"""
    CommentService(db).delete_comment(comment_id)
    return envelope(None, "Comment deleted successfully")
