"""
Comment Service for comments and threaded replies
"""
from typing import List, Optional, Set
from uuid import UUID

from sqlalchemy import asc
from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import NotFoundError, ValidationError
from app.core.logging_config import LoggingConfig
from app.core.metrics import (content_entities_created_total,
                              content_entities_deleted_total)
from app.models.comment import Comment
from app.models.like import Like
from app.models.post import Post

logger = LoggingConfig.get_logger(__name__)


class CommentService:
    """Service for comment CRUD"""

    def __init__(self, db: Session):
        self.db = db

    def _require_post_exists(self, post_id: UUID):
        if self.db.query(Post.id).filter(Post.id == post_id).first() is None:
            raise NotFoundError("Post", post_id)

    def get_comment(self, comment_id: UUID) -> Optional[Comment]:
        return (
            self.db.query(Comment)
            .options(
                selectinload(Comment.replies).selectinload(Comment.likes),
                selectinload(Comment.likes),
            )
            .filter(Comment.id == comment_id)
            .first()
        )

    def require_comment(self, comment_id: UUID) -> Comment:
        comment = self.get_comment(comment_id)
        if comment is None:
            raise NotFoundError("Comment", comment_id)
        return comment

    def add_comment(
        self,
        post_id: UUID,
        user_id: UUID,
        content: str,
        parent_id: Optional[UUID] = None,
    ) -> Comment:
        """
        Add a comment to a post, or a reply when parent_id is given

        Raises:
            NotFoundError: post or parent comment does not exist
            ValidationError: parent comment belongs to a different post
        """
        self._require_post_exists(post_id)

        if parent_id is not None:
            parent = self.db.query(Comment).filter(Comment.id == parent_id).first()
            if parent is None:
                raise NotFoundError("Comment", parent_id)
            if parent.post_id != post_id:
                raise ValidationError("Parent comment belongs to a different post")

        comment = Comment(
            post_id=post_id,
            user_id=user_id,
            content=content,
            parent_id=parent_id,
        )
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)

        content_entities_created_total.labels(entity="comment").inc()
        logger.info(
            "Added comment",
            extra={
                "comment_id": str(comment.id),
                "post_id": str(post_id),
                "parent_id": str(parent_id) if parent_id else None,
            }
        )
        return comment

    def list_comments_for_post(self, post_id: UUID, top_level_only: bool = False) -> List[Comment]:
        """Comments of a post, oldest first, with direct replies and likes loaded"""
        self._require_post_exists(post_id)

        query = (
            self.db.query(Comment)
            .options(
                selectinload(Comment.replies).selectinload(Comment.likes),
                selectinload(Comment.likes),
            )
            .filter(Comment.post_id == post_id)
        )
        if top_level_only:
            query = query.filter(Comment.parent_id.is_(None))
        return query.order_by(asc(Comment.created_at)).all()

    def _collect_thread_ids(self, root_id: UUID) -> Set[UUID]:
        """The comment and all of its replies, transitively"""
        collected = {root_id}
        frontier = [root_id]
        while frontier:
            children = [
                row.id
                for row in self.db.query(Comment.id).filter(Comment.parent_id.in_(frontier)).all()
                if row.id not in collected
            ]
            collected.update(children)
            frontier = children
        return collected

    def delete_comment(self, comment_id: UUID) -> int:
        """
        Delete a comment, its replies and the likes on all of them

        Returns:
            Number of comments removed
        """
        if self.db.query(Comment.id).filter(Comment.id == comment_id).first() is None:
            raise NotFoundError("Comment", comment_id)

        thread_ids = list(self._collect_thread_ids(comment_id))
        self.db.query(Like).filter(Like.comment_id.in_(thread_ids)).delete(synchronize_session=False)
        removed = (
            self.db.query(Comment)
            .filter(Comment.id.in_(thread_ids))
            .delete(synchronize_session=False)
        )
        self.db.commit()
        self.db.expire_all()

        content_entities_deleted_total.labels(entity="comment").inc(removed)
        logger.info(
            "Deleted comment",
            extra={"comment_id": str(comment_id), "comments_removed": removed}
        )
        return removed
