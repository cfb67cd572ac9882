"""
Post Service for managing posts
"""
from typing import Any, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import desc, func, or_
from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import ConflictError, NotFoundError
from app.core.logging_config import LoggingConfig
from app.core.metrics import (content_entities_created_total,
                              content_entities_deleted_total)
from app.models.comment import Comment
from app.models.community import Community
from app.models.like import Like
from app.models.post import Post

logger = LoggingConfig.get_logger(__name__)


class PostService:
    """Service for post CRUD and search"""

    def __init__(self, db: Session):
        self.db = db

    def _query_with_relations(self):
        return self.db.query(Post).options(
            selectinload(Post.community),
            selectinload(Post.comments).selectinload(Comment.likes),
            selectinload(Post.likes),
        )

    def get_post(self, post_id: UUID) -> Optional[Post]:
        """Get post by ID with community, comments and likes"""
        return self._query_with_relations().filter(Post.id == post_id).first()

    def require_post(self, post_id: UUID) -> Post:
        post = self.get_post(post_id)
        if post is None:
            raise NotFoundError("Post", post_id)
        return post

    def get_post_by_title(self, title: str) -> Optional[Post]:
        """Get post by exact title, ignoring case"""
        return (
            self.db.query(Post)
            .filter(func.lower(Post.title) == func.lower(title.strip()))
            .first()
        )

    def create_post(
        self,
        community_id: UUID,
        title: str,
        category: str,
        description: str,
        user_id: UUID,
        media_url: Optional[str] = None,
    ) -> Post:
        """
        Create a new post in a community

        Raises:
            NotFoundError: the community does not exist
            ConflictError: a post with the same title (ignoring case) exists
        """
        community = self.db.query(Community).filter(Community.id == community_id).first()
        if community is None:
            raise NotFoundError("Community", community_id)

        if self.get_post_by_title(title) is not None:
            raise ConflictError(f"Post with title '{title}' already exists")

        post = Post(
            community_id=community_id,
            title=title,
            category=category,
            description=description,
            media_url=media_url,
            user_id=user_id,
        )
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)

        content_entities_created_total.labels(entity="post").inc()
        logger.info(
            f"Created post: {title}",
            extra={
                "post_id": str(post.id),
                "community_id": str(community_id),
                "user_id": str(user_id),
            }
        )
        return post

    def list_posts(
        self,
        community_id: Optional[UUID] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Post]:
        """List posts newest first, optionally restricted to a community"""
        query = self._query_with_relations()
        if community_id is not None:
            query = query.filter(Post.community_id == community_id)
        query = query.order_by(desc(Post.created_at)).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def search_posts(self, text: str, limit: Optional[int] = None) -> List[Post]:
        """Case-insensitive substring search over title and description"""
        query = (
            self._query_with_relations()
            .filter(
                or_(
                    Post.title.icontains(text, autoescape=True),
                    Post.description.icontains(text, autoescape=True),
                )
            )
            .order_by(desc(Post.created_at))
        )
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def update_post(self, post_id: UUID, **changes: Any) -> Post:
        """
        Update the given fields of a post; fields not passed are kept
        """
        post = self.require_post(post_id)

        title = changes.get("title")
        if title is not None:
            existing = self.get_post_by_title(title)
            if existing is not None and existing.id != post.id:
                raise ConflictError(f"Post with title '{title}' already exists")

        for field in ("title", "category", "description", "media_url"):
            if field in changes:
                setattr(post, field, changes[field])
        self.db.commit()
        self.db.refresh(post)

        logger.info("Updated post", extra={"post_id": str(post_id)})
        return post

    def delete_post_rows(self, post_ids: Sequence[UUID]) -> None:
        """
        Delete posts with their likes, comments and comment likes.
        Does not commit.
        """
        if not post_ids:
            return
        comment_ids = [
            row.id
            for row in self.db.query(Comment.id).filter(Comment.post_id.in_(post_ids)).all()
        ]
        self.db.query(Like).filter(Like.post_id.in_(post_ids)).delete(synchronize_session=False)
        if comment_ids:
            self.db.query(Like).filter(Like.comment_id.in_(comment_ids)).delete(synchronize_session=False)
        self.db.query(Comment).filter(Comment.post_id.in_(post_ids)).delete(synchronize_session=False)
        self.db.query(Post).filter(Post.id.in_(post_ids)).delete(synchronize_session=False)

    def delete_post(self, post_id: UUID) -> None:
        """Delete a post and everything attached to it"""
        exists = self.db.query(Post.id).filter(Post.id == post_id).first()
        if exists is None:
            raise NotFoundError("Post", post_id)

        self.delete_post_rows([post_id])
        self.db.commit()
        self.db.expire_all()

        content_entities_deleted_total.labels(entity="post").inc()
        logger.info("Deleted post", extra={"post_id": str(post_id)})
