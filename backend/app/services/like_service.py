"""
Like Service: toggle and count likes on posts and comments
"""
from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError
from app.core.logging_config import LoggingConfig
from app.core.metrics import likes_toggled_total
from app.models.comment import Comment
from app.models.like import Like, LikeTarget
from app.models.post import Post

logger = LoggingConfig.get_logger(__name__)


class LikeService:
    """Service for likes"""

    def __init__(self, db: Session):
        self.db = db

    def _toggle(self, user_id: UUID, target: LikeTarget, target_id: UUID) -> Tuple[bool, Optional[Like]]:
        """
        Remove the user's like on the target if present, otherwise add one

        Returns:
            (liked, like) where liked is the state after the call and like is the
            new record when one was created
        """
        column = Like.post_id if target == LikeTarget.POST else Like.comment_id
        existing = (
            self.db.query(Like)
            .filter(Like.user_id == user_id, column == target_id)
            .first()
        )

        if existing is not None:
            self.db.delete(existing)
            self.db.commit()
            likes_toggled_total.labels(target=target.value, action="unlike").inc()
            logger.info(
                f"Unliked {target.value}",
                extra={"user_id": str(user_id), "target_id": str(target_id)}
            )
            return False, None

        like = Like(user_id=user_id)
        if target == LikeTarget.POST:
            like.post_id = target_id
        else:
            like.comment_id = target_id
        self.db.add(like)
        try:
            self.db.commit()
        except IntegrityError as e:
            # A concurrent request inserted the same like first
            self.db.rollback()
            raise ConflictError(f"Like on {target.value} {target_id} changed concurrently") from e
        self.db.refresh(like)

        likes_toggled_total.labels(target=target.value, action="like").inc()
        logger.info(
            f"Liked {target.value}",
            extra={"user_id": str(user_id), "target_id": str(target_id), "like_id": str(like.id)}
        )
        return True, like

    def _require_post(self, post_id: UUID):
        if self.db.query(Post.id).filter(Post.id == post_id).first() is None:
            raise NotFoundError("Post", post_id)

    def _require_comment(self, comment_id: UUID):
        if self.db.query(Comment.id).filter(Comment.id == comment_id).first() is None:
            raise NotFoundError("Comment", comment_id)

    def toggle_post_like(self, user_id: UUID, post_id: UUID) -> Tuple[bool, Optional[Like]]:
        self._require_post(post_id)
        return self._toggle(user_id, LikeTarget.POST, post_id)

    def toggle_comment_like(self, user_id: UUID, comment_id: UUID) -> Tuple[bool, Optional[Like]]:
        self._require_comment(comment_id)
        return self._toggle(user_id, LikeTarget.COMMENT, comment_id)

    def count_post_likes(self, post_id: UUID) -> int:
        self._require_post(post_id)
        return self.db.query(Like).filter(Like.post_id == post_id).count()

    def count_comment_likes(self, comment_id: UUID) -> int:
        self._require_comment(comment_id)
        return self.db.query(Like).filter(Like.comment_id == comment_id).count()
