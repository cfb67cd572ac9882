"""
Like model - a user's like on either a post or a comment
"""
from enum import Enum
from uuid import uuid4

from sqlalchemy import (CheckConstraint, Column, DateTime, ForeignKey,
                        UniqueConstraint, Uuid)
from sqlalchemy.orm import relationship

from app.core.database import Base
from app.utils.datetime_utils import utc_now


class LikeTarget(str, Enum):
    """What a like points at"""
    POST = "post"
    COMMENT = "comment"


class Like(Base):
    """Like on exactly one of a post or a comment"""
    __tablename__ = "likes"
    __table_args__ = (
        CheckConstraint(
            "(post_id IS NULL) <> (comment_id IS NULL)",
            name="ck_likes_single_target",
        ),
        UniqueConstraint("user_id", "post_id", name="uq_likes_user_post"),
        UniqueConstraint("user_id", "comment_id", name="uq_likes_user_comment"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    post_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    comment_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    # Relationships
    post = relationship("Post", back_populates="likes")
    comment = relationship("Comment", back_populates="likes")

    @property
    def target(self) -> LikeTarget:
        return LikeTarget.POST if self.post_id is not None else LikeTarget.COMMENT

    def __repr__(self):
        return f"<Like(id={self.id}, user_id={self.user_id}, target={self.target.value})>"
