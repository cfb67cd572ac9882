"""
Comment model with threaded replies
"""
from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship

from app.core.database import Base
from app.utils.datetime_utils import utc_now


class Comment(Base):
    """A comment on a post; parent_id makes it a reply to another comment"""
    __tablename__ = "comments"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    post_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    parent_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    content = Column(Text, nullable=False)
    user_id = Column(Uuid(as_uuid=True), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    # Relationships
    post = relationship("Post", back_populates="comments")
    parent = relationship("Comment", remote_side=[id], back_populates="replies")
    replies = relationship(
        "Comment",
        back_populates="parent",
        order_by="Comment.created_at",
        passive_deletes=True,
    )
    likes = relationship("Like", back_populates="comment", passive_deletes=True)

    @property
    def like_count(self) -> int:
        return len(self.likes)

    def __repr__(self):
        return f"<Comment(id={self.id}, post_id={self.post_id}, parent_id={self.parent_id})>"
