"""
Post model
"""
from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.core.database import Base
from app.utils.datetime_utils import utc_now


class Post(Base):
    """A post published in a community"""
    __tablename__ = "posts"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    community_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("communities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(100), nullable=False, index=True)
    category = Column(String(50), nullable=False)
    description = Column(Text, nullable=False)
    media_url = Column(String(500), nullable=True)
    user_id = Column(Uuid(as_uuid=True), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    # Relationships
    community = relationship("Community", back_populates="posts")
    comments = relationship(
        "Comment",
        back_populates="post",
        order_by="Comment.created_at",
        passive_deletes=True,
    )
    likes = relationship("Like", back_populates="post", passive_deletes=True)

    @property
    def like_count(self) -> int:
        return len(self.likes)

    @property
    def comment_count(self) -> int:
        return len(self.comments)

    def __repr__(self):
        return f"<Post(id={self.id}, title={self.title}, community_id={self.community_id})>"
