"""
Community model
"""
from uuid import uuid4

from sqlalchemy import Column, DateTime, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.core.database import Base
from app.utils.datetime_utils import utc_now


class Community(Base):
    """A group that posts and events belong to"""
    __tablename__ = "communities"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    name = Column(String(100), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    user_id = Column(Uuid(as_uuid=True), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    # Relationships
    posts = relationship("Post", back_populates="community", passive_deletes=True)
    events = relationship("Event", back_populates="community", passive_deletes=True)

    def __repr__(self):
        return f"<Community(id={self.id}, name={self.name})>"
