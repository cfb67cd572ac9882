"""
Event model
"""
from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.core.database import Base
from app.utils.datetime_utils import utc_now


class Event(Base):
    """A scheduled event, optionally hosted by a community"""
    __tablename__ = "events"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    community_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("communities.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    title = Column(String(150), nullable=False, index=True)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    start_time = Column(DateTime(timezone=True), nullable=False, index=True)
    end_time = Column(DateTime(timezone=True), nullable=True)
    user_id = Column(Uuid(as_uuid=True), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    # Relationships
    community = relationship("Community", back_populates="events")

    def __repr__(self):
        return f"<Event(id={self.id}, title={self.title}, start_time={self.start_time})>"
