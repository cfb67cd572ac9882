"""
Event Service for managing events
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import asc, func
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.logging_config import LoggingConfig
from app.core.metrics import (content_entities_created_total,
                              content_entities_deleted_total)
from app.models.community import Community
from app.models.event import Event
from app.utils.datetime_utils import ensure_utc, utc_now

logger = LoggingConfig.get_logger(__name__)

CLEARABLE_EVENT_FIELDS = ("end_time", "description", "location")


class EventService:
    """Service for event CRUD"""

    def __init__(self, db: Session):
        self.db = db

    def get_event(self, event_id: UUID) -> Optional[Event]:
        return self.db.query(Event).filter(Event.id == event_id).first()

    def require_event(self, event_id: UUID) -> Event:
        event = self.get_event(event_id)
        if event is None:
            raise NotFoundError("Event", event_id)
        return event

    def _ensure_title_available(
        self,
        title: str,
        community_id: Optional[UUID],
        exclude_id: Optional[UUID] = None,
    ):
        """Event titles are unique per community, ignoring case"""
        query = self.db.query(Event).filter(func.lower(Event.title) == func.lower(title.strip()))
        if community_id is None:
            query = query.filter(Event.community_id.is_(None))
        else:
            query = query.filter(Event.community_id == community_id)
        existing = query.first()
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(f"Event with title '{title}' already exists")

    @staticmethod
    def _check_time_range(start_time: datetime, end_time: Optional[datetime]):
        if end_time is not None and ensure_utc(end_time) < ensure_utc(start_time):
            raise ValidationError("end_time must not be before start_time")

    def create_event(
        self,
        title: str,
        user_id: UUID,
        start_time: datetime,
        end_time: Optional[datetime] = None,
        description: Optional[str] = None,
        location: Optional[str] = None,
        community_id: Optional[UUID] = None,
    ) -> Event:
        """
        Create a new event

        Raises:
            NotFoundError: community_id given but the community does not exist
            ConflictError: same title already used in that community
            ValidationError: end_time precedes start_time
        """
        if community_id is not None:
            if self.db.query(Community.id).filter(Community.id == community_id).first() is None:
                raise NotFoundError("Community", community_id)

        self._check_time_range(start_time, end_time)
        self._ensure_title_available(title, community_id)

        event = Event(
            title=title,
            user_id=user_id,
            start_time=ensure_utc(start_time),
            end_time=ensure_utc(end_time) if end_time else None,
            description=description,
            location=location,
            community_id=community_id,
        )
        self.db.add(event)
        self.db.commit()
        self.db.refresh(event)

        content_entities_created_total.labels(entity="event").inc()
        logger.info(
            f"Created event: {title}",
            extra={"event_id": str(event.id), "community_id": str(community_id) if community_id else None}
        )
        return event

    def list_events(
        self,
        community_id: Optional[UUID] = None,
        upcoming: bool = False,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Event]:
        """List events ordered by start time"""
        query = self.db.query(Event)
        if community_id is not None:
            query = query.filter(Event.community_id == community_id)
        if upcoming:
            query = query.filter(Event.start_time >= utc_now())
        if search:
            query = query.filter(Event.title.icontains(search, autoescape=True))
        return (
            query.order_by(asc(Event.start_time))
            .offset(offset)
            .limit(limit)
            .all()
        )

    def update_event(self, event_id: UUID, **changes: Any) -> Event:
        """
        Apply a partial update. None clears the optional fields and is
        ignored for title and start_time.
        """
        event = self.require_event(event_id)
        updates: Dict[str, Any] = {
            k: v for k, v in changes.items()
            if v is not None or k in CLEARABLE_EVENT_FIELDS
        }

        start_time = updates.get("start_time", event.start_time)
        end_time = updates.get("end_time", event.end_time)
        self._check_time_range(start_time, end_time)

        if "title" in updates:
            self._ensure_title_available(updates["title"], event.community_id, exclude_id=event.id)

        for key in ("start_time", "end_time"):
            if updates.get(key) is not None:
                updates[key] = ensure_utc(updates[key])

        for key, value in updates.items():
            if hasattr(event, key):
                setattr(event, key, value)

        self.db.commit()
        self.db.refresh(event)

        logger.info("Updated event", extra={"event_id": str(event_id), "fields": sorted(updates)})
        return event

    def delete_event(self, event_id: UUID) -> None:
        self.require_event(event_id)
        self.db.query(Event).filter(Event.id == event_id).delete(synchronize_session=False)
        self.db.commit()
        self.db.expire_all()

        content_entities_deleted_total.labels(entity="event").inc()
        logger.info("Deleted event", extra={"event_id": str(event_id)})
