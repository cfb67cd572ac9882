"""
Community Service for managing communities
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import desc, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError
from app.core.logging_config import LoggingConfig
from app.core.metrics import (content_entities_created_total,
                              content_entities_deleted_total)
from app.models.community import Community
from app.models.event import Event
from app.models.post import Post
from app.services.post_service import PostService

logger = LoggingConfig.get_logger(__name__)


class CommunityService:
    """Service for community CRUD"""

    def __init__(self, db: Session):
        self.db = db

    def get_community(self, community_id: UUID) -> Optional[Community]:
        """Get community by ID"""
        return self.db.query(Community).filter(Community.id == community_id).first()

    def require_community(self, community_id: UUID) -> Community:
        community = self.get_community(community_id)
        if community is None:
            raise NotFoundError("Community", community_id)
        return community

    def get_community_by_name(self, name: str) -> Optional[Community]:
        """Get community by name, ignoring case"""
        return (
            self.db.query(Community)
            .filter(func.lower(Community.name) == func.lower(name.strip()))
            .first()
        )

    def _ensure_name_available(self, name: str, exclude_id: Optional[UUID] = None):
        existing = self.get_community_by_name(name)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(f"Community with name '{name}' already exists")

    def create_community(
        self,
        user_id: UUID,
        name: str,
        description: Optional[str] = None,
    ) -> Community:
        """
        Create a new community

        Raises:
            ConflictError: a community with the same name (ignoring case) exists
        """
        self._ensure_name_available(name)

        community = Community(name=name, description=description, user_id=user_id)
        self.db.add(community)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(f"Community with name '{name}' already exists") from e
        self.db.refresh(community)

        content_entities_created_total.labels(entity="community").inc()
        logger.info(
            f"Created community: {name}",
            extra={"community_id": str(community.id), "user_id": str(user_id)}
        )
        return community

    def list_communities(
        self,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Community]:
        """List communities, newest first"""
        query = self.db.query(Community)
        if search:
            query = query.filter(Community.name.icontains(search, autoescape=True))
        return (
            query.order_by(desc(Community.created_at))
            .offset(offset)
            .limit(limit)
            .all()
        )

    def update_community(
        self,
        community_id: UUID,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Community:
        community = self.require_community(community_id)

        if name is not None and name != community.name:
            self._ensure_name_available(name, exclude_id=community.id)
            community.name = name
        if description is not None:
            community.description = description or None

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(f"Community with name '{name}' already exists") from e
        self.db.refresh(community)

        logger.info("Updated community", extra={"community_id": str(community_id)})
        return community

    def delete_community(self, community_id: UUID) -> None:
        """
        Delete a community together with its posts (and their comments and likes)
        and its events
        """
        self.require_community(community_id)

        post_ids = [
            row.id
            for row in self.db.query(Post.id).filter(Post.community_id == community_id).all()
        ]
        PostService(self.db).delete_post_rows(post_ids)

        events_deleted = (
            self.db.query(Event)
            .filter(Event.community_id == community_id)
            .delete(synchronize_session=False)
        )
        self.db.query(Community).filter(Community.id == community_id).delete(synchronize_session=False)
        self.db.commit()
        self.db.expire_all()

        content_entities_deleted_total.labels(entity="community").inc()
        logger.info(
            "Deleted community",
            extra={
                "community_id": str(community_id),
                "posts_deleted": len(post_ids),
                "events_deleted": events_deleted,
            }
        )
