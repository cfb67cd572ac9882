"""
SQLAlchemy models
"""
from app.core.database import Base
# Import all models here so Alembic can detect them
from app.models.comment import Comment  # noqa: F401
from app.models.community import Community  # noqa: F401
from app.models.event import Event  # noqa: F401
from app.models.like import Like, LikeTarget  # noqa: F401
from app.models.post import Post  # noqa: F401

__all__ = [
    "Base",
    "Community",
    "Post",
    "Comment",
    "Like",
    "LikeTarget",
    "Event",
]
