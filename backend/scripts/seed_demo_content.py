#!/usr/bin/env python3
"""Seed a local database with a small set of demo content through the service layer."""
from __future__ import annotations

import sys
from datetime import timedelta
from pathlib import Path
from uuid import uuid4

BACKEND_DIR = Path(__file__).resolve().parent.parent
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from app.core.database import get_session_local
from app.core.logging_config import LoggingConfig
from app.services.comment_service import CommentService
from app.services.community_service import CommunityService
from app.services.event_service import EventService
from app.services.like_service import LikeService
from app.services.post_service import PostService
from app.utils.datetime_utils import utc_now

logger = LoggingConfig.get_logger(__name__)

DEMO_COMMUNITY = "Demo Gardeners"


def seed(db) -> bool:
    """
    Create one community with a post, a short comment thread, likes and an event.

    Returns False when the demo community already exists.
    """
    communities = CommunityService(db)
    if communities.get_community_by_name(DEMO_COMMUNITY) is not None:
        logger.info("Demo content already present, skipping")
        return False

    owner, member = uuid4(), uuid4()
    community = communities.create_community(
        user_id=owner,
        name=DEMO_COMMUNITY,
        description="People who grow vegetables on balconies",
    )
    post = PostService(db).create_post(
        community_id=community.id,
        title="Tomatoes in pots",
        category="howto",
        description="Which varieties do well in a 20 litre pot?",
        user_id=owner,
    )
    comments = CommentService(db)
    question = comments.add_comment(post.id, member, "Cherry tomatoes worked for me.")
    comments.add_comment(post.id, owner, "Thanks, which one exactly?", parent_id=question.id)

    likes = LikeService(db)
    likes.toggle_post_like(member, post.id)
    likes.toggle_comment_like(owner, question.id)

    start = utc_now() + timedelta(days=7)
    EventService(db).create_event(
        title="Seed swap",
        user_id=owner,
        start_time=start,
        end_time=start + timedelta(hours=2),
        location="Community garden",
        community_id=community.id,
    )
    logger.info("Demo content created", extra={"community_id": str(community.id)})
    return True


def main():
    SessionLocal = get_session_local()
    db = SessionLocal()
    try:
        created = seed(db)
    finally:
        db.close()
    print("Demo content created." if created else "Demo content already present.")


if __name__ == "__main__":
    main()
