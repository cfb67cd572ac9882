"""
Service layer tests against the test database
"""
import asyncio
import io
from datetime import timedelta
from uuid import uuid4

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from app.core.exceptions import (ConflictError, NotFoundError,
                                 PayloadTooLargeError, ValidationError)
from app.models.comment import Comment
from app.models.like import Like, LikeTarget
from app.models.post import Post
from app.services.comment_service import CommentService
from app.services.community_service import CommunityService
from app.services.event_service import EventService
from app.services.like_service import LikeService
from app.services.media_service import MediaService
from app.services.post_service import PostService
from app.utils.datetime_utils import utc_now


@pytest.fixture
def seeded(db):
    """A community with one post"""
    owner = uuid4()
    community = CommunityService(db).create_community(owner, "Makers", "Hardware hacking")
    post = PostService(db).create_post(
        community_id=community.id,
        title="Soldering stations",
        category="tools",
        description="Which one to buy first",
        user_id=owner,
    )
    return owner, community, post


def test_community_name_lookup_ignores_case(db, seeded):
    _, community, _ = seeded
    service = CommunityService(db)

    assert service.get_community_by_name("  MAKERS ").id == community.id
    with pytest.raises(ConflictError):
        service.create_community(uuid4(), "makers")


def test_community_update_keeps_omitted_fields(db, seeded):
    _, community, _ = seeded

    updated = CommunityService(db).update_community(community.id, description="Electronics")

    assert updated.name == "Makers"
    assert updated.description == "Electronics"


def test_delete_community_cascades(db, seeded):
    owner, community, post = seeded
    comment = CommentService(db).add_comment(post.id, owner, "Hakko")
    LikeService(db).toggle_comment_like(owner, comment.id)
    EventService(db).create_event(
        title="Repair night",
        user_id=owner,
        start_time=utc_now() + timedelta(days=1),
        community_id=community.id,
    )

    CommunityService(db).delete_community(community.id)

    assert db.query(Post).count() == 0
    assert db.query(Comment).count() == 0
    assert db.query(Like).count() == 0
    assert EventService(db).list_events() == []


def test_delete_missing_community(db):
    with pytest.raises(NotFoundError) as exc_info:
        CommunityService(db).delete_community(uuid4())
    assert exc_info.value.status_code == 404


def test_comment_thread_collection(db, seeded):
    owner, _, post = seeded
    service = CommentService(db)
    root = service.add_comment(post.id, owner, "root")
    child = service.add_comment(post.id, owner, "child", parent_id=root.id)
    grandchild = service.add_comment(post.id, owner, "grandchild", parent_id=child.id)
    service.add_comment(post.id, owner, "sibling")

    assert service._collect_thread_ids(root.id) == {root.id, child.id, grandchild.id}
    assert service.delete_comment(root.id) == 3
    assert [c.content for c in service.list_comments_for_post(post.id)] == ["sibling"]


def test_comment_parent_must_share_post(db, seeded):
    owner, community, post = seeded
    other = PostService(db).create_post(
        community_id=community.id,
        title="Oscilloscopes",
        category="tools",
        description="Entry level scopes",
        user_id=owner,
    )
    parent = CommentService(db).add_comment(other.id, owner, "Rigol")

    with pytest.raises(ValidationError):
        CommentService(db).add_comment(post.id, owner, "reply", parent_id=parent.id)


def test_like_toggle_state(db, seeded):
    owner, _, post = seeded
    service = LikeService(db)

    liked, like = service.toggle_post_like(owner, post.id)
    assert liked is True
    assert like.target == LikeTarget.POST
    assert service.count_post_likes(post.id) == 1

    liked, like = service.toggle_post_like(owner, post.id)
    assert liked is False
    assert like is None
    assert service.count_post_likes(post.id) == 0


def test_like_missing_targets(db):
    service = LikeService(db)
    with pytest.raises(NotFoundError):
        service.toggle_post_like(uuid4(), uuid4())
    with pytest.raises(NotFoundError):
        service.count_comment_likes(uuid4())


def test_search_posts_service(db, seeded):
    _, _, post = seeded

    assert [p.id for p in PostService(db).search_posts("SOLDER")] == [post.id]
    assert PostService(db).search_posts("nothing like this") == []


def test_update_post_duplicate_title(db, seeded):
    owner, community, post = seeded
    other = PostService(db).create_post(
        community_id=community.id,
        title="Multimeters",
        category="tools",
        description="Fluke or not",
        user_id=owner,
    )

    with pytest.raises(ConflictError):
        PostService(db).update_post(other.id, title=post.title, category="tools", description="Fluke or not")


def test_event_update_ignores_none(db):
    service = EventService(db)
    start = utc_now() + timedelta(days=2)
    event = service.create_event(title="Hack day", user_id=uuid4(), start_time=start, location="Lab")

    updated = service.update_event(event.id, title=None, location="Garage")

    assert updated.title == "Hack day"
    assert updated.location == "Garage"


def test_event_time_range_checked_on_create(db):
    start = utc_now() + timedelta(days=2)
    with pytest.raises(ValidationError):
        EventService(db).create_event(
            title="Backwards",
            user_id=uuid4(),
            start_time=start,
            end_time=start - timedelta(minutes=1),
        )


class _RecordingClient:
    def __init__(self):
        self.calls = []

    async def upload_image(self, content, filename, content_type, folder=None):
        self.calls.append((filename, content_type, content))
        return f"https://media.example.com/{filename}"


def _upload_file(content: bytes, filename: str, content_type: str) -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


def test_media_service_uploads_image():
    client = _RecordingClient()
    service = MediaService(client, max_bytes=16)

    url = asyncio.run(service.upload(_upload_file(b"abc", "a.gif", "image/gif")))

    assert url == "https://media.example.com/a.gif"
    assert client.calls == [("a.gif", "image/gif", b"abc")]


def test_media_service_limits():
    service = MediaService(_RecordingClient(), max_bytes=4)

    with pytest.raises(PayloadTooLargeError):
        asyncio.run(service.upload(_upload_file(b"12345", "big.png", "image/png")))
    with pytest.raises(ValidationError):
        asyncio.run(service.upload(_upload_file(b"1234", "doc.pdf", "application/pdf")))
    with pytest.raises(ValidationError):
        asyncio.run(service.upload(None))


def test_community_name_lookup_folds_non_ascii(db):
    service = CommunityService(db)
    community = service.create_community(uuid4(), "Straßen Öffnen")

    assert service.get_community_by_name("STRASSEN ÖFFNEN") is None
    assert service.get_community_by_name("straßen öffnen").id == community.id


def test_update_post_only_touches_given_fields(db, seeded):
    _, _, post = seeded
    post.media_url = "https://media.example.com/iron.jpg"
    db.commit()

    updated = PostService(db).update_post(post.id, category="workshop")

    assert updated.title == "Soldering stations"
    assert updated.category == "workshop"
    assert updated.media_url == "https://media.example.com/iron.jpg"


def test_event_update_clears_optional_fields(db):
    service = EventService(db)
    start = utc_now() + timedelta(days=2)
    event = service.create_event(
        title="Swap meet",
        user_id=uuid4(),
        start_time=start,
        end_time=start + timedelta(hours=3),
        location="Yard",
    )

    updated = service.update_event(event.id, end_time=None, location=None, start_time=None)

    assert updated.end_time is None
    assert updated.location is None
    assert updated.start_time is not None
