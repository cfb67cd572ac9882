"""
Pytest configuration and fixtures
"""
import os
import sys
from pathlib import Path
from typing import List, Tuple
from uuid import uuid4

import pytest
from sqlalchemy.orm import Session

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

# Tests run against a private in-memory SQLite database and never reach the media host
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ["CLOUDINARY_CLOUD_NAME"] = ""
os.environ["CLOUDINARY_API_KEY"] = ""
os.environ["CLOUDINARY_API_SECRET"] = ""

from app.core.database import Base, get_engine, get_session_local
from app.core.media_client import MediaClient


class FakeMediaClient(MediaClient):
    """Records uploads instead of calling the media host"""

    def __init__(self):
        super().__init__()
        self.uploads: List[Tuple[str, str, int]] = []
        self.fail_with = None

    async def upload_image(self, content, filename, content_type, folder=None):
        if self.fail_with is not None:
            raise self.fail_with
        self.uploads.append((filename, content_type, len(content)))
        return f"https://media.example.com/uploads/{filename}"


@pytest.fixture(scope="function")
def db() -> Session:
    """Create a database session on a fresh schema"""
    import app.models  # noqa: F401

    engine = get_engine()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    session = get_session_local()()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def media_client() -> FakeMediaClient:
    return FakeMediaClient()


@pytest.fixture(scope="function")
def client(db: Session, media_client: FakeMediaClient):
    """Create test client with database and media host overrides"""
    from fastapi.testclient import TestClient

    from app.core.database import get_db
    from app.core.media_client import get_media_client
    from main import app

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_client] = lambda: media_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def user_id() -> str:
    return str(uuid4())


@pytest.fixture
def community(client, user_id) -> dict:
    """A community created through the API"""
    response = client.post(
        "/api/v1/communities",
        json={"user_id": user_id, "name": "Urban Cyclists", "description": "Bikes in the city"},
    )
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
def post(client, community, user_id) -> dict:
    """A post in the community fixture"""
    response = client.post(
        "/api/v1/posts",
        json={
            "community_id": community["id"],
            "user_id": user_id,
            "title": "Best winter tyres",
            "category": "gear",
            "description": "Looking for studded tyres that survive slush",
        },
    )
    assert response.status_code == 201
    return response.json()["data"]
