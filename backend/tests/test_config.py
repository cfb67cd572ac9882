"""
Tests for settings and logging helpers
"""
import logging

from app.core.config import Settings
from app.core.logging_config import SensitiveDataFilter


def test_database_url_prefers_override():
    settings = Settings(DATABASE_URL="sqlite:///./content.db")
    assert settings.database_url == "sqlite:///./content.db"
    assert settings.is_sqlite is True


def test_database_url_built_from_postgres_settings(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    settings = Settings(
        postgres_host="db",
        postgres_user="svc",
        postgres_password="pw",
        postgres_db="content",
        postgres_port=5433,
    )
    assert settings.database_url == "postgresql://svc:pw@db:5433/content"
    assert settings.is_sqlite is False


def test_api_prefix_is_normalized():
    assert Settings(api_prefix="api/v2/").api_prefix == "/api/v2"


def test_allowed_origins_list():
    settings = Settings(allowed_origins="https://a.example, https://b.example,")
    assert settings.allowed_origins_list == ["https://a.example", "https://b.example"]


def test_media_host_config_from_settings():
    settings = Settings(
        cloudinary_cloud_name="cloud",
        cloudinary_api_key="key",
        cloudinary_api_secret="secret",
        media_upload_folder="posts",
    )
    media = settings.media_host
    assert media.is_configured is True
    assert media.cloud_name == "cloud"
    assert media.folder == "posts"


def test_sensitive_filter_masks_secrets():
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="connecting with password=hunter2",
        args=(),
        exc_info=None,
    )

    SensitiveDataFilter(enabled=True).filter(record)

    assert "hunter2" not in record.getMessage()
