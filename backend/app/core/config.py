"""
Configuration management using Pydantic Settings
"""
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# config.py is at: backend/app/core/config.py
_current_file = Path(__file__).resolve()
_backend_dir = _current_file.parent.parent.parent
_project_root = _backend_dir.parent
ENV_FILE = _project_root / ".env"
# Fallback: backend/.env
if not ENV_FILE.exists():
    ENV_FILE = _backend_dir / ".env"
if ENV_FILE.exists():
    load_dotenv(ENV_FILE, override=False)


class MediaHostConfig(BaseSettings):
    """Credentials and limits for the external media host"""
    cloud_name: str = Field(default="", description="Media host cloud name")
    api_key: str = Field(default="", description="Media host API key")
    api_secret: str = Field(default="", description="Media host API secret")
    base_url: str = Field(default="https://api.cloudinary.com/v1_1", description="Media host API base URL")
    folder: str = Field(default="uploads", description="Destination folder")
    timeout_seconds: float = Field(default=30.0, gt=0, description="Upload timeout")

    @property
    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "Content Service"
    app_env: str = Field(default="development", description="Application environment")
    app_version: str = Field(default="0.1.0", description="Application version")
    log_level: str = Field(default="INFO", description="Logging level")
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="API port")
    api_prefix: str = Field(default="/api/v1", description="Prefix for content routes")
    allowed_origins: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)"
    )

    # Logging
    log_sqlalchemy: bool = Field(default=False, description="Enable SQLAlchemy query logging")
    log_uvicorn_access: bool = Field(default=False, description="Enable Uvicorn access logging")
    log_module_levels: Optional[str] = Field(
        default=None,
        description='Module-specific log levels (JSON string, e.g., {"app.services": "DEBUG"})'
    )
    log_format: str = Field(
        default="json",
        description="Log format: 'json' for structured logging, 'text' for plain text"
    )
    log_file_enabled: bool = Field(default=False, description="Enable file logging")
    log_file_path: str = Field(
        default="logs/content_service.log",
        description="Path to log file (relative to project root)"
    )
    log_file_rotation: str = Field(
        default="midnight",
        description="Log file rotation: 'midnight' or 'W0'..'W6' (weekly)"
    )
    log_file_retention: int = Field(
        default=30,
        ge=1,
        description="Number of rotated log files to keep"
    )
    log_sensitive_data: bool = Field(
        default=False,
        description="Disable masking of secrets in logs - NOT RECOMMENDED"
    )

    # Database
    database_url_override: Optional[str] = Field(
        default=None,
        validation_alias="DATABASE_URL",
        description="Full database URL; takes precedence over POSTGRES_* settings"
    )
    postgres_host: str = Field(default="localhost", description="PostgreSQL host")
    postgres_db: str = Field(default="content_db", description="PostgreSQL database name")
    postgres_user: str = Field(default="postgres", description="PostgreSQL user")
    postgres_password: str = Field(default="postgres", description="PostgreSQL password")
    postgres_port: int = Field(default=5432, ge=1, le=65535, description="PostgreSQL port")
    database_pool_size: int = Field(default=10, ge=1, description="Database pool size")
    database_max_overflow: int = Field(default=20, ge=0, description="Database max overflow")

    # Media host
    cloudinary_cloud_name: str = Field(default="", description="Media host cloud name")
    cloudinary_api_key: str = Field(default="", description="Media host API key")
    cloudinary_api_secret: str = Field(default="", description="Media host API secret")
    media_upload_url: str = Field(
        default="https://api.cloudinary.com/v1_1",
        description="Base URL of the media host upload API"
    )
    media_upload_folder: str = Field(default="uploads", description="Folder uploaded images land in")
    media_max_upload_bytes: int = Field(
        default=2 * 1024 * 1024,
        ge=1,
        description="Maximum accepted image size in bytes"
    )
    media_upload_timeout_seconds: float = Field(default=30.0, gt=0, description="Media host request timeout")

    @field_validator("api_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        """Ensure prefix starts with a slash and has no trailing slash"""
        v = (v or "").strip()
        if not v:
            return ""
        if not v.startswith("/"):
            v = "/" + v
        return v.rstrip("/")

    @property
    def database_url(self) -> str:
        """Construct database URL"""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def media_host(self) -> MediaHostConfig:
        """Get media host config"""
        return MediaHostConfig(
            cloud_name=self.cloudinary_cloud_name,
            api_key=self.cloudinary_api_key,
            api_secret=self.cloudinary_api_secret,
            base_url=self.media_upload_url,
            folder=self.media_upload_folder,
            timeout_seconds=self.media_upload_timeout_seconds,
        )

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    def info(self) -> Dict[str, str]:
        return {
            "name": self.app_name,
            "version": self.app_version,
            "environment": self.app_env,
        }

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
