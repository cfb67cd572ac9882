"""
Media Service: validates image uploads and forwards them to the media host
"""
import time
from typing import Optional

from fastapi import UploadFile

from app.core.config import get_settings
from app.core.exceptions import (MediaUploadError, PayloadTooLargeError,
                                 ValidationError)
from app.core.logging_config import LoggingConfig
from app.core.media_client import MediaClient
from app.core.metrics import media_upload_duration_seconds, media_uploads_total

logger = LoggingConfig.get_logger(__name__)


class MediaService:
    """Accepts image files only, up to the configured size"""

    def __init__(self, client: MediaClient, max_bytes: Optional[int] = None):
        self.client = client
        self.max_bytes = max_bytes or get_settings().media_max_upload_bytes

    async def upload(self, file: Optional[UploadFile]) -> str:
        """
        Validate and upload an image

        Returns:
            Secure URL of the stored image
        """
        if file is None or not file.filename:
            media_uploads_total.labels(status="rejected").inc()
            raise ValidationError("No file uploaded")

        content_type = (file.content_type or "").lower()
        if not content_type.startswith("image/"):
            media_uploads_total.labels(status="rejected").inc()
            raise ValidationError("Only image files are allowed")

        # Read one byte past the limit so oversize files are detected without reading them fully
        content = await file.read(self.max_bytes + 1)
        if len(content) > self.max_bytes:
            media_uploads_total.labels(status="rejected").inc()
            raise PayloadTooLargeError(f"File exceeds the {self.max_bytes} byte limit")
        if not content:
            media_uploads_total.labels(status="rejected").inc()
            raise ValidationError("Uploaded file is empty")

        start_time = time.time()
        try:
            url = await self.client.upload_image(content, file.filename, content_type)
        except MediaUploadError as e:
            media_uploads_total.labels(status="failed").inc()
            logger.error(
                "Media upload failed",
                extra={"upload_name": file.filename, "cause": e.cause},
            )
            raise
        finally:
            media_upload_duration_seconds.observe(time.time() - start_time)

        media_uploads_total.labels(status="success").inc()
        logger.info(
            "Media uploaded",
            extra={"upload_name": file.filename, "size_bytes": len(content), "content_type": content_type},
        )
        return url
