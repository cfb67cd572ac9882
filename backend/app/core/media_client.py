"""
Client for the external media host (Cloudinary-compatible signed upload API)
"""
import time
from typing import Any, Dict, Optional

import httpx
from cloudinary.utils import api_sign_request

from app.core.config import MediaHostConfig, get_settings
from app.core.exceptions import MediaUploadError
from app.core.logging_config import LoggingConfig

logger = LoggingConfig.get_logger(__name__)


def sign_params(params: Dict[str, Any], api_secret: str) -> str:
    """
    Sign upload parameters the way the media host expects:
    sorted key=value pairs joined by '&', followed by the secret, SHA-1 hex digest.
    Empty values are not signed.
    """
    return api_sign_request(params, api_secret)


class MediaClient:
    """
    Uploads image bytes to the media host and returns the public secure URL
    """

    def __init__(
        self,
        config: Optional[MediaHostConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or get_settings().media_host
        self._transport = transport

    @property
    def upload_url(self) -> str:
        base = self.config.base_url.rstrip("/")
        return f"{base}/{self.config.cloud_name}/image/upload"

    def _build_form(self, folder: str) -> Dict[str, str]:
        params = {
            "folder": folder,
            "timestamp": str(int(time.time())),
        }
        form = dict(params)
        form["api_key"] = self.config.api_key
        form["signature"] = sign_params(params, self.config.api_secret)
        return form

    async def upload_image(
        self,
        content: bytes,
        filename: str,
        content_type: str,
        folder: Optional[str] = None,
    ) -> str:
        """
        Upload an image and return its secure URL

        Raises:
            MediaUploadError: host not configured, unreachable, or rejected the file
        """
        if not self.config.is_configured:
            raise MediaUploadError(cause="media host credentials are not configured")

        form = self._build_form(folder or self.config.folder)
        files = {"file": (filename or "upload", content, content_type)}

        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(self.upload_url, data=form, files=files)
        except httpx.HTTPError as e:
            logger.error(
                "Media host request failed",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            raise MediaUploadError(cause=str(e)) from e

        if response.status_code >= 400:
            logger.error(
                "Media host rejected upload",
                extra={"status_code": response.status_code, "body": response.text[:500]},
            )
            raise MediaUploadError(cause=f"media host returned {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise MediaUploadError(cause="media host returned invalid JSON") from e

        secure_url = payload.get("secure_url")
        if not secure_url:
            raise MediaUploadError(cause="media host response has no secure_url")

        logger.info(
            "Uploaded media",
            extra={"public_id": payload.get("public_id"), "bytes": len(content)},
        )
        return secure_url


def get_media_client() -> MediaClient:
    """Dependency returning a media client bound to current settings"""
    return MediaClient()
