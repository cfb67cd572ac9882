"""
Domain exceptions mapped to HTTP status codes
"""
from typing import Any, Dict, List, Optional


class ContentServiceError(Exception):
    """Base error for the content service"""

    status_code: int = 500
    error_type: str = "internal_error"

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "message": self.message,
            "errors": self.errors,
        }


class ValidationError(ContentServiceError):
    """Request is well-formed JSON but violates a business rule"""
    status_code = 400
    error_type = "validation_error"


class NotFoundError(ContentServiceError):
    status_code = 404
    error_type = "not_found"

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(ContentServiceError):
    """Duplicate name or other uniqueness violation"""
    status_code = 409
    error_type = "conflict"


class PayloadTooLargeError(ContentServiceError):
    status_code = 413
    error_type = "payload_too_large"


class MediaUploadError(ContentServiceError):
    """The media host rejected the upload or could not be reached"""
    status_code = 502
    error_type = "media_upload_failed"

    def __init__(self, message: str = "Failed to upload media", cause: Optional[str] = None):
        super().__init__(message)
        self.cause = cause
