"""
Media upload schemas
"""
from pydantic import BaseModel


class MediaUploadResponse(BaseModel):
    url: str
