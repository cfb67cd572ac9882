"""
API route for image uploads
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from app.core.media_client import MediaClient, get_media_client
from app.schemas.common import ApiResponse, envelope
from app.schemas.media import MediaUploadResponse
from app.services.media_service import MediaService

router = APIRouter(prefix="/media", tags=["media"])


@router.post("/upload", response_model=ApiResponse[MediaUploadResponse])
async def upload_media(
    media: Optional[UploadFile] = File(default=None, description="Image file"),
    client: MediaClient = Depends(get_media_client),
):
    """Forward an image to the media host and return its public URL"""
    url = await MediaService(client).upload(media)
    return envelope({"url": url}, "Media uploaded successfully")
