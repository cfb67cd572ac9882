"""
API routes for communities
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.common import ApiResponse, envelope
from app.schemas.community import (CommunityResponse, CreateCommunityRequest,
                                   UpdateCommunityRequest)
from app.schemas.post import PostResponse
from app.services.community_service import CommunityService
from app.services.post_service import PostService

router = APIRouter(prefix="/communities", tags=["communities"])


@router.post(
    "",
    response_model=ApiResponse[CommunityResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_community(
    request: CreateCommunityRequest,
    db: Session = Depends(get_db)
):
    """Create a community; names are unique ignoring case"""
    community = CommunityService(db).create_community(
        user_id=request.user_id,
        name=request.name,
        description=request.description,
    )
    return envelope(community, "Community created successfully")


@router.get("", response_model=ApiResponse[List[CommunityResponse]])
async def list_communities(
    search: Optional[str] = Query(default=None, description="Substring of the name"),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db)
):
    communities = CommunityService(db).list_communities(search=search, limit=limit, offset=offset)
    return envelope(communities, "Communities fetched successfully")


@router.get("/{community_id}", response_model=ApiResponse[CommunityResponse])
async def get_community(
    community_id: UUID,
    db: Session = Depends(get_db)
):
    community = CommunityService(db).require_community(community_id)
    return envelope(community, "Community fetched successfully")


@router.put("/{community_id}", response_model=ApiResponse[CommunityResponse])
async def update_community(
    community_id: UUID,
    request: UpdateCommunityRequest,
    db: Session = Depends(get_db)
):
    community = CommunityService(db).update_community(
        community_id,
        name=request.name,
        description=request.description,
    )
    return envelope(community, "Community updated successfully")


@router.delete("/{community_id}", response_model=ApiResponse[None])
async def delete_community(
    community_id: UUID,
    db: Session = Depends(get_db)
):
    """Delete a community with its posts, comments, likes and events"""
    CommunityService(db).delete_community(community_id)
    return envelope(None, "Community deleted successfully")


@router.get("/{community_id}/posts", response_model=ApiResponse[List[PostResponse]])
async def get_posts_by_community(
    community_id: UUID,
    db: Session = Depends(get_db)
):
    """Posts of a community, newest first"""
    CommunityService(db).require_community(community_id)
    posts = PostService(db).list_posts(community_id=community_id)
    return envelope(posts, "Posts fetched successfully")
