"""
API routes for events
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.common import ApiResponse, envelope
from app.schemas.event import (CreateEventRequest, EventResponse,
                               UpdateEventRequest)
from app.services.event_service import EventService

router = APIRouter(prefix="/events", tags=["events"])


@router.post(
    "",
    response_model=ApiResponse[EventResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_event(
    request: CreateEventRequest,
    db: Session = Depends(get_db)
):
    event = EventService(db).create_event(**request.model_dump())
    return envelope(event, "Event created successfully")


@router.get("", response_model=ApiResponse[List[EventResponse]])
async def list_events(
    community_id: Optional[UUID] = None,
    upcoming: bool = Query(default=False, description="Only events that have not started yet"),
    search: Optional[str] = Query(default=None, description="Substring of the title"),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db)
):
    """List events ordered by start time"""
    events = EventService(db).list_events(
        community_id=community_id,
        upcoming=upcoming,
        search=search,
        limit=limit,
        offset=offset,
    )
    return envelope(events, "Events fetched successfully")


@router.get("/{event_id}", response_model=ApiResponse[EventResponse])
async def get_event(
    event_id: UUID,
    db: Session = Depends(get_db)
):
    event = EventService(db).require_event(event_id)
    return envelope(event, "Event fetched successfully")


@router.put("/{event_id}", response_model=ApiResponse[EventResponse])
async def update_event(
    event_id: UUID,
    request: UpdateEventRequest,
    db: Session = Depends(get_db)
):
    event = EventService(db).update_event(event_id, **request.model_dump(exclude_unset=True))
    return envelope(event, "Event updated successfully")


@router.delete("/{event_id}", response_model=ApiResponse[None])
async def delete_event(
    event_id: UUID,
    db: Session = Depends(get_db)
):
    EventService(db).delete_event(event_id)
    return envelope(None, "Event deleted successfully")
