import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from src.auth.session import SessionUser, get_session_user, require_session
from src.errors import RemoteFailure
from src.events.dependencies import get_event_repository
from src.events.dtos import EventCategory, EventDTO, EventFilterDTO
from src.events.repository.event_repository import EventRepository
from src.events.schemas import EventResponse
from src.events.urls import EVENT_URL, EVENTS_URL, MY_EVENTS_URL

logger = logging.getLogger(__name__)

router = APIRouter()

RELATED_EVENTS_LIMIT = 3


class EventListResponse(BaseModel):
    """Response for a list of events."""

    message: str
    events: list[EventResponse]


class EventDetailResponse(BaseModel):
    """Response for a single event with related upcoming events."""

    message: str
    event: EventResponse
    related_events: list[EventResponse] = []


async def _list(repository: EventRepository, filters: EventFilterDTO) -> list[EventDTO]:
    try:
        return await repository.list_events(filters)
    except RemoteFailure as e:
        logger.error("Failed to list events: %s", e)
        raise HTTPException(status_code=502, detail="Failed to load events")


def _list_response(events: list[EventDTO]) -> EventListResponse:
    return EventListResponse(
        message=f"Found {len(events)} event(s)",
        events=[EventResponse.from_dto(event) for event in events],
    )


@router.get(EVENTS_URL, response_model=EventListResponse)
async def list_events(
    category: EventCategory | None = Query(default=None),
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
    title: str | None = Query(default=None),
    repository: EventRepository = Depends(get_event_repository),
) -> EventListResponse:
    """
    List all events, soonest first.
    Optional filters: category, date range (inclusive) and a case-insensitive title search.
    """
    filters = EventFilterDTO(
        category=category,
        date_from=date_from,
        date_to=date_to,
        title=title or None,
    )
    return _list_response(await _list(repository, filters))


@router.get(MY_EVENTS_URL, response_model=EventListResponse)
async def list_my_events(
    session: SessionUser | None = Depends(get_session_user),
    repository: EventRepository = Depends(get_event_repository),
) -> EventListResponse:
    """List the events created by the signed-in user."""
    user = require_session(session)
    return _list_response(await _list(repository, EventFilterDTO(owner_id=user.user_id)))


@router.get(EVENT_URL, response_model=EventDetailResponse)
async def get_event(
    event_id: UUID,
    repository: EventRepository = Depends(get_event_repository),
) -> EventDetailResponse:
    """
    Get an event and up to three upcoming events of the same category.
    """
    try:
        event = await repository.get_event(event_id)
    except RemoteFailure as e:
        logger.error("Failed to load event %s: %s", event_id, e)
        raise HTTPException(status_code=502, detail="Failed to load event")

    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")

    related: list[EventDTO] = []
    if event.category is not None:
        filters = EventFilterDTO(
            category=event.category,
            date_from=event.event_date,
            exclude_id=event.id,
            limit=RELATED_EVENTS_LIMIT,
        )
        try:
            related = await repository.list_events(filters)
        except RemoteFailure as e:
            # The event itself loaded, so it is still served
            logger.warning("Failed to load related events for %s: %s", event_id, e)

    return EventDetailResponse(
        message="Event found",
        event=EventResponse.from_dto(event),
        related_events=[EventResponse.from_dto(e) for e in related],
    )
