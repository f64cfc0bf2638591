"""Response and request bodies shared by the event features."""

from datetime import date, datetime, time
from uuid import UUID

from pydantic import BaseModel

from src.events.dtos import (
    AttendanceStateDTO,
    EventCategory,
    EventDTO,
    FailureReason,
    OutcomeKind,
    RSVPStatus,
)


class EventResponse(BaseModel):
    """Response for a single event."""

    id: UUID
    owner_id: str
    title: str
    event_date: date
    description: str | None = None
    category: EventCategory | None = None
    location: str | None = None
    time_from: time | None = None
    time_to: time | None = None
    image_url: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_dto(cls, event: EventDTO) -> "EventResponse":
        return cls(
            id=event.id,
            owner_id=event.owner_id,
            title=event.title,
            event_date=event.event_date,
            description=event.description,
            category=event.category,
            location=event.location,
            time_from=event.time_from,
            time_to=event.time_to,
            image_url=event.image_url,
            created_at=event.created_at,
        )


class AttendanceState(BaseModel):
    """The caller's RSVP status and the number of attendees."""

    status: RSVPStatus | None = None
    count: int

    @classmethod
    def from_dto(cls, state: AttendanceStateDTO) -> "AttendanceState":
        return cls(status=state.status, count=state.count)

    def to_dto(self) -> AttendanceStateDTO:
        return AttendanceStateDTO(status=self.status, count=self.count)


class EventOutcomeResponse(BaseModel):
    """Response for event create, update and delete."""

    kind: OutcomeKind
    message: str
    event: EventResponse | None = None
    reason: FailureReason | None = None
