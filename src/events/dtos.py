from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from src.events.repository.orm_models import Event

TITLE_MAX_LENGTH = 255
LOCATION_MAX_LENGTH = 500


class EventCategory(str, Enum):
    CONFERENCE = "Conference"
    WORKSHOP = "Workshop"
    SEMINAR = "Seminar"
    NETWORKING = "Networking"
    SOCIAL = "Social"
    SPORTS = "Sports"
    CONCERT = "Concert"
    FESTIVAL = "Festival"
    FUNDRAISER = "Fundraiser"
    OTHER = "Other"


class RSVPStatus(str, Enum):
    ATTENDING = "attending"
    NOT_ATTENDING = "not_attending"


class OutcomeKind(str, Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    FAILED = "failed"


class FailureReason(str, Enum):
    DUPLICATE_RSVP = "duplicate_rsvp"
    NOT_FOUND = "not_found"
    REMOTE_FAILURE = "remote_failure"
    RESYNC_FAILED = "resync_failed"


@dataclass(frozen=True)
class EventDTO:
    """Event record as returned by the repository."""

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
    def from_event(cls, event: "Event") -> "EventDTO":
        """Create EventDTO from Event ORM model."""
        return cls(
            id=event.uuid,
            owner_id=event.owner_id,
            title=event.title,
            event_date=event.event_date,
            description=event.description,
            category=EventCategory(event.category) if event.category else None,
            location=event.location,
            time_from=event.time_from,
            time_to=event.time_to,
            image_url=event.image_url,
            created_at=event.created_at,
        )


@dataclass(frozen=True)
class EventFormDTO:
    """Raw event fields as submitted by the event form. Empty string means unset."""

    title: str = ""
    event_date: str = ""
    description: str = ""
    category: str = ""
    location: str = ""
    time_from: str = ""
    time_to: str = ""


@dataclass(frozen=True)
class EventDraftDTO:
    """Validated event fields, ready to be written."""

    title: str
    event_date: date
    description: str | None = None
    category: EventCategory | None = None
    location: str | None = None
    time_from: time | None = None
    time_to: time | None = None

    def as_fields(self) -> dict:
        return {
            "title": self.title,
            "event_date": self.event_date,
            "description": self.description,
            "category": self.category,
            "location": self.location,
            "time_from": self.time_from,
            "time_to": self.time_to,
        }


@dataclass(frozen=True)
class ImageUploadDTO:
    filename: str
    content: bytes
    content_type: str | None = None


@dataclass(frozen=True)
class EventFilterDTO:
    owner_id: str | None = None
    category: EventCategory | None = None
    date_from: date | None = None
    date_to: date | None = None
    title: str | None = None
    exclude_id: UUID | None = None
    limit: int | None = None


@dataclass(frozen=True)
class AttendanceStateDTO:
    """The caller's RSVP status (None when there is no record) and the attending count."""

    status: RSVPStatus | None
    count: int


@dataclass(frozen=True)
class RSVPOutcomeDTO:
    kind: OutcomeKind
    message: str
    state: AttendanceStateDTO | None
    reason: FailureReason | None = None
    synced: bool = True

    @property
    def succeeded(self) -> bool:
        return self.kind != OutcomeKind.FAILED


@dataclass(frozen=True)
class EventOutcomeDTO:
    kind: OutcomeKind
    message: str
    event: EventDTO | None = None
    reason: FailureReason | None = None

    @property
    def succeeded(self) -> bool:
        return self.kind != OutcomeKind.FAILED


@dataclass(frozen=True)
class EventDetailDTO:
    event: EventDTO
    related_events: list[EventDTO] = field(default_factory=list)
