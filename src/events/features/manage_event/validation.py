from datetime import date, time

from src.config.settings import settings
from src.errors import EventValidationError
from src.events.dtos import (
    LOCATION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    EventCategory,
    EventDraftDTO,
    EventFormDTO,
    ImageUploadDTO,
)


def _optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise EventValidationError("event_date", "Event date must be a valid date (YYYY-MM-DD)")


def _parse_time(field: str, value: str) -> time:
    try:
        return time.fromisoformat(value)
    except ValueError:
        raise EventValidationError(field, "Time must be formatted as HH:MM")


def _check_length(field: str, label: str, value: str | None, max_length: int) -> None:
    if value is not None and len(value) > max_length:
        raise EventValidationError(field, f"{label} must be at most {max_length} characters")


def validate_event_form(form: EventFormDTO) -> EventDraftDTO:
    """Check the submitted fields and convert them to typed values."""
    title = _optional(form.title)
    if title is None:
        raise EventValidationError("title", "Title is required")
    _check_length("title", "Title", title, TITLE_MAX_LENGTH)

    location = _optional(form.location)
    _check_length("location", "Location", location, LOCATION_MAX_LENGTH)

    event_date = _optional(form.event_date)
    if event_date is None:
        raise EventValidationError("event_date", "Event date is required")

    time_from = _optional(form.time_from)
    time_to = _optional(form.time_to)
    if (time_from is None) != (time_to is None):
        raise EventValidationError(
            "time_to" if time_to is None else "time_from",
            "Provide both a start and an end time, or neither",
        )

    category = _optional(form.category)
    if category is not None:
        try:
            category = EventCategory(category)
        except ValueError:
            allowed = ", ".join(c.value for c in EventCategory)
            raise EventValidationError("category", f"Category must be one of: {allowed}")

    return EventDraftDTO(
        title=title,
        event_date=_parse_date(event_date),
        description=_optional(form.description),
        category=category,
        location=location,
        time_from=_parse_time("time_from", time_from) if time_from else None,
        time_to=_parse_time("time_to", time_to) if time_to else None,
    )


def validate_image(image: ImageUploadDTO, max_bytes: int = settings.max_image_bytes) -> None:
    if image.content_type and not image.content_type.startswith("image/"):
        raise EventValidationError("image", "Only image files can be uploaded")
    if not image.content:
        raise EventValidationError("image", "Image file is empty")
    if len(image.content) > max_bytes:
        raise EventValidationError("image", f"Image must be at most {max_bytes // (1024 * 1024)}MB")
