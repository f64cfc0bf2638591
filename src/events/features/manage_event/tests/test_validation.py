from datetime import date, time

import pytest

from src.errors import EventValidationError
from src.events.dtos import EventCategory, EventFormDTO, ImageUploadDTO
from src.events.features.manage_event.validation import validate_event_form, validate_image


def test_validate_full_form():
    draft = validate_event_form(
        EventFormDTO(
            title="  Summer Festival ",
            event_date="2026-07-18",
            description="Live music",
            category="Festival",
            location="Utrecht",
            time_from="14:00",
            time_to="23:30",
        )
    )

    assert draft.title == "Summer Festival"
    assert draft.event_date == date(2026, 7, 18)
    assert draft.category == EventCategory.FESTIVAL
    assert draft.time_from == time(14, 0)
    assert draft.time_to == time(23, 30)


def test_validate_minimal_form_blanks_become_none():
    draft = validate_event_form(EventFormDTO(title="Meetup", event_date="2026-01-10"))

    assert draft.description is None
    assert draft.category is None
    assert draft.location is None
    assert draft.time_from is None
    assert draft.time_to is None


@pytest.mark.parametrize(
    "form, field",
    [
        (EventFormDTO(title="", event_date="2026-01-10"), "title"),
        (EventFormDTO(title="   ", event_date="2026-01-10"), "title"),
        (EventFormDTO(title="Meetup", event_date=""), "event_date"),
        (EventFormDTO(title="Meetup", event_date="10/01/2026"), "event_date"),
        (EventFormDTO(title="Meetup", event_date="2026-01-10", time_from="10:00"), "time_to"),
        (EventFormDTO(title="Meetup", event_date="2026-01-10", time_to="12:00"), "time_from"),
        (EventFormDTO(title="Meetup", event_date="2026-01-10", time_from="noon", time_to="13:00"), "time_from"),
        (EventFormDTO(title="Meetup", event_date="2026-01-10", category="Party"), "category"),
        (EventFormDTO(title="x" * 256, event_date="2026-01-10"), "title"),
        (EventFormDTO(title="Meetup", event_date="2026-01-10", location="x" * 501), "location"),
    ],
)
def test_invalid_forms(form, field):
    with pytest.raises(EventValidationError) as exc_info:
        validate_event_form(form)

    assert exc_info.value.field == field


def test_validate_image_accepts_image():
    validate_image(ImageUploadDTO(filename="a.jpg", content=b"x" * 10, content_type="image/jpeg"))


@pytest.mark.parametrize(
    "image",
    [
        ImageUploadDTO(filename="a.pdf", content=b"%PDF", content_type="application/pdf"),
        ImageUploadDTO(filename="a.png", content=b"", content_type="image/png"),
        ImageUploadDTO(filename="a.png", content=b"x" * 11, content_type="image/png"),
    ],
)
def test_validate_image_rejects(image):
    with pytest.raises(EventValidationError) as exc_info:
        validate_image(image, max_bytes=10)

    assert exc_info.value.field == "image"


def test_validate_form_at_length_limits():
    draft = validate_event_form(
        EventFormDTO(title="x" * 255, event_date="2026-01-10", location="y" * 500)
    )

    assert len(draft.title) == 255
    assert len(draft.location) == 500
