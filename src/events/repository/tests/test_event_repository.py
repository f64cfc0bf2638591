from datetime import date, time

import pytest

from src.events.dtos import EventCategory, EventDraftDTO, EventFilterDTO
from src.events.repository.event_repository import SqlEventRepository


@pytest.fixture
def repository(sqlite_session_maker):
    return SqlEventRepository(session_maker=sqlite_session_maker)


def make_draft(title: str, event_date: date, category: EventCategory | None = None) -> EventDraftDTO:
    return EventDraftDTO(title=title, event_date=event_date, category=category)


@pytest.mark.asyncio
async def test_insert_and_get_event(repository):
    draft = EventDraftDTO(
        title="Kubernetes Workshop",
        event_date=date(2026, 6, 1),
        description="Bring a laptop",
        category=EventCategory.WORKSHOP,
        location="Lisbon",
        time_from=time(9, 30),
        time_to=time(12, 0),
    )

    created = await repository.insert_event("user-1", draft, image_url="https://cdn/x.png")
    loaded = await repository.get_event(created.id)

    assert loaded == created
    assert loaded.owner_id == "user-1"
    assert loaded.category == EventCategory.WORKSHOP
    assert loaded.time_from == time(9, 30)
    assert loaded.image_url == "https://cdn/x.png"
    assert loaded.created_at is not None


@pytest.mark.asyncio
async def test_get_missing_event(repository):
    created = await repository.insert_event("user-1", make_draft("Gone", date(2026, 1, 1)))
    await repository.delete_event(created.id, "user-1")

    assert await repository.get_event(created.id) is None


@pytest.mark.asyncio
async def test_list_events_filters_and_order(repository):
    await repository.insert_event("user-1", make_draft("Late Concert", date(2026, 9, 1), EventCategory.CONCERT))
    await repository.insert_event("user-2", make_draft("Early Concert", date(2026, 2, 1), EventCategory.CONCERT))
    await repository.insert_event("user-1", make_draft("Hackathon", date(2026, 5, 1), EventCategory.OTHER))

    everything = await repository.list_events()
    concerts = await repository.list_events(EventFilterDTO(category=EventCategory.CONCERT))
    mine = await repository.list_events(EventFilterDTO(owner_id="user-1"))
    spring = await repository.list_events(
        EventFilterDTO(date_from=date(2026, 3, 1), date_to=date(2026, 6, 30))
    )
    searched = await repository.list_events(EventFilterDTO(title="CONCERT", limit=1))

    assert [e.title for e in everything] == ["Early Concert", "Hackathon", "Late Concert"]
    assert [e.title for e in concerts] == ["Early Concert", "Late Concert"]
    assert [e.title for e in mine] == ["Hackathon", "Late Concert"]
    assert [e.title for e in spring] == ["Hackathon"]
    assert [e.title for e in searched] == ["Early Concert"]


@pytest.mark.asyncio
async def test_list_events_excludes_id(repository):
    first = await repository.insert_event("user-1", make_draft("One", date(2026, 2, 1)))
    await repository.insert_event("user-1", make_draft("Two", date(2026, 3, 1)))

    events = await repository.list_events(EventFilterDTO(exclude_id=first.id))

    assert [e.title for e in events] == ["Two"]


@pytest.mark.asyncio
async def test_update_event_scoped_to_owner(repository):
    created = await repository.insert_event("user-1", make_draft("Draft", date(2026, 2, 1)))
    changes = make_draft("Final", date(2026, 2, 2), EventCategory.SEMINAR)

    by_stranger = await repository.update_event(created.id, "user-2", changes)
    by_owner = await repository.update_event(created.id, "user-1", changes, image_url="https://cdn/y.png")

    assert by_stranger is None
    assert by_owner.title == "Final"
    assert by_owner.category == EventCategory.SEMINAR
    assert by_owner.image_url == "https://cdn/y.png"
    assert (await repository.get_event(created.id)).title == "Final"


@pytest.mark.asyncio
async def test_delete_event_scoped_to_owner(repository):
    created = await repository.insert_event("user-1", make_draft("Keep", date(2026, 2, 1)))

    by_stranger = await repository.delete_event(created.id, "user-2")
    assert by_stranger is None
    assert await repository.get_event(created.id) is not None

    deleted = await repository.delete_event(created.id, "user-1")
    assert deleted.id == created.id
    assert await repository.get_event(created.id) is None
