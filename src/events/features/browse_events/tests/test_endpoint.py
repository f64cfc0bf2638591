from datetime import date

import pytest

from src.events.dependencies import get_event_repository
from src.events.dtos import EventCategory
from src.events.tests.inmemory_models import InMemoryEventRepository, create_test_event
from src.events.urls import EVENT_URL, EVENTS_URL, MY_EVENTS_URL


@pytest.fixture
def conference():
    return create_test_event(
        title="PyCon Europe",
        owner_id="user-1",
        event_date=date(2026, 3, 14),
        category=EventCategory.CONFERENCE,
    )


@pytest.fixture
def repository(conference):
    return InMemoryEventRepository(
        events=[
            conference,
            create_test_event(
                title="Rust Conf",
                owner_id="user-2",
                event_date=date(2026, 4, 1),
                category=EventCategory.CONFERENCE,
            ),
            create_test_event(
                title="Old Conference",
                owner_id="user-2",
                event_date=date(2026, 1, 1),
                category=EventCategory.CONFERENCE,
            ),
            create_test_event(
                title="Charity Run",
                owner_id="user-1",
                event_date=date(2026, 2, 20),
                category=EventCategory.SPORTS,
            ),
        ]
    )


@pytest.mark.asyncio
async def test_list_events_ordered_by_date(client_factory, repository):
    overrides = {get_event_repository: lambda: repository}

    async with client_factory(overrides) as client:
        response = await client.get(EVENTS_URL)

    assert response.status_code == 200
    data = response.json()
    assert [e["title"] for e in data["events"]] == [
        "Old Conference",
        "Charity Run",
        "PyCon Europe",
        "Rust Conf",
    ]
    assert data["message"] == "Found 4 event(s)"


@pytest.mark.asyncio
async def test_list_events_with_filters(client_factory, repository):
    overrides = {get_event_repository: lambda: repository}

    async with client_factory(overrides) as client:
        response = await client.get(
            EVENTS_URL,
            params={"category": "Conference", "date_from": "2026-02-01", "title": "pycon"},
        )

    assert response.status_code == 200
    assert [e["title"] for e in response.json()["events"]] == ["PyCon Europe"]


@pytest.mark.asyncio
async def test_list_events_rejects_unknown_category(client_factory, repository):
    overrides = {get_event_repository: lambda: repository}

    async with client_factory(overrides) as client:
        response = await client.get(EVENTS_URL, params={"category": "Party"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_events_remote_failure(client_factory, repository):
    repository.fail_on.add("list_events")
    overrides = {get_event_repository: lambda: repository}

    async with client_factory(overrides) as client:
        response = await client.get(EVENTS_URL)

    assert response.status_code == 502
    assert response.json()["message"] == "Failed to load events"


@pytest.mark.asyncio
async def test_my_events(client_factory, repository, auth_headers):
    overrides = {get_event_repository: lambda: repository}

    async with client_factory(overrides) as client:
        response = await client.get(MY_EVENTS_URL, headers=auth_headers)

    assert response.status_code == 200
    assert [e["title"] for e in response.json()["events"]] == ["Charity Run", "PyCon Europe"]


@pytest.mark.asyncio
async def test_my_events_requires_session(client_factory, repository):
    overrides = {get_event_repository: lambda: repository}

    async with client_factory(overrides) as client:
        response = await client.get(MY_EVENTS_URL)

    assert response.status_code == 401
    data = response.json()
    assert data["detail"]["login_url"].endswith("/login")
    assert data["message"]


@pytest.mark.asyncio
async def test_my_events_with_invalid_token(client_factory, repository):
    overrides = {get_event_repository: lambda: repository}

    async with client_factory(overrides) as client:
        response = await client.get(MY_EVENTS_URL, headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_get_event_with_related_events(client_factory, repository, conference):
    overrides = {get_event_repository: lambda: repository}

    async with client_factory(overrides) as client:
        response = await client.get(EVENT_URL.format(event_id=conference.id))

    assert response.status_code == 200
    data = response.json()
    assert data["event"]["title"] == "PyCon Europe"
    assert data["event"]["category"] == "Conference"
    # Same category, not earlier than the event itself, excluding it
    assert [e["title"] for e in data["related_events"]] == ["Rust Conf"]


@pytest.mark.asyncio
async def test_related_events_are_limited_to_three(client_factory, repository, conference):
    for day in range(20, 25):
        event = create_test_event(
            title=f"Conf {day}",
            event_date=date(2026, 3, day),
            category=EventCategory.CONFERENCE,
        )
        repository.events[event.id] = event
    overrides = {get_event_repository: lambda: repository}

    async with client_factory(overrides) as client:
        response = await client.get(EVENT_URL.format(event_id=conference.id))

    assert [e["title"] for e in response.json()["related_events"]] == [
        "Conf 20",
        "Conf 21",
        "Conf 22",
    ]


@pytest.mark.asyncio
async def test_get_event_not_found(client_factory, repository):
    overrides = {get_event_repository: lambda: repository}

    async with client_factory(overrides) as client:
        response = await client.get(EVENT_URL.format(event_id=create_test_event().id))

    assert response.status_code == 404
    assert response.json()["message"] == "Event not found"
