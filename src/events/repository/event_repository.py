"""Event repository - returns DTOs, never ORM models."""

import logging
from abc import ABC, abstractmethod
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from src.config.database import async_session_manager
from src.errors import RemoteFailure
from src.events.dtos import EventDraftDTO, EventDTO, EventFilterDTO
from src.events.repository.orm_models import Event

logger = logging.getLogger(__name__)


class EventRepository(ABC):
    @abstractmethod
    async def list_events(self, filters: EventFilterDTO | None = None) -> list[EventDTO]:
        """List events matching the filters, ordered by event date ascending."""
        raise NotImplementedError

    @abstractmethod
    async def get_event(self, event_id: UUID) -> EventDTO | None:
        raise NotImplementedError

    @abstractmethod
    async def insert_event(
        self,
        owner_id: str,
        draft: EventDraftDTO,
        image_url: str | None = None,
    ) -> EventDTO:
        raise NotImplementedError

    @abstractmethod
    async def update_event(
        self,
        event_id: UUID,
        owner_id: str,
        draft: EventDraftDTO,
        image_url: str | None = None,
    ) -> EventDTO | None:
        """
        Update an event scoped to its owner.
        Returns None when no event matches (id, owner).
        """
        raise NotImplementedError

    @abstractmethod
    async def delete_event(self, event_id: UUID, owner_id: str) -> EventDTO | None:
        """
        Delete an event scoped to its owner.
        Returns the deleted event, or None when no event matches (id, owner).
        """
        raise NotImplementedError


class SqlEventRepository(EventRepository):
    """SQL implementation of the event repository."""

    def __init__(self, session_maker: async_sessionmaker | None = None) -> None:
        self._session_maker = session_maker

    def _session(self):
        return async_session_manager(session_maker=self._session_maker)

    async def list_events(self, filters: EventFilterDTO | None = None) -> list[EventDTO]:
        filters = filters or EventFilterDTO()
        stmt = select(Event)
        if filters.owner_id is not None:
            stmt = stmt.where(Event.owner_id == filters.owner_id)
        if filters.category is not None:
            stmt = stmt.where(Event.category == filters.category)
        if filters.date_from is not None:
            stmt = stmt.where(Event.event_date >= filters.date_from)
        if filters.date_to is not None:
            stmt = stmt.where(Event.event_date <= filters.date_to)
        if filters.title:
            stmt = stmt.where(Event.title.ilike(f"%{filters.title.strip()}%"))
        if filters.exclude_id is not None:
            stmt = stmt.where(Event.uuid != filters.exclude_id)
        stmt = stmt.order_by(Event.event_date.asc(), Event.created_at.asc())
        if filters.limit is not None:
            stmt = stmt.limit(filters.limit)

        try:
            async with self._session() as session:
                result = await session.execute(stmt)
                return [EventDTO.from_event(event) for event in result.scalars().all()]
        except SQLAlchemyError as e:
            raise RemoteFailure("list events", e) from e

    async def get_event(self, event_id: UUID) -> EventDTO | None:
        try:
            async with self._session() as session:
                event = await session.get(Event, event_id)
                return EventDTO.from_event(event) if event else None
        except SQLAlchemyError as e:
            raise RemoteFailure("load event", e) from e

    async def insert_event(
        self,
        owner_id: str,
        draft: EventDraftDTO,
        image_url: str | None = None,
    ) -> EventDTO:
        try:
            async with self._session() as session:
                event = Event(owner_id=owner_id, image_url=image_url, **draft.as_fields())
                session.add(event)
                await session.flush()
                await session.refresh(event)
                logger.info("Created event '%s' (%s) for owner %s", event.title, event.uuid, owner_id)
                return EventDTO.from_event(event)
        except SQLAlchemyError as e:
            raise RemoteFailure("create event", e) from e

    async def update_event(
        self,
        event_id: UUID,
        owner_id: str,
        draft: EventDraftDTO,
        image_url: str | None = None,
    ) -> EventDTO | None:
        try:
            async with self._session() as session:
                event = await self._get_owned_event(session, event_id, owner_id)
                if event is None:
                    return None

                for key, value in draft.as_fields().items():
                    setattr(event, key, value)
                event.image_url = image_url
                await session.flush()
                await session.refresh(event)
                logger.info("Updated event %s", event_id)
                return EventDTO.from_event(event)
        except SQLAlchemyError as e:
            raise RemoteFailure("update event", e) from e

    async def delete_event(self, event_id: UUID, owner_id: str) -> EventDTO | None:
        try:
            async with self._session() as session:
                event = await self._get_owned_event(session, event_id, owner_id)
                if event is None:
                    return None

                deleted = EventDTO.from_event(event)
                await session.delete(event)
                await session.flush()
                logger.info("Deleted event %s", event_id)
                return deleted
        except SQLAlchemyError as e:
            raise RemoteFailure("delete event", e) from e

    async def _get_owned_event(self, session, event_id: UUID, owner_id: str) -> Event | None:
        result = await session.execute(
            select(Event).where(Event.uuid == event_id, Event.owner_id == owner_id)
        )
        return result.scalar_one_or_none()
