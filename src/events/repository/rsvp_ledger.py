"""RSVP ledger - the authoritative record of who is attending which event.

At most one record exists per (event, user); the unique constraint on the
rsvps table is what rejects a second concurrent insert for the same pair.
Cancelling removes the record, so counts only ever look at attending rows.
"""

import logging
from abc import ABC, abstractmethod
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from src.config.database import async_session_manager
from src.errors import DuplicateRsvpError, RemoteFailure
from src.events.dtos import RSVPStatus
from src.events.repository.orm_models import RSVP

logger = logging.getLogger(__name__)


class RSVPLedger(ABC):
    @abstractmethod
    async def get_status(self, event_id: UUID, user_id: str) -> RSVPStatus | None:
        raise NotImplementedError

    @abstractmethod
    async def insert(
        self,
        event_id: UUID,
        user_id: str,
        status: RSVPStatus = RSVPStatus.ATTENDING,
    ) -> None:
        """Insert an RSVP. Raises DuplicateRsvpError if one exists for the pair."""
        raise NotImplementedError

    @abstractmethod
    async def remove(self, event_id: UUID, user_id: str) -> int:
        """Remove the RSVP for the pair. Returns the number of records removed."""
        raise NotImplementedError

    @abstractmethod
    async def count_attending(self, event_id: UUID) -> int:
        raise NotImplementedError


class SqlRSVPLedger(RSVPLedger):
    """SQL implementation of the RSVP ledger."""

    def __init__(self, session_maker: async_sessionmaker | None = None) -> None:
        self._session_maker = session_maker

    def _session(self):
        return async_session_manager(session_maker=self._session_maker)

    async def get_status(self, event_id: UUID, user_id: str) -> RSVPStatus | None:
        try:
            async with self._session() as session:
                result = await session.execute(
                    select(RSVP.status).where(RSVP.event_id == event_id, RSVP.user_id == user_id)
                )
                status = result.scalar_one_or_none()
                return RSVPStatus(status) if status else None
        except SQLAlchemyError as e:
            raise RemoteFailure("load RSVP status", e) from e

    async def insert(
        self,
        event_id: UUID,
        user_id: str,
        status: RSVPStatus = RSVPStatus.ATTENDING,
    ) -> None:
        try:
            async with self._session() as session:
                session.add(RSVP(event_id=event_id, user_id=user_id, status=status))
                await session.flush()
        except IntegrityError as e:
            # Foreign key violations also land here; only an existing record is a duplicate
            if await self.get_status(event_id, user_id) is not None:
                raise DuplicateRsvpError(event_id, user_id) from e
            raise RemoteFailure("create RSVP", e) from e
        except SQLAlchemyError as e:
            raise RemoteFailure("create RSVP", e) from e
        logger.info("User %s RSVP'd '%s' to event %s", user_id, status.value, event_id)

    async def remove(self, event_id: UUID, user_id: str) -> int:
        try:
            async with self._session() as session:
                result = await session.execute(
                    delete(RSVP).where(RSVP.event_id == event_id, RSVP.user_id == user_id)
                )
                removed = result.rowcount or 0
        except SQLAlchemyError as e:
            raise RemoteFailure("cancel RSVP", e) from e
        logger.info("Removed %d RSVP(s) for user %s on event %s", removed, user_id, event_id)
        return removed

    async def count_attending(self, event_id: UUID) -> int:
        try:
            async with self._session() as session:
                result = await session.execute(
                    select(func.count())
                    .select_from(RSVP)
                    .where(RSVP.event_id == event_id, RSVP.status == RSVPStatus.ATTENDING)
                )
                return result.scalar_one()
        except SQLAlchemyError as e:
            raise RemoteFailure("count RSVPs", e) from e
