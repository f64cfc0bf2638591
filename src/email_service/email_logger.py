from abc import ABC, abstractmethod
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import async_sessionmaker

from src.config.database import async_session_manager
from src.events.repository.orm_models import EmailLog


class EmailLogger(ABC):
    """Abstract base class for logging email sending operations."""

    @abstractmethod
    async def log_email_attempt(
        self,
        to_address: str,
        from_address: str,
        subject: str,
        html_body: str,
        text_body: str,
        email_type: str,
        event_id: UUID | None = None,
        user_id: str | None = None,
    ) -> UUID:
        """
        Log an email sending attempt before sending.

        Returns:
            UUID of the created log entry
        """
        pass

    @abstractmethod
    async def log_email_success(
        self,
        log_uuid: UUID,
        resend_email_id: str,
    ) -> None:
        """Update log entry with successful send and Resend email ID."""
        pass

    @abstractmethod
    async def log_email_failure(
        self,
        log_uuid: UUID,
        error_message: str,
    ) -> None:
        """Update log entry with failure status and error message."""
        pass


class SQLEmailLogger(EmailLogger):
    """SQL database implementation of EmailLogger."""

    def __init__(self, session_maker: async_sessionmaker | None = None) -> None:
        self._session_maker = session_maker

    async def log_email_attempt(
        self,
        to_address: str,
        from_address: str,
        subject: str,
        html_body: str,
        text_body: str,
        email_type: str,
        event_id: UUID | None = None,
        user_id: str | None = None,
    ) -> UUID:
        email_log = EmailLog(
            to_address=to_address,
            from_address=from_address,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
            email_type=email_type,
            event_id=event_id,
            user_id=user_id,
            status="pending",
        )

        async with async_session_manager(session_maker=self._session_maker) as session:
            session.add(email_log)
            await session.flush()
            return email_log.uuid

    async def log_email_success(
        self,
        log_uuid: UUID,
        resend_email_id: str,
    ) -> None:
        async with async_session_manager(session_maker=self._session_maker) as session:
            email_log = await session.get(EmailLog, log_uuid)
            if email_log:
                email_log.resend_email_id = resend_email_id
                email_log.status = "sent"

    async def log_email_failure(
        self,
        log_uuid: UUID,
        error_message: str,
    ) -> None:
        async with async_session_manager(session_maker=self._session_maker) as session:
            email_log = await session.get(EmailLog, log_uuid)
            if email_log:
                email_log.status = "failed"
                email_log.error_message = error_message


class NoOpEmailLogger(EmailLogger):
    """No-op implementation for testing or when logging is disabled."""

    async def log_email_attempt(
        self,
        to_address: str,
        from_address: str,
        subject: str,
        html_body: str,
        text_body: str,
        email_type: str,
        event_id: UUID | None = None,
        user_id: str | None = None,
    ) -> UUID:
        return uuid4()

    async def log_email_success(
        self,
        log_uuid: UUID,
        resend_email_id: str,
    ) -> None:
        pass

    async def log_email_failure(
        self,
        log_uuid: UUID,
        error_message: str,
    ) -> None:
        pass
