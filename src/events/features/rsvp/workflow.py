"""RSVP workflow - mediates a user's attendance intent against the RSVP ledger.

Every mutation is followed by a reconciliation read of the ledger, whatever
the outcome of the mutation. The optimistic state computed after a
successful write is only a hint and is always superseded by that read.
"""

import logging
from datetime import date, time

from src.auth.session import SessionUser, require_session
from src.config.settings import settings
from src.email_service.base import EmailServiceBase
from src.errors import ConflictError, RemoteFailure
from src.events.dtos import (
    AttendanceStateDTO,
    EventDTO,
    FailureReason,
    OutcomeKind,
    RSVPOutcomeDTO,
    RSVPStatus,
)
from src.events.effects import SideEffectRunner, side_effects
from src.events.repository.rsvp_ledger import RSVPLedger

logger = logging.getLogger(__name__)


def reconcile(local: AttendanceStateDTO | None, authoritative: AttendanceStateDTO) -> AttendanceStateDTO:
    """Ledger truth always wins over locally computed state."""
    if local is not None and local != authoritative:
        logger.debug("Discarding optimistic state %s in favour of %s", local, authoritative)
    return authoritative


def format_event_date(value: date) -> str:
    """Format a date as e.g. 'Saturday, March 14, 2026'."""
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


def format_time_range(time_from: time | None, time_to: time | None) -> str | None:
    if time_from is None or time_to is None:
        return None
    return f"{time_from:%H:%M} - {time_to:%H:%M}"


class RSVPWorkflow:
    def __init__(
        self,
        ledger: RSVPLedger,
        email_service: EmailServiceBase | None = None,
        side_effect_runner: SideEffectRunner = side_effects,
        login_url: str = settings.login_url,
    ):
        self._ledger = ledger
        self._email_service = email_service
        self._side_effects = side_effect_runner
        self._login_url = login_url

    async def get_attendance_state(
        self, event: EventDTO, session: SessionUser | None = None
    ) -> AttendanceStateDTO:
        status = None
        if session is not None:
            status = await self._ledger.get_status(event.id, session.user_id)
        count = await self._ledger.count_attending(event.id)
        return AttendanceStateDTO(status=status, count=count)

    async def request_rsvp(
        self,
        event: EventDTO,
        session: SessionUser | None,
        displayed: AttendanceStateDTO | None = None,
    ) -> RSVPOutcomeDTO:
        """
        RSVP the session user to the event.
        Raises UnauthenticatedError before touching the ledger when there is no session.
        """
        user = require_session(session, self._login_url)

        optimistic = None
        failure: FailureReason | None = None
        message = f'You\'re attending "{event.title}"'
        try:
            await self._ledger.insert(event.id, user.user_id, RSVPStatus.ATTENDING)
        except ConflictError as e:
            logger.info("Duplicate RSVP for event %s: %s", event.id, e)
            failure = FailureReason.DUPLICATE_RSVP
            message = "You have already RSVP'd to this event"
        except RemoteFailure as e:
            logger.error("Failed to RSVP user %s to event %s: %s", user.user_id, event.id, e)
            failure = FailureReason.REMOTE_FAILURE
            message = "Failed to RSVP. Please try again."
        else:
            base_count = displayed.count if displayed else 0
            optimistic = AttendanceStateDTO(status=RSVPStatus.ATTENDING, count=base_count + 1)
            self._send_confirmation(event, user)

        return await self._resync(
            event,
            user,
            optimistic=optimistic,
            kind=OutcomeKind.CONFIRMED,
            message=message,
            failure=failure,
        )

    async def cancel_rsvp(
        self,
        event: EventDTO,
        session: SessionUser | None,
        displayed: AttendanceStateDTO | None = None,
    ) -> RSVPOutcomeDTO:
        """
        Cancel the session user's RSVP by removing the ledger record.
        Raises UnauthenticatedError before touching the ledger when there is no session.
        """
        user = require_session(session, self._login_url)

        optimistic = None
        failure: FailureReason | None = None
        message = "You have cancelled your RSVP for this event"
        try:
            removed = await self._ledger.remove(event.id, user.user_id)
        except RemoteFailure as e:
            logger.error("Failed to cancel RSVP of %s for event %s: %s", user.user_id, event.id, e)
            failure = FailureReason.REMOTE_FAILURE
            message = "Failed to cancel RSVP. Please try again."
        else:
            if removed == 0:
                logger.warning("Cancel for user %s on event %s removed nothing", user.user_id, event.id)
            base_count = displayed.count if displayed else 0
            optimistic = AttendanceStateDTO(status=None, count=max(0, base_count - 1))

        return await self._resync(
            event,
            user,
            optimistic=optimistic,
            kind=OutcomeKind.CANCELLED,
            message=message,
            failure=failure,
        )

    async def _resync(
        self,
        event: EventDTO,
        user: SessionUser,
        optimistic: AttendanceStateDTO | None,
        kind: OutcomeKind,
        message: str,
        failure: FailureReason | None,
    ) -> RSVPOutcomeDTO:
        try:
            authoritative = await self.get_attendance_state(event, user)
        except RemoteFailure as e:
            logger.error("Reconciliation read failed for event %s: %s", event.id, e)
            return RSVPOutcomeDTO(
                kind=OutcomeKind.FAILED,
                message="Could not refresh attendance. Please reload the event.",
                state=None,
                reason=failure or FailureReason.RESYNC_FAILED,
                synced=False,
            )

        state = reconcile(optimistic, authoritative)
        if failure is not None:
            return RSVPOutcomeDTO(kind=OutcomeKind.FAILED, message=message, state=state, reason=failure)
        return RSVPOutcomeDTO(kind=kind, message=message, state=state)

    def _send_confirmation(self, event: EventDTO, user: SessionUser) -> None:
        if not user.email or self._email_service is None:
            return
        self._side_effects.spawn(
            "rsvp_confirmation_email",
            self._email_service.send_rsvp_confirmation(
                to_address=user.email,
                user_name=user.name,
                event_title=event.title,
                event_date=format_event_date(event.event_date),
                event_location=event.location,
                event_time=format_time_range(event.time_from, event.time_to),
                event_id=event.id,
                user_id=user.user_id,
            ),
        )
