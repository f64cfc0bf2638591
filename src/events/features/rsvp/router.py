import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from src.auth.session import SessionUser, get_session_user
from src.errors import RemoteFailure
from src.events.dependencies import get_event_repository, get_rsvp_workflow
from src.events.dtos import EventDTO, FailureReason, OutcomeKind, RSVPOutcomeDTO
from src.events.features.rsvp.workflow import RSVPWorkflow
from src.events.repository.event_repository import EventRepository
from src.events.schemas import AttendanceState
from src.events.urls import EVENT_ATTENDANCE_URL, EVENT_RSVP_URL

logger = logging.getLogger(__name__)

router = APIRouter()

FAILURE_STATUS_CODES = {
    FailureReason.DUPLICATE_RSVP: 409,
    FailureReason.NOT_FOUND: 404,
    FailureReason.REMOTE_FAILURE: 502,
    FailureReason.RESYNC_FAILED: 502,
}


class RSVPRequest(BaseModel):
    """Optional body carrying the attendance state currently shown to the user."""

    displayed: AttendanceState | None = None


class AttendanceResponse(BaseModel):
    message: str
    state: AttendanceState


class RSVPResponse(BaseModel):
    kind: OutcomeKind
    message: str
    state: AttendanceState | None = None
    reason: FailureReason | None = None
    synced: bool = True


async def resolve_event(
    event_id: UUID,
    repository: EventRepository = Depends(get_event_repository),
) -> EventDTO:
    """Dependency loading the event named in the path."""
    try:
        event = await repository.get_event(event_id)
    except RemoteFailure as e:
        logger.error("Failed to load event %s: %s", event_id, e)
        raise HTTPException(status_code=502, detail="Failed to load event")
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


def _to_response(outcome: RSVPOutcomeDTO, response: Response) -> RSVPResponse:
    if not outcome.succeeded:
        response.status_code = FAILURE_STATUS_CODES.get(outcome.reason, 502)
    return RSVPResponse(
        kind=outcome.kind,
        message=outcome.message,
        state=AttendanceState.from_dto(outcome.state) if outcome.state else None,
        reason=outcome.reason,
        synced=outcome.synced,
    )


@router.get(EVENT_ATTENDANCE_URL, response_model=AttendanceResponse)
async def get_attendance(
    event: EventDTO = Depends(resolve_event),
    session: SessionUser | None = Depends(get_session_user),
    workflow: RSVPWorkflow = Depends(get_rsvp_workflow),
) -> AttendanceResponse:
    """
    Get the number of attendees and, when signed in, the caller's RSVP status.
    """
    try:
        state = await workflow.get_attendance_state(event, session)
    except RemoteFailure as e:
        logger.error("Failed to load attendance for event %s: %s", event.id, e)
        raise HTTPException(status_code=502, detail="Failed to load attendance")
    return AttendanceResponse(
        message=f"{state.count} attending",
        state=AttendanceState.from_dto(state),
    )


@router.post(EVENT_RSVP_URL, response_model=RSVPResponse)
async def request_rsvp(
    response: Response,
    rsvp: RSVPRequest | None = None,
    event: EventDTO = Depends(resolve_event),
    session: SessionUser | None = Depends(get_session_user),
    workflow: RSVPWorkflow = Depends(get_rsvp_workflow),
) -> RSVPResponse:
    """
    RSVP the signed-in user to the event.
    The returned state is always read back from the ledger.
    """
    displayed = rsvp.displayed.to_dto() if rsvp and rsvp.displayed else None
    outcome = await workflow.request_rsvp(event, session, displayed=displayed)
    return _to_response(outcome, response)


@router.delete(EVENT_RSVP_URL, response_model=RSVPResponse)
async def cancel_rsvp(
    response: Response,
    rsvp: RSVPRequest | None = None,
    event: EventDTO = Depends(resolve_event),
    session: SessionUser | None = Depends(get_session_user),
    workflow: RSVPWorkflow = Depends(get_rsvp_workflow),
) -> RSVPResponse:
    """Cancel the signed-in user's RSVP to the event."""
    displayed = rsvp.displayed.to_dto() if rsvp and rsvp.displayed else None
    outcome = await workflow.cancel_rsvp(event, session, displayed=displayed)
    return _to_response(outcome, response)
