from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile

from src.auth.session import SessionUser, get_session_user
from src.events.dependencies import get_lifecycle_workflow
from src.events.dtos import EventFormDTO, EventOutcomeDTO, FailureReason, ImageUploadDTO
from src.events.features.manage_event.workflow import EventLifecycleWorkflow
from src.events.schemas import EventOutcomeResponse, EventResponse
from src.events.urls import EVENT_URL, EVENTS_URL

router = APIRouter()

FAILURE_STATUS_CODES = {
    FailureReason.NOT_FOUND: 404,
    FailureReason.REMOTE_FAILURE: 502,
}


def get_event_form(
    title: str = Form(default=""),
    event_date: str = Form(default=""),
    description: str = Form(default=""),
    category: str = Form(default=""),
    location: str = Form(default=""),
    time_from: str = Form(default=""),
    time_to: str = Form(default=""),
) -> EventFormDTO:
    """Dependency collecting the raw event form fields."""
    return EventFormDTO(
        title=title,
        event_date=event_date,
        description=description,
        category=category,
        location=location,
        time_from=time_from,
        time_to=time_to,
    )


async def read_image(image: UploadFile | None) -> ImageUploadDTO | None:
    # Browsers submit an empty part when no file was picked
    if image is None or not image.filename:
        return None
    content = await image.read()
    return ImageUploadDTO(
        filename=image.filename,
        content=content,
        content_type=image.content_type,
    )


def _to_response(
    outcome: EventOutcomeDTO, response: Response, success_code: int = 200
) -> EventOutcomeResponse:
    if outcome.succeeded:
        response.status_code = success_code
    else:
        response.status_code = FAILURE_STATUS_CODES.get(outcome.reason, 502)
    return EventOutcomeResponse(
        kind=outcome.kind,
        message=outcome.message,
        event=EventResponse.from_dto(outcome.event) if outcome.event else None,
        reason=outcome.reason,
    )


@router.post(EVENTS_URL, response_model=EventOutcomeResponse, status_code=201)
async def create_event(
    response: Response,
    form: EventFormDTO = Depends(get_event_form),
    image: UploadFile | None = File(default=None),
    session: SessionUser | None = Depends(get_session_user),
    workflow: EventLifecycleWorkflow = Depends(get_lifecycle_workflow),
) -> EventOutcomeResponse:
    """
    Create an event owned by the signed-in user.
    The optional image is stored before the event is saved.
    """
    outcome = await workflow.create_event(form, await read_image(image), session)
    return _to_response(outcome, response, success_code=201)


@router.put(EVENT_URL, response_model=EventOutcomeResponse)
async def update_event(
    event_id: UUID,
    response: Response,
    form: EventFormDTO = Depends(get_event_form),
    image: UploadFile | None = File(default=None),
    session: SessionUser | None = Depends(get_session_user),
    workflow: EventLifecycleWorkflow = Depends(get_lifecycle_workflow),
) -> EventOutcomeResponse:
    """
    Update an event owned by the signed-in user.
    A new image replaces the previous one, which is removed afterwards.
    """
    outcome = await workflow.update_event(event_id, form, await read_image(image), session)
    return _to_response(outcome, response)


@router.delete(EVENT_URL, response_model=EventOutcomeResponse)
async def delete_event(
    event_id: UUID,
    response: Response,
    image_url: str | None = Query(default=None),
    session: SessionUser | None = Depends(get_session_user),
    workflow: EventLifecycleWorkflow = Depends(get_lifecycle_workflow),
) -> EventOutcomeResponse:
    """Delete an event owned by the signed-in user together with its image."""
    outcome = await workflow.delete_event(event_id, image_url, session)
    return _to_response(outcome, response)
