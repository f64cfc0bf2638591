"""Event lifecycle - create, update and delete events together with their image.

Ordering keeps the record and its image asset consistent:
- a new image is stored before any record references it;
- an old image is only removed after the record points at the new one;
- an image is only removed once the owner-scoped delete matched a record.
Cleanups are best-effort side effects; they never change the outcome.
"""

import logging
from uuid import UUID

from src.auth.session import SessionUser, require_session
from src.config.settings import settings
from src.errors import RemoteFailure
from src.events.dtos import (
    EventDTO,
    EventFormDTO,
    EventOutcomeDTO,
    FailureReason,
    ImageUploadDTO,
    OutcomeKind,
)
from src.events.effects import SideEffectRunner, side_effects
from src.events.features.manage_event.validation import validate_event_form, validate_image
from src.events.repository.event_repository import EventRepository
from src.storage.base import AssetStorage
from src.storage.naming import generate_asset_name

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Event not found or you are not its owner"


class EventLifecycleWorkflow:
    def __init__(
        self,
        repository: EventRepository,
        storage: AssetStorage,
        side_effect_runner: SideEffectRunner = side_effects,
        login_url: str = settings.login_url,
        max_image_bytes: int = settings.max_image_bytes,
    ):
        self._repository = repository
        self._storage = storage
        self._side_effects = side_effect_runner
        self._login_url = login_url
        self._max_image_bytes = max_image_bytes

    async def create_event(
        self,
        form: EventFormDTO,
        image: ImageUploadDTO | None,
        session: SessionUser | None,
    ) -> EventOutcomeDTO:
        """
        Create an event owned by the session user.
        Authentication and validation errors are raised before any remote call.
        """
        user = require_session(session, self._login_url)
        draft = validate_event_form(form)
        if image is not None:
            validate_image(image, self._max_image_bytes)

        image_url = None
        if image is not None:
            try:
                image_url = await self._upload_image(image)
            except RemoteFailure as e:
                logger.error("Image upload failed for new event: %s", e)
                return EventOutcomeDTO(
                    kind=OutcomeKind.FAILED,
                    message="Failed to upload image",
                    reason=FailureReason.REMOTE_FAILURE,
                )

        try:
            event = await self._repository.insert_event(user.user_id, draft, image_url=image_url)
        except RemoteFailure as e:
            logger.error("Failed to create event '%s': %s", draft.title, e)
            if image_url:
                self._discard_image(image_url, "discard_unused_image")
            return EventOutcomeDTO(
                kind=OutcomeKind.FAILED,
                message="Failed to create event",
                reason=FailureReason.REMOTE_FAILURE,
            )

        return EventOutcomeDTO(
            kind=OutcomeKind.CREATED,
            message="Event created successfully!",
            event=event,
        )

    async def update_event(
        self,
        event_id: UUID,
        form: EventFormDTO,
        new_image: ImageUploadDTO | None,
        session: SessionUser | None,
    ) -> EventOutcomeDTO:
        """
        Update an event. The write is scoped to (event_id, session user), so a
        non-owner matches nothing.
        """
        user = require_session(session, self._login_url)
        draft = validate_event_form(form)
        if new_image is not None:
            validate_image(new_image, self._max_image_bytes)

        try:
            current = await self._repository.get_event(event_id)
        except RemoteFailure as e:
            logger.error("Failed to load event %s for update: %s", event_id, e)
            return EventOutcomeDTO(
                kind=OutcomeKind.FAILED,
                message="Failed to update event",
                reason=FailureReason.REMOTE_FAILURE,
            )
        if current is None:
            return EventOutcomeDTO(
                kind=OutcomeKind.FAILED,
                message=NOT_FOUND_MESSAGE,
                reason=FailureReason.NOT_FOUND,
            )

        image_url = current.image_url
        new_image_url = None
        if new_image is not None:
            try:
                new_image_url = await self._upload_image(new_image)
            except RemoteFailure as e:
                logger.error("Image upload failed for event %s: %s", event_id, e)
                return EventOutcomeDTO(
                    kind=OutcomeKind.FAILED,
                    message="Failed to upload image",
                    event=current,
                    reason=FailureReason.REMOTE_FAILURE,
                )
            image_url = new_image_url

        try:
            updated = await self._repository.update_event(
                event_id, user.user_id, draft, image_url=image_url
            )
        except RemoteFailure as e:
            logger.error("Failed to update event %s: %s", event_id, e)
            if new_image_url:
                self._discard_image(new_image_url, "discard_unused_image")
            return EventOutcomeDTO(
                kind=OutcomeKind.FAILED,
                message="Failed to update event",
                event=await self._reload(event_id),
                reason=FailureReason.REMOTE_FAILURE,
            )

        if updated is None:
            if new_image_url:
                self._discard_image(new_image_url, "discard_unused_image")
            return EventOutcomeDTO(
                kind=OutcomeKind.FAILED,
                message=NOT_FOUND_MESSAGE,
                reason=FailureReason.NOT_FOUND,
            )

        if new_image_url and current.image_url and current.image_url != new_image_url:
            self._discard_image(current.image_url, "remove_replaced_image")

        return EventOutcomeDTO(
            kind=OutcomeKind.UPDATED,
            message=f'"{updated.title}" has been updated.',
            event=updated,
        )

    async def delete_event(
        self,
        event_id: UUID,
        image_reference: str | None,
        session: SessionUser | None,
    ) -> EventOutcomeDTO:
        """
        Delete an event scoped to the session user.
        Only the image stored on the deleted record is removed, and only when
        a record was actually deleted.
        """
        user = require_session(session, self._login_url)

        try:
            deleted = await self._repository.delete_event(event_id, user.user_id)
        except RemoteFailure as e:
            logger.error("Failed to delete event %s: %s", event_id, e)
            return EventOutcomeDTO(
                kind=OutcomeKind.FAILED,
                message="Failed to delete event",
                event=await self._reload(event_id),
                reason=FailureReason.REMOTE_FAILURE,
            )

        if deleted is None:
            logger.info("Delete of event %s by %s matched no record", event_id, user.user_id)
            return EventOutcomeDTO(
                kind=OutcomeKind.FAILED,
                message=NOT_FOUND_MESSAGE,
                reason=FailureReason.NOT_FOUND,
            )

        if image_reference and image_reference != deleted.image_url:
            logger.warning(
                "Ignoring image reference %s not stored on deleted event %s",
                image_reference,
                event_id,
            )
        # Only the asset the deleted record pointed at is released
        if deleted.image_url:
            self._discard_image(deleted.image_url, "remove_deleted_event_image")

        return EventOutcomeDTO(
            kind=OutcomeKind.DELETED,
            message=f'"{deleted.title}" has been deleted.',
            event=deleted,
        )

    async def _upload_image(self, image: ImageUploadDTO) -> str:
        path = generate_asset_name(image.filename)
        await self._storage.upload(path, image.content, image.content_type)
        return self._storage.get_public_url(path)

    def _discard_image(self, image_url: str, effect_name: str) -> None:
        path = self._storage.path_from_public_url(image_url)
        if path is None:
            logger.warning("Cannot derive storage path from %s", image_url)
            return
        self._side_effects.spawn(effect_name, self._storage.remove([path]))

    async def _reload(self, event_id: UUID) -> EventDTO | None:
        try:
            return await self._repository.get_event(event_id)
        except RemoteFailure as e:
            logger.error("Failed to reload event %s: %s", event_id, e)
            return None
