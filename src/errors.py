"""Error taxonomy shared by the event and RSVP workflows.

Authentication and validation errors are raised before any remote call.
Remote failures wrap the library error of the collaborator that failed
(SQLAlchemy, httpx) and are turned into failed outcomes by the workflows.
Best-effort failures never leave the side-effect runner.
"""


class EventPlannerError(Exception):
    """Base class for all workflow errors."""


class UnauthenticatedError(EventPlannerError):
    """Raised when a mutating operation is attempted without a valid session."""

    def __init__(self, login_url: str, message: str = "Please sign in to continue") -> None:
        self.login_url = login_url
        self.message = message
        super().__init__(message)


class EventValidationError(EventPlannerError):
    """Raised when submitted event fields are missing or malformed."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class ConflictError(EventPlannerError):
    """Raised when a write collides with existing state."""


class DuplicateRsvpError(ConflictError):
    """Raised when an RSVP already exists for the (event, user) pair."""

    def __init__(self, event_id, user_id: str) -> None:
        self.event_id = event_id
        self.user_id = user_id
        super().__init__(f"User '{user_id}' already has an RSVP for event {event_id}")


class RemoteFailure(EventPlannerError):
    """Raised when a repository, ledger, storage or email call fails."""

    def __init__(self, operation: str, cause: Exception | None = None) -> None:
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"{operation} failed{detail}")


class BestEffortFailure(EventPlannerError):
    """Failure of a side effect whose outcome never affects the primary result."""

    def __init__(self, effect: str, cause: BaseException) -> None:
        self.effect = effect
        self.cause = cause
        super().__init__(f"{effect} failed: {cause}")
