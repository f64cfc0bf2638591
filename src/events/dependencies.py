from src.email_service import get_email_service
from src.events.effects import side_effects
from src.events.features.manage_event.workflow import EventLifecycleWorkflow
from src.events.features.rsvp.workflow import RSVPWorkflow
from src.events.repository.event_repository import EventRepository, SqlEventRepository
from src.events.repository.rsvp_ledger import RSVPLedger, SqlRSVPLedger
from src.storage import AssetStorage, get_asset_storage


def get_event_repository() -> EventRepository:
    """Dependency to get event repository instance."""
    return SqlEventRepository()


def get_rsvp_ledger() -> RSVPLedger:
    """Dependency to get RSVP ledger instance."""
    return SqlRSVPLedger()


def get_storage() -> AssetStorage:
    return get_asset_storage()


def get_rsvp_workflow() -> RSVPWorkflow:
    """Dependency to get RSVP workflow instance."""
    return RSVPWorkflow(
        ledger=get_rsvp_ledger(),
        email_service=get_email_service(),
        side_effect_runner=side_effects,
    )


def get_lifecycle_workflow() -> EventLifecycleWorkflow:
    """Dependency to get event lifecycle workflow instance."""
    return EventLifecycleWorkflow(
        repository=get_event_repository(),
        storage=get_storage(),
        side_effect_runner=side_effects,
    )
