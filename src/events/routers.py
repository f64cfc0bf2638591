from fastapi import APIRouter

from .features.browse_events.router import router as browse_events_router
from .features.manage_event.router import router as manage_event_router
from .features.rsvp.router import router as rsvp_router

router = APIRouter()

# Browse first so /events/mine is matched before /events/{event_id}
router.include_router(browse_events_router)
router.include_router(manage_event_router)
router.include_router(rsvp_router)
