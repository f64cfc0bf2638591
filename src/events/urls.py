EVENTS_URL = "/api/v1/events"
MY_EVENTS_URL = "/api/v1/events/mine"
EVENT_URL = "/api/v1/events/{event_id}"
EVENT_ATTENDANCE_URL = "/api/v1/events/{event_id}/attendance"
EVENT_RSVP_URL = "/api/v1/events/{event_id}/rsvp"
