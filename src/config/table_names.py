from enum import Enum


class TableNames(str, Enum):
    EVENTS = "events"
    RSVPS = "rsvps"
    EMAIL_LOGS = "email_logs"
