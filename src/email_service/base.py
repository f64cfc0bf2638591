from abc import ABC, abstractmethod
from uuid import UUID


class EmailServiceBase(ABC):
    @abstractmethod
    async def send_rsvp_confirmation(
        self,
        to_address: str,
        user_name: str | None,
        event_title: str,
        event_date: str,
        event_location: str | None = None,
        event_time: str | None = None,
        event_id: UUID | None = None,
        user_id: str | None = None,
    ) -> None:
        pass
