from typing import Protocol
from uuid import UUID

import httpx

from src.email_service.base import EmailServiceBase
from src.email_service.email_logger import EmailLogger, NoOpEmailLogger
from src.email_service.templates import EmailTemplates

RESEND_EMAILS_URL = "https://api.resend.com/emails"


class ResendEmailConfig(Protocol):
    resend_api_key: str
    emails_from: str
    frontend_url: str


class ResendEmailService(EmailServiceBase):
    def __init__(
        self,
        config: ResendEmailConfig,
        email_logger: EmailLogger | None = None,
        http_client_class: type[httpx.AsyncClient] = httpx.AsyncClient,
    ):
        self._config = config
        self.email_logger = email_logger or NoOpEmailLogger()
        self._http_client_class = http_client_class

    async def _send(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
        email_type: str,
        event_id: UUID | None = None,
        user_id: str | None = None,
    ) -> str:
        """Send email via Resend and log via injected logger."""

        log_uuid = await self.email_logger.log_email_attempt(
            to_address=to_address,
            from_address=self._config.emails_from,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
            email_type=email_type,
            event_id=event_id,
            user_id=user_id,
        )

        try:
            async with self._http_client_class() as client:
                response = await client.post(
                    RESEND_EMAILS_URL,
                    headers={
                        "Authorization": f"Bearer {self._config.resend_api_key}",
                        "Content-Type": "application/json",
                    },
                    json={
                        "from": self._config.emails_from,
                        "to": [to_address],
                        "subject": subject,
                        "html": html_body,
                        "text": text_body,
                    },
                )
                response.raise_for_status()

                resend_email_id = response.json().get("id")

                await self.email_logger.log_email_success(
                    log_uuid=log_uuid,
                    resend_email_id=resend_email_id,
                )

                return resend_email_id

        except httpx.HTTPError as e:
            await self.email_logger.log_email_failure(
                log_uuid=log_uuid,
                error_message=str(e),
            )
            raise

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
        subject, html_body, text_body = EmailTemplates.render_rsvp_confirmation(
            user_name=user_name,
            event_title=event_title,
            event_date=event_date,
            event_location=event_location,
            event_time=event_time,
            app_url=self._config.frontend_url,
        )

        await self._send(
            to_address=to_address,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
            email_type="rsvp_confirmation",
            event_id=event_id,
            user_id=user_id,
        )
