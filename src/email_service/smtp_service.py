import asyncio
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from uuid import UUID

from src.config.settings import settings
from src.email_service.base import EmailServiceBase
from src.email_service.templates import EmailTemplates


class SMTPEmailService(EmailServiceBase):
    """Plain SMTP delivery, used locally against Mailhog when no Resend key is set."""

    def __init__(self):
        self.host = settings.smtp_host
        self.port = settings.smtp_port
        self.username = settings.smtp_user
        self.password = settings.smtp_password
        self.from_address = settings.emails_from

    def _create_message(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.from_address
        msg["To"] = to_address

        msg.attach(MIMEText(text_body, "plain"))
        msg.attach(MIMEText(html_body, "html"))

        return msg

    def _send(self, msg: MIMEMultipart) -> None:
        with smtplib.SMTP(self.host, self.port) as server:
            if self.username and self.password:
                server.starttls()
                server.login(self.username, self.password)
            server.send_message(msg)

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
            app_url=settings.frontend_url,
        )

        msg = self._create_message(
            to_address=to_address,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
        )

        await asyncio.to_thread(self._send, msg)
