"""Unit tests for ResendEmailService, mocking the HTTP client."""

import httpx
import pytest
from sqlalchemy import select

from src.email_service.email_logger import SQLEmailLogger
from src.email_service.resend_service import RESEND_EMAILS_URL, ResendEmailService
from src.email_service.templates import EmailTemplates
from src.events.repository.orm_models import EmailLog

# =============================================================================
# Mock HTTP infrastructure
# =============================================================================


class MockResponse:
    def __init__(self, *, json_data=None, status_code=200):
        self._json_data = json_data
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise httpx.HTTPStatusError(
                f"HTTP {self.status_code}",
                request=httpx.Request("POST", RESEND_EMAILS_URL),
                response=httpx.Response(self.status_code),
            )

    def json(self):
        return self._json_data


class MockHttpClient:
    """Replaces httpx.AsyncClient as the http_client_class."""

    def __init__(self, response: MockResponse | None = None):
        self.post_calls: list[dict] = []
        self._response = response or MockResponse(json_data={"id": "email-123"})

    async def post(self, url: str, **kwargs) -> MockResponse:
        self.post_calls.append({"url": url, **kwargs})
        return self._response

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass

    def __call__(self):
        return self


class MockConfig:
    resend_api_key = "test-api-key"
    emails_from = "Event Planner <events@example.com>"
    frontend_url = "https://events.example.com"


SEND_KWARGS = {
    "to_address": "ada@example.com",
    "user_name": "Ada",
    "event_title": "PyCon Meetup",
    "event_date": "Saturday, March 14, 2026",
    "event_location": "Berlin",
    "event_time": "18:00 - 21:30",
    "user_id": "user-1",
}


# =============================================================================
# Tests
# =============================================================================


@pytest.mark.asyncio
async def test_send_rsvp_confirmation():
    client = MockHttpClient()
    service = ResendEmailService(config=MockConfig(), http_client_class=client)

    await service.send_rsvp_confirmation(**SEND_KWARGS)

    assert len(client.post_calls) == 1
    call = client.post_calls[0]
    assert call["url"] == RESEND_EMAILS_URL
    assert call["headers"]["Authorization"] == "Bearer test-api-key"
    payload = call["json"]
    assert payload["to"] == ["ada@example.com"]
    assert payload["from"] == MockConfig.emails_from
    assert payload["subject"] == "RSVP Confirmed: PyCon Meetup"
    assert "Saturday, March 14, 2026" in payload["html"]
    assert "18:00 - 21:30" in payload["text"]
    assert "https://events.example.com" in payload["text"]


@pytest.mark.asyncio
async def test_send_failure_raises():
    client = MockHttpClient(MockResponse(status_code=500))
    service = ResendEmailService(config=MockConfig(), http_client_class=client)

    with pytest.raises(httpx.HTTPStatusError):
        await service.send_rsvp_confirmation(**SEND_KWARGS)


@pytest.mark.asyncio
async def test_email_log_records_success(sqlite_session_maker):
    client = MockHttpClient()
    service = ResendEmailService(
        config=MockConfig(),
        email_logger=SQLEmailLogger(session_maker=sqlite_session_maker),
        http_client_class=client,
    )

    await service.send_rsvp_confirmation(**SEND_KWARGS)

    async with sqlite_session_maker() as session:
        logs = (await session.execute(select(EmailLog))).scalars().all()
    assert len(logs) == 1
    assert logs[0].status == "sent"
    assert logs[0].resend_email_id == "email-123"
    assert logs[0].email_type == "rsvp_confirmation"
    assert logs[0].user_id == "user-1"


@pytest.mark.asyncio
async def test_email_log_records_failure(sqlite_session_maker):
    client = MockHttpClient(MockResponse(status_code=422))
    service = ResendEmailService(
        config=MockConfig(),
        email_logger=SQLEmailLogger(session_maker=sqlite_session_maker),
        http_client_class=client,
    )

    with pytest.raises(httpx.HTTPStatusError):
        await service.send_rsvp_confirmation(**SEND_KWARGS)

    async with sqlite_session_maker() as session:
        log = (await session.execute(select(EmailLog))).scalar_one()
    assert log.status == "failed"
    assert "422" in log.error_message


def test_template_escapes_user_input_and_skips_missing_rows():
    subject, html_body, text_body = EmailTemplates.render_rsvp_confirmation(
        user_name=None,
        event_title="<script>alert(1)</script>",
        event_date="Monday, January 5, 2026",
        app_url="https://events.example.com",
    )

    assert subject == "RSVP Confirmed: <script>alert(1)</script>"
    assert "<script>" not in html_body
    assert "&lt;script&gt;" in html_body
    assert "Hi there," in text_body
    assert "Location" not in text_body
    assert "Time" not in text_body
