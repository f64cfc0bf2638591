from dataclasses import dataclass
from html import escape


@dataclass
class EmailTemplates:
    RSVP_CONFIRMATION_SUBJECT = "RSVP Confirmed: {event_title}"
    RSVP_CONFIRMATION_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: -apple-system, 'Segoe UI', Roboto, Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 30px; border-radius: 10px 10px 0 0; text-align: center;">
            <h1 style="margin: 10px 0;">RSVP Confirmed!</h1>
            <p style="margin: 0; opacity: 0.9;">You're all set for this event</p>
        </div>

        <div style="background: #f9fafb; padding: 30px; border-radius: 0 0 10px 10px;">
            <p>Hi {user_name},</p>

            <p>Great news! Your RSVP has been confirmed for:</p>

            <div style="background: white; padding: 20px; border-radius: 8px; margin: 20px 0; border-left: 4px solid #667eea;">
                <h2 style="margin-top: 0; color: #111827;">{event_title}</h2>
                {detail_rows}
            </div>

            <p>We're excited to see you there! If you need to cancel your RSVP, you can do so from the event page.</p>

            <div style="text-align: center; margin-top: 30px;">
                <a href="{app_url}" style="background: #667eea; color: white; padding: 12px 30px; text-decoration: none; border-radius: 6px; display: inline-block; font-weight: 600;">
                    View Event Details
                </a>
            </div>
        </div>

        <p style="text-align: center; margin-top: 30px; font-size: 12px; color: #9ca3af;">
            You received this email because you RSVP'd to an event on Event Planner.
        </p>
    </body>
    </html>
    """
    RSVP_DETAIL_ROW_HTML = """
                <p style="padding: 10px 0; border-bottom: 1px solid #e5e7eb; margin: 0;">
                    <strong style="color: #6b7280;">{label}:</strong> {value}
                </p>"""

    RSVP_CONFIRMATION_TEXT = """
    Hi {user_name},

    Great news! Your RSVP has been confirmed for:

    {event_title}
{detail_lines}

    We're excited to see you there! If you need to cancel your RSVP,
    you can do so from the event page: {app_url}
    """

    @classmethod
    def render_rsvp_confirmation(
        cls,
        user_name: str | None,
        event_title: str,
        event_date: str,
        app_url: str,
        event_location: str | None = None,
        event_time: str | None = None,
    ) -> tuple[str, str, str]:
        """Render the RSVP confirmation email.

        Time and location rows are only included when present.
        Returns: (subject, html_body, text_body)
        """
        details = [("Date", event_date)]
        if event_time:
            details.append(("Time", event_time))
        if event_location:
            details.append(("Location", event_location))

        name = user_name or "there"
        subject = cls.RSVP_CONFIRMATION_SUBJECT.format(event_title=event_title)
        html_body = cls.RSVP_CONFIRMATION_HTML.format(
            user_name=escape(name),
            event_title=escape(event_title),
            detail_rows="".join(
                cls.RSVP_DETAIL_ROW_HTML.format(label=label, value=escape(value))
                for label, value in details
            ),
            app_url=escape(app_url, quote=True),
        )
        text_body = cls.RSVP_CONFIRMATION_TEXT.format(
            user_name=name,
            event_title=event_title,
            detail_lines="\n".join(f"    - {label}: {value}" for label, value in details),
            app_url=app_url,
        )
        return subject, html_body, text_body
