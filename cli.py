"""CLI commands for event planner management."""

import asyncio
from datetime import date
from uuid import UUID

import typer

from src.auth.session import SessionUser
from src.email_service import get_email_service
from src.errors import EventValidationError
from src.events.dtos import EventCategory, EventFilterDTO, EventFormDTO, OutcomeKind
from src.events.features.manage_event.workflow import EventLifecycleWorkflow
from src.events.features.rsvp.workflow import RSVPWorkflow, format_event_date
from src.events.repository.event_repository import SqlEventRepository
from src.events.repository.rsvp_ledger import SqlRSVPLedger
from src.storage import get_asset_storage

app = typer.Typer(help="CLI commands for event planner management")


@app.command()
def list_events(
    category: EventCategory = typer.Option(
        None,
        "--category",
        "-c",
        help="Only list events of this category",
    ),
    owner: str = typer.Option(
        None,
        "--owner",
        "-o",
        help="Only list events created by this user id",
    ),
    title: str = typer.Option(
        None,
        "--title",
        "-t",
        help="Case-insensitive title search",
    ),
):
    """List events, soonest first."""
    filters = EventFilterDTO(owner_id=owner, category=category, title=title)
    # Typer doesn't support async directly, so use asyncio.run
    events = asyncio.run(SqlEventRepository().list_events(filters))

    if not events:
        typer.secho("No events found", fg=typer.colors.YELLOW)
        return

    for event in events:
        typer.secho(f"{event.event_date}  {event.title}", fg=typer.colors.GREEN)
        typer.secho(f"  ID: {event.id}", fg=typer.colors.CYAN)
        typer.secho(f"  Owner: {event.owner_id}", fg=typer.colors.BLUE)
        if event.category:
            typer.secho(f"  Category: {event.category.value}", fg=typer.colors.MAGENTA)


@app.command()
def attendance(
    event_id: str = typer.Argument(
        ...,
        help="Event UUID",
    ),
):
    """Show how many people are attending an event."""

    async def _attendance():
        event = await SqlEventRepository().get_event(UUID(event_id))
        if event is None:
            raise ValueError(f"Event not found: {event_id}")
        state = await RSVPWorkflow(ledger=SqlRSVPLedger()).get_attendance_state(event)
        return event, state

    try:
        event, state = asyncio.run(_attendance())

        typer.secho(event.title, fg=typer.colors.GREEN)
        typer.secho(f"  Date: {format_event_date(event.event_date)}", fg=typer.colors.BLUE)
        typer.secho(f"  Attending: {state.count}", fg=typer.colors.CYAN)
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)


@app.command()
def create_event(
    owner: str = typer.Argument(
        ...,
        help="User id of the event owner",
    ),
    title: str = typer.Argument(
        ...,
        help="Event title",
    ),
    event_date: str = typer.Argument(
        ...,
        help="Event date (YYYY-MM-DD)",
    ),
    category: str = typer.Option(
        "",
        "--category",
        "-c",
        help="Event category",
    ),
    location: str = typer.Option(
        "",
        "--location",
        "-l",
        help="Event location",
    ),
    time_from: str = typer.Option(
        "",
        "--from",
        help="Start time (HH:MM)",
    ),
    time_to: str = typer.Option(
        "",
        "--to",
        help="End time (HH:MM)",
    ),
):
    """Create an event without an image for the given owner."""
    form = EventFormDTO(
        title=title,
        event_date=event_date,
        category=category,
        location=location,
        time_from=time_from,
        time_to=time_to,
    )
    workflow = EventLifecycleWorkflow(
        repository=SqlEventRepository(),
        storage=get_asset_storage(),
    )

    try:
        outcome = asyncio.run(workflow.create_event(form, None, SessionUser(user_id=owner)))
    except EventValidationError as e:
        typer.secho(f"Invalid {e.field}: {e.message}", fg=typer.colors.RED)
        raise typer.Exit(1)

    if outcome.kind != OutcomeKind.CREATED:
        typer.secho(outcome.message, fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho(outcome.message, fg=typer.colors.GREEN)
    typer.secho(f"  ID: {outcome.event.id}", fg=typer.colors.CYAN)
    typer.secho(f"  Date: {format_event_date(outcome.event.event_date)}", fg=typer.colors.BLUE)


@app.command()
def send_test_email(
    to_address: str = typer.Argument(
        "test@attendee.example",
        help="Recipient address",
    ),
):
    """Send a sample RSVP confirmation email (to Mailhog when no Resend key is set)."""

    async def _send():
        await get_email_service().send_rsvp_confirmation(
            to_address=to_address,
            user_name="Test Attendee",
            event_title="Sample Meetup",
            event_date=format_event_date(date.today()),
            event_location="Community Centre",
            event_time="18:00 - 20:00",
        )

    asyncio.run(_send())
    typer.secho(f"Email sent to {to_address}!", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
