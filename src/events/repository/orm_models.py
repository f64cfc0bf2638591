from datetime import date, time
from uuid import UUID, uuid4

from sqlalchemy import (
    CheckConstraint,
    Date,
    Enum,
    ForeignKey,
    String,
    Text,
    Time,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.config.table_names import TableNames
from src.events.dtos import LOCATION_MAX_LENGTH, TITLE_MAX_LENGTH, EventCategory, RSVPStatus
from src.models.base import Base, TimeStamp


class Event(Base, TimeStamp):
    __tablename__ = TableNames.EVENTS.value
    __table_args__ = (
        CheckConstraint(
            "(time_from IS NULL AND time_to IS NULL) OR "
            "(time_from IS NOT NULL AND time_to IS NOT NULL)",
            name="time_pair",
        ),
    )

    # Identity string issued by the identity provider
    owner_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(
        Enum(
            EventCategory,
            name="event_category_enum",
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=True,
        index=True,
    )
    location: Mapped[str | None] = mapped_column(String(LOCATION_MAX_LENGTH), nullable=True)
    event_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    time_from: Mapped[time | None] = mapped_column(Time, nullable=True)
    time_to: Mapped[time | None] = mapped_column(Time, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    def __repr__(self) -> str:
        return f"<Event {self.title} on {self.event_date}>"


class RSVP(Base, TimeStamp):
    __tablename__ = TableNames.RSVPS.value
    __table_args__ = (UniqueConstraint("event_id", "user_id"),)

    event_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.EVENTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    status: Mapped[str] = mapped_column(
        Enum(
            RSVPStatus,
            name="rsvp_status_enum",
            values_callable=lambda x: [e.value for e in x],
        ),
        default=RSVPStatus.ATTENDING,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<RSVP {self.user_id} -> {self.event_id} ({self.status})>"


class EmailLog(Base, TimeStamp):
    __tablename__ = TableNames.EMAIL_LOGS.value

    uuid: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    resend_email_id: Mapped[str | None] = mapped_column(
        String(255), nullable=True, index=True, unique=True
    )

    to_address: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    from_address: Mapped[str] = mapped_column(String(255), nullable=False)
    subject: Mapped[str] = mapped_column(String(500), nullable=False)

    # Bodies are kept for debugging
    html_body: Mapped[str | None] = mapped_column(Text, nullable=True)
    text_body: Mapped[str | None] = mapped_column(Text, nullable=True)

    email_type: Mapped[str] = mapped_column(
        Enum("rsvp_confirmation", name="email_type_enum"),
        nullable=False,
        index=True,
    )

    event_id: Mapped[UUID | None] = mapped_column(
        ForeignKey(f"{TableNames.EVENTS.value}.uuid", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    user_id: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)

    status: Mapped[str] = mapped_column(
        Enum("pending", "sent", "failed", name="email_status_enum"),
        default="pending",
        nullable=False,
        index=True,
    )
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<EmailLog {self.resend_email_id} to={self.to_address} status={self.status}>"
