"""create_events_rsvps_email_logs

Revision ID: 3f1c2a7b9d10
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "3f1c2a7b9d10"
down_revision = None
branch_labels = None
depends_on = None

EVENT_CATEGORIES = (
    "Conference",
    "Workshop",
    "Seminar",
    "Networking",
    "Social",
    "Sports",
    "Concert",
    "Festival",
    "Fundraiser",
    "Other",
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "events",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("owner_id", sa.String(length=255), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "category",
            sa.Enum(*EVENT_CATEGORIES, name="event_category_enum"),
            nullable=True,
        ),
        sa.Column("location", sa.String(length=500), nullable=True),
        sa.Column("event_date", sa.Date(), nullable=False),
        sa.Column("time_from", sa.Time(), nullable=True),
        sa.Column("time_to", sa.Time(), nullable=True),
        sa.Column("image_url", sa.String(length=1024), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "(time_from IS NULL AND time_to IS NULL) OR "
            "(time_from IS NOT NULL AND time_to IS NOT NULL)",
            name="ck_events_time_pair",
        ),
        sa.PrimaryKeyConstraint("uuid", name="pk_events"),
    )
    op.create_index("ix_events_owner_id", "events", ["owner_id"])
    op.create_index("ix_events_category", "events", ["category"])
    op.create_index("ix_events_event_date", "events", ["event_date"])

    op.create_table(
        "rsvps",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column(
            "status",
            sa.Enum("attending", "not_attending", name="rsvp_status_enum"),
            nullable=False,
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["event_id"],
            ["events.uuid"],
            name="fk_rsvps_event_id_events",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("uuid", name="pk_rsvps"),
        sa.UniqueConstraint("event_id", "user_id", name="uq_rsvps_event_id_user_id"),
    )
    op.create_index("ix_rsvps_event_id", "rsvps", ["event_id"])
    op.create_index("ix_rsvps_user_id", "rsvps", ["user_id"])

    op.create_table(
        "email_logs",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("resend_email_id", sa.String(length=255), nullable=True),
        sa.Column("to_address", sa.String(length=255), nullable=False),
        sa.Column("from_address", sa.String(length=255), nullable=False),
        sa.Column("subject", sa.String(length=500), nullable=False),
        sa.Column("html_body", sa.Text(), nullable=True),
        sa.Column("text_body", sa.Text(), nullable=True),
        sa.Column(
            "email_type",
            sa.Enum("rsvp_confirmation", name="email_type_enum"),
            nullable=False,
        ),
        sa.Column("event_id", sa.UUID(), nullable=True),
        sa.Column("user_id", sa.String(length=255), nullable=True),
        sa.Column(
            "status",
            sa.Enum("pending", "sent", "failed", name="email_status_enum"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("error_message", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["event_id"],
            ["events.uuid"],
            name="fk_email_logs_event_id_events",
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("uuid", name="pk_email_logs"),
    )
    op.create_index("ix_email_logs_resend_email_id", "email_logs", ["resend_email_id"], unique=True)
    op.create_index("ix_email_logs_to_address", "email_logs", ["to_address"])
    op.create_index("ix_email_logs_email_type", "email_logs", ["email_type"])
    op.create_index("ix_email_logs_event_id", "email_logs", ["event_id"])
    op.create_index("ix_email_logs_user_id", "email_logs", ["user_id"])
    op.create_index("ix_email_logs_status", "email_logs", ["status"])


def downgrade() -> None:
    op.drop_table("email_logs")
    op.drop_table("rsvps")
    op.drop_table("events")
    op.execute("DROP TYPE email_status_enum")
    op.execute("DROP TYPE email_type_enum")
    op.execute("DROP TYPE rsvp_status_enum")
    op.execute("DROP TYPE event_category_enum")
