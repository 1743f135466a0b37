"""initial_schema

Create the carpool schema:
- Users (profile mirror of the campus identity provider)
- Trips (offered rides with seats and status)
- Participations (join requests, one per user and trip)
- Messages (direct and group chat in one table)
- Notifications (inbox entries, kept after their trip is deleted)

Revision ID: 3c1f0a7d52e4
Revises:
Create Date: 2026-10-18 10:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0a7d52e4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUM_TYPES = {
    "trip_status": ("active", "completed", "cancelled"),
    "participation_status": ("pending", "approved", "rejected"),
    "message_mode": ("direct", "group"),
    "notification_type": (
        "join_request",
        "join_approved",
        "join_rejected",
        "trip_update",
        "trip_cancelled",
    ),
}


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def _id() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    for name, values in ENUM_TYPES.items():
        labels = ", ".join(f"'{value}'" for value in values)
        op.execute(f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({labels});
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """)

    # ========================================================================
    # USERS table (id comes from the identity provider)
    # ========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("handle", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_users_handle", "users", ["handle"])

    # ========================================================================
    # TRIPS table
    # ========================================================================
    op.create_table(
        "trips",
        _id(),
        sa.Column("creator_id", sa.UUID(), nullable=False),
        sa.Column("departure_location", sa.String(255), nullable=False),
        sa.Column("destination", sa.String(255), nullable=False),
        sa.Column("departure_time", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("available_seats", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "status",
            postgresql.ENUM(
                *ENUM_TYPES["trip_status"], name="trip_status", create_type=False
            ),
            nullable=False,
            server_default="active",
        ),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["creator_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "available_seats BETWEEN 1 AND 8", name="check_trip_available_seats"
        ),
        sa.CheckConstraint(
            "description IS NULL OR char_length(description) <= 500",
            name="check_trip_description_length",
        ),
    )
    op.create_index(
        "idx_trips_status_departure", "trips", ["status", "departure_time"]
    )
    op.create_index("idx_trips_creator_id", "trips", ["creator_id"])

    # ========================================================================
    # PARTICIPATIONS table
    # ========================================================================
    op.create_table(
        "participations",
        _id(),
        sa.Column("trip_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(
                *ENUM_TYPES["participation_status"],
                name="participation_status",
                create_type=False,
            ),
            nullable=False,
            server_default="pending",
        ),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["trip_id"], ["trips.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("trip_id", "user_id", name="uq_participation_trip_user"),
    )
    op.create_index("idx_participations_user_id", "participations", ["user_id"])
    op.create_index(
        "idx_participations_trip_status", "participations", ["trip_id", "status"]
    )

    # ========================================================================
    # MESSAGES table
    # ========================================================================
    op.create_table(
        "messages",
        _id(),
        sa.Column("trip_id", sa.UUID(), nullable=False),
        sa.Column("sender_id", sa.UUID(), nullable=False),
        sa.Column(
            "mode",
            postgresql.ENUM(
                *ENUM_TYPES["message_mode"], name="message_mode", create_type=False
            ),
            nullable=False,
        ),
        sa.Column("receiver_id", sa.UUID(), nullable=True),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("read_at", sa.TIMESTAMP(timezone=True), nullable=True),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["trip_id"], ["trips.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["receiver_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "char_length(body) BETWEEN 1 AND 1000", name="check_message_body_length"
        ),
        sa.CheckConstraint(
            "(mode = 'direct' AND receiver_id IS NOT NULL) OR "
            "(mode = 'group' AND receiver_id IS NULL AND read_at IS NULL)",
            name="check_message_mode_fields",
        ),
    )
    op.create_index(
        "idx_messages_trip_mode_created",
        "messages",
        ["trip_id", "mode", "created_at"],
    )
    op.create_index(
        "idx_messages_receiver_unread", "messages", ["receiver_id", "read_at"]
    )

    # ========================================================================
    # NOTIFICATIONS table (trip_id is a plain reference)
    # ========================================================================
    op.create_table(
        "notifications",
        _id(),
        sa.Column("recipient_id", sa.UUID(), nullable=False),
        sa.Column("sender_id", sa.UUID(), nullable=False),
        sa.Column(
            "type",
            postgresql.ENUM(
                *ENUM_TYPES["notification_type"],
                name="notification_type",
                create_type=False,
            ),
            nullable=False,
        ),
        sa.Column("trip_id", sa.UUID(), nullable=False),
        sa.Column("participation_id", sa.UUID(), nullable=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "action_required", sa.Boolean(), nullable=False, server_default="false"
        ),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["recipient_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_notifications_recipient_created",
        "notifications",
        ["recipient_id", "created_at"],
    )

    # Trigger function to update updated_at timestamp
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
    """)

    for table in ("users", "trips", "participations"):
        op.execute(f"""
            CREATE TRIGGER update_{table}_updated_at
            BEFORE UPDATE ON {table}
            FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
        """)


def downgrade() -> None:
    """Downgrade schema."""
    for table in ("participations", "trips", "users"):
        op.execute(f"DROP TRIGGER IF EXISTS update_{table}_updated_at ON {table}")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    # Drop tables (in reverse order of dependencies)
    op.drop_table("notifications")
    op.drop_table("messages")
    op.drop_table("participations")
    op.drop_table("trips")
    op.drop_table("users")

    for name in reversed(list(ENUM_TYPES)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
