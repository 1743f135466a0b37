"""SQLAlchemy table definitions for the carpool service.

These tables are used with SQLAlchemy Core and manual mappers.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (mirrored from the identity provider)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True),  # Issued by the identity provider
    Column("handle", String(255), nullable=False),
    Column("email", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_handle", users_table.c.handle)

# ============================================================================
# TRIPS TABLE
# ============================================================================
trips_table = Table(
    "trips",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "creator_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("departure_location", String(255), nullable=False),
    Column("destination", String(255), nullable=False),
    Column("departure_time", TIMESTAMP(timezone=True), nullable=False),
    Column("available_seats", Integer, nullable=False),
    Column("description", Text, nullable=True),
    Column(
        "status",
        Enum("active", "completed", "cancelled", name="trip_status", create_type=False),
        nullable=False,
        server_default="active",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "available_seats BETWEEN 1 AND 8", name="check_trip_available_seats"
    ),
    CheckConstraint(
        "description IS NULL OR char_length(description) <= 500",
        name="check_trip_description_length",
    ),
)

Index("idx_trips_status_departure", trips_table.c.status, trips_table.c.departure_time)
Index("idx_trips_creator_id", trips_table.c.creator_id)

# ============================================================================
# PARTICIPATIONS TABLE
# ============================================================================
participations_table = Table(
    "participations",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("trip_id", UUID, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "status",
        Enum(
            "pending",
            "approved",
            "rejected",
            name="participation_status",
            create_type=False,
        ),
        nullable=False,
        server_default="pending",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("trip_id", "user_id", name="uq_participation_trip_user"),
)

Index("idx_participations_user_id", participations_table.c.user_id)
Index(
    "idx_participations_trip_status",
    participations_table.c.trip_id,
    participations_table.c.status,
)

# ============================================================================
# MESSAGES TABLE (direct and group share one table)
# ============================================================================
messages_table = Table(
    "messages",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("trip_id", UUID, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False),
    Column(
        "sender_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "mode",
        Enum("direct", "group", name="message_mode", create_type=False),
        nullable=False,
    ),
    Column(
        "receiver_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=True
    ),
    Column("body", Text, nullable=False),
    Column("read_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "char_length(body) BETWEEN 1 AND 1000", name="check_message_body_length"
    ),
    CheckConstraint(
        "(mode = 'direct' AND receiver_id IS NOT NULL) OR "
        "(mode = 'group' AND receiver_id IS NULL AND read_at IS NULL)",
        name="check_message_mode_fields",
    ),
)

Index(
    "idx_messages_trip_mode_created",
    messages_table.c.trip_id,
    messages_table.c.mode,
    messages_table.c.created_at,
)
Index("idx_messages_receiver_unread", messages_table.c.receiver_id, messages_table.c.read_at)

# ============================================================================
# NOTIFICATIONS TABLE
# ============================================================================
notifications_table = Table(
    "notifications",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "recipient_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "sender_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "type",
        Enum(
            "join_request",
            "join_approved",
            "join_rejected",
            "trip_update",
            "trip_cancelled",
            name="notification_type",
            create_type=False,
        ),
        nullable=False,
    ),
    Column("trip_id", UUID, nullable=False),  # Plain reference, outlives the trip
    Column("participation_id", UUID, nullable=True),
    Column("title", String(255), nullable=False),
    Column("body", Text, nullable=False),
    Column("is_read", Boolean, nullable=False, server_default="false"),
    Column("action_required", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_notifications_recipient_created",
    notifications_table.c.recipient_id,
    notifications_table.c.created_at,
)
