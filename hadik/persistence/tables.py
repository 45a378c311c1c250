"""SQLAlchemy table definitions for workspace admission.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ALLOWED USERS TABLE (admission gate)
# ============================================================================
allowed_users_table = Table(
    "allowed_users",
    metadata,
    Column("email", String(254), primary_key=True),  # Case-folded
    Column("role", String(20), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# JOIN REQUESTS TABLE (ledger, never deleted)
# ============================================================================
join_requests_table = Table(
    "join_requests",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("email", String(254), nullable=False),
    Column("ip", String(64), nullable=True),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column("decided_by", UUID, nullable=True),
    Column("decided_role", String(20), nullable=True),
    Column("decided_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_join_requests_email", join_requests_table.c.email)
# One open request per e-mail
Index(
    "uq_join_requests_pending_email",
    join_requests_table.c.email,
    unique=True,
    postgresql_where=text("status = 'pending'"),
)

# ============================================================================
# INVITATIONS TABLE
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("email", String(254), nullable=False),
    Column("role", String(20), nullable=False),
    Column("token", String(255), nullable=False),
    Column("invited_by", UUID, nullable=True),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("email", name="uq_invitations_email"),
    UniqueConstraint("token", name="uq_invitations_token"),
)

# ============================================================================
# PROFILES TABLE (id = Identity Store account id)
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("email", String(254), nullable=True),
    Column("full_name", String(120), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column("role", String(20), nullable=True),  # NULL = not provisioned
    Column("last_seen_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_profiles_email", profiles_table.c.email)

# ============================================================================
# USER IPS TABLE (one row per member)
# ============================================================================
user_ips_table = Table(
    "user_ips",
    metadata,
    Column("user_id", UUID, primary_key=True),
    Column("ip_address", String(64), nullable=False),
    Column(
        "last_seen", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# ROLE PERMISSIONS TABLE
# ============================================================================
role_permissions_table = Table(
    "role_permissions",
    metadata,
    Column("role", String(20), nullable=False),
    Column("permission", String(50), nullable=False),
    Column("enabled", Boolean, nullable=False),
    Column("updated_by", UUID, nullable=True),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("role", "permission", name="uq_role_permission"),
)

# ============================================================================
# AUDIT LOGS TABLE (append-only)
# ============================================================================
audit_logs_table = Table(
    "audit_logs",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("user_id", UUID, nullable=True),
    Column("user_email", String(254), nullable=True),
    Column("action", String(50), nullable=False),
    Column("resource", String(255), nullable=True),
    Column("details", JSONB, nullable=True),
    Column("ip_address", String(64), nullable=True),
    Column(
        "timestamp", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_audit_logs_timestamp", audit_logs_table.c.timestamp.desc())
