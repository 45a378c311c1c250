"""initial_schema

Create the workspace admission schema:
- Allowed users (admission gate, keyed by case-folded e-mail)
- Join requests (ledger; at most one pending request per e-mail)
- Invitations (one per e-mail, unique token)
- Profiles (one per Identity Store account)
- User IPs (last seen address per member)
- Role permissions (editable matrix for non-admin roles)
- Audit logs (append-only)

Revision ID: 3f1c9a7d2b64
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b64"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid() is built in from PostgreSQL 13; pgcrypto covers older servers
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # ========================================================================
    # ALLOWED_USERS table
    # ========================================================================
    op.create_table(
        "allowed_users",
        sa.Column("email", sa.String(254), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("email"),
        sa.CheckConstraint("email = lower(email)", name="ck_allowed_users_email_lower"),
    )

    # ========================================================================
    # JOIN_REQUESTS table
    # ========================================================================
    op.create_table(
        "join_requests",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("email", sa.String(254), nullable=False),
        sa.Column("ip", sa.String(64), nullable=True),
        sa.Column(
            "status", sa.String(20), nullable=False, server_default="pending"
        ),  # 'pending', 'accepted', 'denied'
        sa.Column("decided_by", sa.UUID(), nullable=True),
        sa.Column("decided_role", sa.String(20), nullable=True),
        sa.Column("decided_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'denied')",
            name="ck_join_requests_status",
        ),
        sa.CheckConstraint(
            "decided_role IS NULL OR status = 'accepted'",
            name="ck_join_requests_decided_role",
        ),
    )
    op.create_index("idx_join_requests_email", "join_requests", ["email"])
    op.create_index(
        "uq_join_requests_pending_email",
        "join_requests",
        ["email"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
    )

    # ========================================================================
    # INVITATIONS table
    # ========================================================================
    op.create_table(
        "invitations",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("email", sa.String(254), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("token", sa.String(255), nullable=False),
        sa.Column("invited_by", sa.UUID(), nullable=True),
        sa.Column("accepted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_invitations_email"),
        sa.UniqueConstraint("token", name="uq_invitations_token"),
    )

    # ========================================================================
    # PROFILES table
    # ========================================================================
    op.create_table(
        "profiles",
        sa.Column("id", sa.UUID(), nullable=False),  # Identity Store account id
        sa.Column("email", sa.String(254), nullable=True),
        sa.Column("full_name", sa.String(120), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("role", sa.String(20), nullable=True),
        sa.Column("last_seen_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_profiles_email", "profiles", ["email"])

    # ========================================================================
    # USER_IPS table
    # ========================================================================
    op.create_table(
        "user_ips",
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("ip_address", sa.String(64), nullable=False),
        sa.Column(
            "last_seen",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("user_id"),
    )

    # ========================================================================
    # ROLE_PERMISSIONS table
    # ========================================================================
    op.create_table(
        "role_permissions",
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("permission", sa.String(50), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False),
        sa.Column("updated_by", sa.UUID(), nullable=True),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.UniqueConstraint("role", "permission", name="uq_role_permission"),
    )

    # ========================================================================
    # AUDIT_LOGS table
    # ========================================================================
    op.create_table(
        "audit_logs",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=True),
        sa.Column("user_email", sa.String(254), nullable=True),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("resource", sa.String(255), nullable=True),
        sa.Column("details", postgresql.JSONB(), nullable=True),
        sa.Column("ip_address", sa.String(64), nullable=True),
        sa.Column(
            "timestamp",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_audit_logs_timestamp",
        "audit_logs",
        [sa.text("timestamp DESC")],
    )

    # Seed the default matrix for the editable roles
    op.execute("""
        INSERT INTO role_permissions (role, permission, enabled)
        SELECT r.role, p.permission,
               (r.role, p.permission) IN (
                   ('RESEARCHER', 'Manage Models'),
                   ('RESEARCHER', 'Training Access'),
                   ('RESEARCHER', 'Dataset Labeling'),
                   ('ANNOTATOR', 'Dataset Labeling')
               )
        FROM (VALUES ('RESEARCHER'), ('ANNOTATOR'), ('VIEWER')) AS r(role)
        CROSS JOIN (VALUES ('Manage Models'), ('Training Access'),
                           ('Dataset Labeling'), ('API Keys'),
                           ('User Mgmt'), ('Deployment')) AS p(permission)
        ON CONFLICT (role, permission) DO NOTHING
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_audit_logs_timestamp", table_name="audit_logs")
    op.drop_table("audit_logs")
    op.drop_table("role_permissions")
    op.drop_table("user_ips")
    op.drop_index("idx_profiles_email", table_name="profiles")
    op.drop_table("profiles")
    op.drop_table("invitations")
    op.drop_index("uq_join_requests_pending_email", table_name="join_requests")
    op.drop_index("idx_join_requests_email", table_name="join_requests")
    op.drop_table("join_requests")
    op.drop_table("allowed_users")
