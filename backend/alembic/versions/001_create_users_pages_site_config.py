"""Create users, pages and site_config tables

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            primary_key=True,
        ),
        sa.Column("cognito_sub", sa.String(255), nullable=False, unique=True),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )

    # --- pages (one per owner: draft + published slots on the same row) ---
    op.create_table(
        "pages",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            primary_key=True,
        ),
        sa.Column(
            "owner_id",
            sa.UUID(),
            sa.ForeignKey("users.id"),
            nullable=False,
        ),
        sa.Column("slug", sa.String(63), nullable=False, unique=True),
        sa.Column("display_name", sa.String(255), nullable=True),
        sa.Column("draft_config", postgresql.JSONB(), nullable=True),
        sa.Column("published_config", postgresql.JSONB(), nullable=True),
        sa.Column("theme_color", sa.String(7), nullable=False, server_default="#000000"),
        sa.Column("font_family", sa.String(100), nullable=False, server_default="Inter"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("draft_updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_pages_owner_id", "pages", ["owner_id"], unique=True)

    # --- site_config (singleton row, key = 'default') ---
    op.create_table(
        "site_config",
        sa.Column("key", sa.String(32), primary_key=True),
        sa.Column(
            "hero_slides",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
        ),
    )
    op.execute("INSERT INTO site_config (key) VALUES ('default') ON CONFLICT DO NOTHING")


def downgrade() -> None:
    op.drop_table("site_config")
    op.drop_index("ix_pages_owner_id", table_name="pages")
    op.drop_table("pages")
    op.drop_table("users")
