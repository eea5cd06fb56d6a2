"""Websites and owner profiles.

- websites: one row per nonprofit site (draft or published)
- UNIQUE(slug) across all rows; the authoritative slug guarantee
- owner_profiles: best-effort bookkeeping of accounts using the builder
- set_updated_at() touch trigger on both tables
"""

from __future__ import annotations
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "001_create_websites"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # set_updated_at(): generic touch trigger
    op.execute("""
    CREATE OR REPLACE FUNCTION set_updated_at() RETURNS trigger
    LANGUAGE plpgsql AS $$
    BEGIN
      NEW.updated_at := NOW();
      RETURN NEW;
    END;
    $$;
    """)

    # ---------- websites ----------
    op.create_table(
        "websites",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True,
                  server_default=sa.text("gen_random_uuid()")),
        sa.Column("owner_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("slug", sa.String(50), nullable=False),
        sa.Column("org_name", sa.String(255), nullable=False, server_default=""),
        sa.Column("site_data", postgresql.JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("slug", name="uq_websites_slug"),
        sa.CheckConstraint("char_length(slug) BETWEEN 3 AND 50", name="ck_websites_slug_length"),
    )
    op.create_index("ix_websites_owner_id", "websites", ["owner_id"])
    op.create_index("ix_websites_owner_updated", "websites", ["owner_id", "updated_at"])
    op.execute("""
    CREATE TRIGGER trg_websites_updated_at
      BEFORE UPDATE ON websites
      FOR EACH ROW EXECUTE FUNCTION set_updated_at();
    """)

    # ---------- owner_profiles ----------
    op.create_table(
        "owner_profiles",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True,
                  server_default=sa.text("gen_random_uuid()")),
        sa.Column("owner_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("last_seen_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("owner_id", name="uq_owner_profiles_owner"),
    )
    op.execute("""
    CREATE TRIGGER trg_owner_profiles_updated_at
      BEFORE UPDATE ON owner_profiles
      FOR EACH ROW EXECUTE FUNCTION set_updated_at();
    """)


def downgrade():
    op.execute("DROP TRIGGER IF EXISTS trg_owner_profiles_updated_at ON owner_profiles;")
    op.drop_table("owner_profiles")
    op.execute("DROP TRIGGER IF EXISTS trg_websites_updated_at ON websites;")
    op.drop_index("ix_websites_owner_updated", table_name="websites")
    op.drop_index("ix_websites_owner_id", table_name="websites")
    op.drop_table("websites")
    op.execute("DROP FUNCTION IF EXISTS set_updated_at();")
