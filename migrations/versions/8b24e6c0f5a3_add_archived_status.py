"""add archived status to categories

Revision ID: 8b24e6c0f5a3
Revises: 3f9c1a7d2b10
Create Date: 2026-10-15 21:37:12.402915

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "8b24e6c0f5a3"
down_revision = "3f9c1a7d2b10"
branch_labels = None
depends_on = None


def categories_table(allowed):
    return sa.Table(
        "categories",
        sa.MetaData(),
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("vote_type", sa.String(length=20), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="draft"),
        sa.Column("show_results", sa.String(length=20), nullable=False, server_default="after_close"),
        sa.Column("max_rank", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()),
        sa.CheckConstraint("vote_type IN ('single', 'ranked', 'approval')", name="ck_categories_vote_type"),
        sa.CheckConstraint(f"status IN ({allowed})", name="ck_categories_status"),
        sa.CheckConstraint("show_results IN ('live', 'after_close')", name="ck_categories_show_results"),
    )


def demote_archived():
    op.execute(
        sa.text(
            """
            UPDATE categories
            SET status = 'closed'
            WHERE status = 'archived'
            """
        )
    )


def replace_status_check(allowed, downgrading=False):
    if op.get_bind().dialect.name != "sqlite":
        if downgrading:
            demote_archived()
        op.drop_constraint("ck_categories_status", "categories", type_="check")
        op.create_check_constraint("ck_categories_status", "categories", f"status IN ({allowed})")
        return

    # SQLite cannot alter a CHECK constraint in place, so the table is rebuilt.
    # Dropping the old table must not cascade into options and votes.
    op.execute("PRAGMA foreign_keys=OFF")
    if downgrading:
        demote_archived()
    with op.batch_alter_table(
        "categories",
        recreate="always",
        copy_from=categories_table(allowed),
    ):
        pass
    op.execute("PRAGMA foreign_keys=ON")


def upgrade():
    replace_status_check("'draft', 'open', 'closed', 'archived'")


def downgrade():
    replace_status_check("'draft', 'open', 'closed'", downgrading=True)
