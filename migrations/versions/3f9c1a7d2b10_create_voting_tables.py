"""create voting tables

Revision ID: 3f9c1a7d2b10
Revises: 
Create Date: 2026-10-12 19:04:51.118240

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f9c1a7d2b10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("vote_type", sa.String(length=20), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="draft"),
        sa.Column("show_results", sa.String(length=20), nullable=False, server_default="after_close"),
        sa.Column("max_rank", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()),
        sa.CheckConstraint("vote_type IN ('single', 'ranked', 'approval')", name="ck_categories_vote_type"),
        sa.CheckConstraint("status IN ('draft', 'open', 'closed')", name="ck_categories_status"),
        sa.CheckConstraint("show_results IN ('live', 'after_close')", name="ck_categories_show_results"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "options",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_options_category_id", "options", ["category_id"])
    op.create_table(
        "votes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("nickname", sa.String(length=200), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("category_id", "nickname", name="uq_votes_category_nickname"),
    )
    op.create_index("ix_votes_category_id", "votes", ["category_id"])
    op.create_table(
        "vote_selections",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("vote_id", sa.Integer(), nullable=False),
        sa.Column("option_id", sa.Integer(), nullable=False),
        sa.Column("rank", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["vote_id"], ["votes.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["option_id"], ["options.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_vote_selections_vote_id", "vote_selections", ["vote_id"])
    op.create_index("ix_vote_selections_option_id", "vote_selections", ["option_id"])


def downgrade():
    op.drop_index("ix_vote_selections_option_id", table_name="vote_selections")
    op.drop_index("ix_vote_selections_vote_id", table_name="vote_selections")
    op.drop_table("vote_selections")
    op.drop_index("ix_votes_category_id", table_name="votes")
    op.drop_table("votes")
    op.drop_index("ix_options_category_id", table_name="options")
    op.drop_table("options")
    op.drop_table("categories")
