"""create article_plans table

Revision ID: 0001_article_plans
Revises:
Create Date: 2026-10-17 09:12:41.118305

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_article_plans"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema (idempotent)."""
    bind = op.get_bind()
    insp = sa.inspect(bind)

    if insp.has_table("article_plans"):
        return

    op.create_table(
        "article_plans",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("article_id", sa.String(length=10), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("keyword", sa.String(length=255), nullable=True),
        sa.Column("intent", sa.String(length=100), nullable=True),
        sa.Column("funnel", sa.String(length=50), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("priority", sa.String(length=20), nullable=True),
        sa.Column("word_count", sa.Integer(), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("week", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(length=50), nullable=False, server_default="planned"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_article_plans_article_id", "article_plans", ["article_id"], unique=True)
    op.create_index("ix_article_plans_week", "article_plans", ["week"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_article_plans_week", table_name="article_plans")
    op.drop_index("ix_article_plans_article_id", table_name="article_plans")
    op.drop_table("article_plans")
