"""create stories table

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2026-10-19 10:02:11.204518

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c9a2b7d40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "stories",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("original_story", sa.Text(), nullable=False),
        sa.Column("summary", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    # Recovery job scans pending stories by age
    op.create_index(
        "ix_stories_pending_created_at",
        "stories",
        ["created_at"],
        postgresql_where=sa.text("summary = ''"),
    )


def downgrade() -> None:
    op.drop_index("ix_stories_pending_created_at", table_name="stories")
    op.drop_table("stories")
