"""create high_scores

Revision ID: base_0001
Revises:
Create Date: 2026-10-19 10:12:41.118203

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "base_0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "high_scores",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("player_name", sa.String(length=32), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("grade", sa.Integer(), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("correct_answers", sa.Integer(), nullable=False),
        sa.Column("wrong_answers", sa.Integer(), nullable=False),
        sa.Column("accuracy", sa.Float(), nullable=False),
        sa.Column("session_duration", sa.Integer(), nullable=False),
        sa.Column("device_id", sa.String(length=64), nullable=True),
    )
    op.create_index("ix_high_scores_created_at", "high_scores", ["created_at"])
    op.create_index("ix_high_scores_score", "high_scores", ["score"])
    op.create_index("ix_high_scores_grade", "high_scores", ["grade"])


def downgrade() -> None:
    op.drop_index("ix_high_scores_grade", table_name="high_scores")
    op.drop_index("ix_high_scores_score", table_name="high_scores")
    op.drop_index("ix_high_scores_created_at", table_name="high_scores")
    op.drop_table("high_scores")
