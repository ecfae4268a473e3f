"""Create devotionals table

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Creates the `devotionals` table with its soft-delete column and the
       created_at DESC index used by the active listing.

Rollback: downgrade() drops the table (destructive, all rows lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "devotionals",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("verse", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        # NULL until the first partial update
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        # NULL while active; set once by soft delete, never cleared
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )

    op.create_index(
        "idx_devotionals_created_at",
        "devotionals",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("idx_devotionals_created_at", table_name="devotionals")
    op.drop_table("devotionals")
