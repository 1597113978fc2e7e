"""Create notes table

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

What:  Creates the `notes` table holding every note of the notebook.
How:   Portable column types (MySQL in production, SQLite in development).

Rollback: downgrade() drops the table entirely (destructive — all notes lost).
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
    """Create the notes table and its updated_at index (see skyward/models/note.py)."""
    op.create_table(
        "notes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(120), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        mysql_charset="utf8mb4",
    )

    # The list view always sorts by most recent update
    op.create_index("idx_notes_updated_at", "notes", ["updated_at"])


def downgrade() -> None:
    """Drop the notes table entirely."""
    op.drop_index("idx_notes_updated_at", table_name="notes")
    op.drop_table("notes")
