"""Create notes and note_tags tables

Revision ID: 001
Revises: None
Create Date: 2024-11-09 00:00:00.000000+00:00

What:  Creates `notes` and the `note_tags` association table.
How:   Portable column types (String/Text/DateTime with time zone), so the
       same revision runs on PostgreSQL and SQLite.

Rollback: downgrade() drops both tables (destructive, all notes are lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create both tables and their indexes. See notekeeper/models/note.py."""
    op.create_table(
        "notes",
        sa.Column(
            "id",
            sa.String(36),
            nullable=False,
            comment="Opaque note identifier (UUID4 string)",
        ),
        sa.Column("title", sa.String(255), nullable=False, comment="Note title"),
        sa.Column(
            "text",
            sa.Text(),
            nullable=False,
            comment="Note body, source of word statistics",
        ),
        sa.Column(
            "created_date",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="When this note was created (UTC); never updated",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_notes_created_date",
        "notes",
        [sa.text("created_date DESC")],
    )

    op.create_table(
        "note_tags",
        sa.Column("note_id", sa.String(36), nullable=False),
        sa.Column(
            "tag",
            sa.String(20),
            nullable=False,
            comment="Tag enum value: BUSINESS, PERSONAL, IMPORTANT",
        ),
        sa.ForeignKeyConstraint(["note_id"], ["notes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("note_id", "tag"),
    )
    op.create_index("idx_note_tags_tag", "note_tags", ["tag"])


def downgrade() -> None:
    """Drop both tables, association table first."""
    op.drop_index("idx_note_tags_tag", table_name="note_tags")
    op.drop_table("note_tags")
    op.drop_index("idx_notes_created_date", table_name="notes")
    op.drop_table("notes")
