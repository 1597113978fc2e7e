"""
Skyward Notes — Note SQLAlchemy Model
======================================

What:  ORM model representing the `notes` table.
How:   Inherits from the shared DeclarativeBase; Alembic mirrors it in
       migration 001.
Who:   Used by NoteStore for CRUD operations and by the tests to build the
       schema in memory.

Table Design:
    - Integer autoincrement primary key, assigned by the database
    - title: VARCHAR(120), the same limit the form enforces
    - body: TEXT, no length cap
    - created_at / updated_at: written by NoteStore with its clock, so
      the ordering of the list does not depend on server clock resolution

    Index on updated_at:
        The only listing query is "most recently touched first".
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from skyward.database import Base

TITLE_MAX_LENGTH = 120


class Note(Base):
    """
    A single title + body record with identity and timestamps.

    Lifecycle:
        1. Created by NoteStore.create() (created_at == updated_at)
        2. Title and body replaced by NoteStore.update_by_id(); updated_at bumped
        3. Removed for good by NoteStore.delete_by_id() (no soft delete)
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
    )

    body: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # Naive UTC datetimes: MySQL TIMESTAMP/DATETIME columns carry no zone
    created_at: Mapped[datetime] = mapped_column(
        DateTime(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(),
        nullable=False,
    )

    __table_args__ = (
        Index("idx_notes_updated_at", "updated_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, title='{self.title[:20]}', "
            f"updated_at='{self.updated_at}')>"
        )
