"""
Skyward Notes — Note Store (Persistence Primitives)
====================================================

What:  Sole owner of the `notes` table: list, find, create, update, delete.
How:   Thin wrapper around an injected AsyncSession. Each mutation is ONE
       statement followed by a commit.
Who:   Constructed per request by the notebook route; called by
       NotebookHandler.

The store performs no validation and applies no business rules: it persists
whatever it is given. Missing rows are never an error here. find_by_id()
returns None, update/delete report False and change nothing.

Every SQLAlchemy failure is wrapped in StorageError and propagates. There are
no retries.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from sqlalchemy import delete, desc, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from skyward.exceptions import StorageError
from skyward.models.note import Note

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Current UTC time as a naive datetime (the column type stores no zone)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class NoteStore:
    """
    CRUD primitives for notes.

    Args:
        session: The request's database session
        clock:   Returns "now" for created_at/updated_at. Tests pass a
                 controllable clock to make ordering deterministic.
    """

    def __init__(self, session: AsyncSession, clock: Callable[[], datetime] = utc_now):
        self._session = session
        self._clock = clock

    async def list_all(self) -> List[Note]:
        """
        Every note, most recently touched first.

        Query plan:
            SELECT * FROM notes ORDER BY updated_at DESC, id DESC
            → idx_notes_updated_at; id breaks ties between equal timestamps
        """
        try:
            result = await self._session.execute(
                select(Note).order_by(desc(Note.updated_at), desc(Note.id))
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._storage_error("list_all", e) from e

    async def find_by_id(self, note_id: int) -> Optional[Note]:
        """The matching note, or None when no row has this id."""
        try:
            result = await self._session.execute(
                select(Note).where(Note.id == note_id)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._storage_error("find_by_id", e, note_id=note_id) from e

    async def create(self, title: str, body: str) -> int:
        """
        Insert a note stamped with created_at == updated_at == now.

        Returns:
            The identifier the database assigned to the new row.
        """
        now = self._clock()
        note = Note(title=title, body=body, created_at=now, updated_at=now)
        try:
            self._session.add(note)
            await self._session.flush()  # Assigns the autoincrement id
            note_id = note.id
            await self._session.commit()
        except SQLAlchemyError as e:
            raise self._storage_error("create", e) from e

        logger.info("Note %d created", note_id)
        return note_id

    async def update_by_id(self, note_id: int, title: str, body: str) -> bool:
        """
        Replace title and body and bump updated_at.

        id and created_at are never touched. When no row matches, nothing
        happens and False is returned. Callers must not read this as an
        existence check done on their behalf.
        """
        try:
            result = await self._session.execute(
                update(Note)
                .where(Note.id == note_id)
                .values(title=title, body=body, updated_at=self._clock())
            )
            await self._session.commit()
        except SQLAlchemyError as e:
            raise self._storage_error("update_by_id", e, note_id=note_id) from e

        changed = result.rowcount > 0
        if changed:
            logger.info("Note %d updated", note_id)
        else:
            logger.info("Update of note %d matched no rows", note_id)
        return changed

    async def delete_by_id(self, note_id: int) -> bool:
        """Hard-delete the note; False (and no error) when it is already gone."""
        try:
            result = await self._session.execute(
                delete(Note).where(Note.id == note_id)
            )
            await self._session.commit()
        except SQLAlchemyError as e:
            raise self._storage_error("delete_by_id", e, note_id=note_id) from e

        removed = result.rowcount > 0
        if removed:
            logger.info("Note %d deleted", note_id)
        else:
            logger.info("Delete of note %d matched no rows", note_id)
        return removed

    @staticmethod
    def _storage_error(operation: str, error: Exception, **context) -> StorageError:
        logger.error("Storage failure in %s: %s", operation, error)
        context["error_type"] = type(error).__name__
        return StorageError(operation=operation, context=context)
