"""
Skyward Notes — Notebook Request Handler
=========================================

What:  Turns one inbound request into either a Redirect or a NotebookView.
How:   Derives the intent (delete, create/update, edit-load), validates,
       calls NoteStore, and assembles the immutable view-model.
Who:   Called by the notebook route; knows nothing about HTTP objects.

Intents:
    POST action=delete           → delete, redirect ?status=deleted
    POST action=create|update    → validate, persist, redirect ?status=created|updated
    GET  ?edit=<id>              → pre-fill the form in update mode

Validation runs every applicable check and keeps every message, so the user
sees all problems at once. A delete without a note id stops at
"Missing note identifier." and never reaches the title/body checks.

Whatever happened, a rendered page always carries the full note list loaded
AFTER the request's own work.
"""

import logging
from typing import List, Mapping, Optional, Union

from skyward.models.note import TITLE_MAX_LENGTH
from skyward.schemas.note import (
    Action,
    FormMode,
    NotebookView,
    NoteCard,
    NoteForm,
    NoteSubmission,
    Outcome,
    Redirect,
    coerce_identifier,
)
from skyward.services.note_store import NoteStore

logger = logging.getLogger(__name__)

MISSING_IDENTIFIER = "Missing note identifier."
TITLE_REQUIRED = "Title is required."
TITLE_TOO_LONG = f"Title must be {TITLE_MAX_LENGTH} characters or less."
BODY_REQUIRED = "Content cannot be empty."
NOTE_NOT_FOUND = "Note not found or already removed."

HandlerResult = Union[Redirect, NotebookView]


def validate_note(action: Action, title: str, body: str, note_id: Optional[int]) -> List[str]:
    """
    Check an already-trimmed create/update submission.

    Returns:
        Error messages in check order; empty when the submission is valid.
    """
    errors: List[str] = []
    if title == "":
        errors.append(TITLE_REQUIRED)
    elif len(title) > TITLE_MAX_LENGTH:
        errors.append(TITLE_TOO_LONG)

    if body == "":
        errors.append(BODY_REQUIRED)

    if action is Action.UPDATE and note_id is None:
        errors.append(MISSING_IDENTIFIER)
    return errors


class NotebookHandler:
    """
    Request decision logic for the single notebook page.

    Args:
        store: The NoteStore bound to this request's session
    """

    def __init__(self, store: NoteStore):
        self.store = store

    async def handle(
        self,
        method: str,
        query: Mapping[str, str],
        form: Optional[Mapping[str, str]] = None,
    ) -> HandlerResult:
        """
        Entry point for GET and POST /.

        Args:
            method: HTTP method ("GET" or "POST")
            query:  Query parameters (status, edit)
            form:   Submitted form fields, for POST

        Returns:
            Redirect after a successful mutation, otherwise the page view-model.
        """
        outcome = Outcome.from_token(query.get("status"))

        if method.upper() == "POST":
            submission = NoteSubmission.from_form(form or {})
            return await self.handle_submission(submission, outcome)

        errors: List[str] = []
        form_state = NoteForm()
        if "edit" in query:
            form_state = await self._load_for_edit(query["edit"], errors)
        return await self._view(outcome, errors, form_state)

    async def handle_submission(
        self,
        submission: NoteSubmission,
        outcome: Optional[Outcome] = None,
    ) -> HandlerResult:
        """Process a POST: delete, or create/update after validation."""
        if submission.action is Action.DELETE:
            return await self._delete(submission, outcome)

        title = submission.title.strip()
        body = submission.body.strip()
        errors = validate_note(submission.action, title, body, submission.note_id)

        if not errors:
            if submission.action is Action.UPDATE:
                await self.store.update_by_id(submission.note_id, title, body)
                return Redirect(outcome=Outcome.UPDATED)
            await self.store.create(title, body)
            return Redirect(outcome=Outcome.CREATED)

        logger.info(
            "Rejected %s submission with %d validation error(s)",
            submission.action.value,
            len(errors),
        )
        form_state = NoteForm(
            mode=FormMode.UPDATE if submission.action is Action.UPDATE else FormMode.CREATE,
            title=title,
            body=body,
            note_id=submission.note_id,
        )
        return await self._view(outcome, errors, form_state)

    async def _delete(
        self,
        submission: NoteSubmission,
        outcome: Optional[Outcome],
    ) -> HandlerResult:
        if submission.note_id is None:
            logger.info("Rejected delete without a note identifier")
            return await self._view(outcome, [MISSING_IDENTIFIER], NoteForm())

        await self.store.delete_by_id(submission.note_id)
        return Redirect(outcome=Outcome.DELETED)

    async def _load_for_edit(self, raw_id: str, errors: List[str]) -> NoteForm:
        """Pre-fill the form from an existing note; ids <= 0 are ignored."""
        note_id = coerce_identifier(raw_id) or 0
        if note_id <= 0:
            return NoteForm()

        note = await self.store.find_by_id(note_id)
        if note is None:
            errors.append(NOTE_NOT_FOUND)
            return NoteForm()

        return NoteForm(
            mode=FormMode.UPDATE,
            title=note.title,
            body=note.body,
            note_id=note.id,
        )

    async def _view(
        self,
        outcome: Optional[Outcome],
        errors: List[str],
        form_state: NoteForm,
    ) -> NotebookView:
        notes = await self.store.list_all()
        return NotebookView(
            outcome=outcome,
            errors=tuple(errors),
            form=form_state,
            notes=tuple(NoteCard.model_validate(note) for note in notes),
        )
