"""
Skyward Notes — Request & View-Model Schemas
=============================================

What:  Pydantic models for what comes IN (a form submission) and what goes
       OUT to the renderer (the page view-model).
How:   Every output model is frozen: the handler computes one NotebookView
       per request and the renderer only reads it.
Who:   Built by the notebook route (NoteSubmission) and NotebookHandler
       (everything else); consumed by skyward.rendering.

Closed sets are enums:
    Outcome   — the result of a successful mutation, carried by the redirect
                as ?status=<token> and turned into a flash message
    FormMode  — whether the form creates a note or edits one
"""

from datetime import datetime
from enum import Enum
from typing import Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Closed Sets
# ══════════════════════════════════════════════════════════════════════════


class Outcome(str, Enum):
    """Successful mutation kinds. The value is the ?status= token."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"

    @classmethod
    def from_token(cls, token: Optional[str]) -> Optional["Outcome"]:
        """Unknown or missing tokens map to None (no flash, no error)."""
        if token is None:
            return None
        try:
            return cls(token)
        except ValueError:
            return None

    @property
    def flash_message(self) -> str:
        match self:
            case Outcome.CREATED:
                return "Note saved successfully."
            case Outcome.UPDATED:
                return "Note updated successfully."
            case Outcome.DELETED:
                return "Note removed successfully."
        raise AssertionError(f"Unhandled outcome: {self!r}")


class FormMode(str, Enum):
    CREATE = "create"
    UPDATE = "update"


class Action(str, Enum):
    """The operation requested by a form submission."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @classmethod
    def from_form(cls, raw: Optional[str]) -> "Action":
        """Missing and unrecognized actions both behave as create."""
        if raw is None:
            return cls.CREATE
        try:
            return cls(raw)
        except ValueError:
            return cls.CREATE


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What the browser sends
# ══════════════════════════════════════════════════════════════════════════


def coerce_identifier(raw: Optional[str]) -> Optional[int]:
    """
    Parse a submitted note identifier.

    Absent → None. Present → its integer value, with anything non-numeric
    (including an empty string) coercing to 0, which never matches a row.
    """
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return 0


class NoteSubmission(BaseModel):
    """
    A POST / form submission, untrimmed and unvalidated.

    note_id is None only when the field was not submitted at all.
    """

    model_config = ConfigDict(frozen=True)

    action: Action = Action.CREATE
    title: str = ""
    body: str = ""
    note_id: Optional[int] = None

    @classmethod
    def from_form(cls, form: Mapping[str, str]) -> "NoteSubmission":
        return cls(
            action=Action.from_form(form.get("action")),
            title=form.get("title") or "",
            body=form.get("body") or "",
            note_id=coerce_identifier(form.get("note_id")),
        )


# ══════════════════════════════════════════════════════════════════════════
# View Models — What the renderer receives
# ══════════════════════════════════════════════════════════════════════════


class NoteCard(BaseModel):
    """One note as displayed in the grid."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    title: str
    body: str
    created_at: datetime
    updated_at: datetime


class NoteForm(BaseModel):
    """State of the note form: which mode, and what to pre-fill."""

    model_config = ConfigDict(frozen=True)

    mode: FormMode = FormMode.CREATE
    title: str = ""
    body: str = ""
    note_id: Optional[int] = None

    @property
    def is_update(self) -> bool:
        return self.mode is FormMode.UPDATE


class NotebookView(BaseModel):
    """
    Everything the page needs, computed once per request.

    Fields:
        outcome: Set when the request carried a recognized ?status= token
        errors:  Validation messages in the order the checks ran
        form:    Form mode and pre-filled values
        notes:   The full note list, freshly loaded, newest update first
    """

    model_config = ConfigDict(frozen=True)

    outcome: Optional[Outcome] = None
    errors: Tuple[str, ...] = ()
    form: NoteForm = Field(default_factory=NoteForm)
    notes: Tuple[NoteCard, ...] = ()

    @property
    def flash(self) -> Optional[str]:
        return self.outcome.flash_message if self.outcome else None

    @property
    def note_count(self) -> int:
        return len(self.notes)


class Redirect(BaseModel):
    """Decision to end the request with a redirect to the list view."""

    model_config = ConfigDict(frozen=True)

    outcome: Outcome

    @property
    def location(self) -> str:
        return f"/?status={self.outcome.value}"
