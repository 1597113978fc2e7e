"""
Skyward Notes — Notebook Route
===============================

What:  GET / (list + form page) and POST / (form submission).
How:   Reads the raw query and form, hands them to NotebookHandler, and
       turns the result into a 303 redirect or an HTML page.
Who:   Browsers: the page's own forms and the ?edit= links on note cards.

The raw form is read instead of FastAPI Form() parameters so that a
missing note_id stays distinguishable from an empty one.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from skyward.database import get_db_session
from skyward.rendering import render_page
from skyward.schemas.note import Redirect
from skyward.services.note_store import NoteStore
from skyward.services.request_handler import NotebookHandler

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notebook"])


def get_note_store(db: AsyncSession = Depends(get_db_session)) -> NoteStore:
    """One NoteStore per request, bound to that request's session."""
    return NoteStore(db)


def get_notebook_handler(store: NoteStore = Depends(get_note_store)) -> NotebookHandler:
    return NotebookHandler(store)


@router.api_route(
    "/",
    methods=["GET", "POST"],
    response_class=HTMLResponse,
    summary="Notebook page and form submissions",
)
async def notebook(
    request: Request,
    handler: NotebookHandler = Depends(get_notebook_handler),
) -> Response:
    """
    Render the notebook or process a submission.

    GET  /?status=<created|updated|deleted>  → page with a flash message
    GET  /?edit=<id>                         → page with the note in the form
    POST / (action, title, body, note_id)    → 303 to /?status=... or the page
                                               again with validation errors
    """
    form = None
    if request.method == "POST":
        form = {key: value for key, value in (await request.form()).items() if isinstance(value, str)}

    result = await handler.handle(request.method, request.query_params, form)

    if isinstance(result, Redirect):
        # 303: the browser follows with a GET, so a refresh never re-submits
        return RedirectResponse(url=result.location, status_code=303)

    return HTMLResponse(content=render_page(result))
