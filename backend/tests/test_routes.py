"""
Skyward Notes — HTTP Endpoint Tests
====================================

What:  End-to-end tests through FastAPI: form posts, redirects, the rendered
       page, static assets, error pages and the health check.
How:   HTTPX AsyncClient over ASGITransport against create_app(engine=...)
       bound to the in-memory test database.
"""

import re
from unittest.mock import AsyncMock, patch

import pytest

from skyward.exceptions import StorageError


def note_ids_in(html: str):
    return [int(n) for n in re.findall(r'href="/\?edit=(\d+)#note-form"', html)]


class TestNotebookPage:
    """GET /."""

    @pytest.mark.asyncio
    async def test_empty_notebook(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "No notes yet." in response.text
        assert "Add a fresh note" in response.text
        assert '<link rel="stylesheet" href="/assets/style.css">' in response.text

    @pytest.mark.asyncio
    async def test_status_created_shows_flash(self, test_client):
        response = await test_client.get("/", params={"status": "created"})

        assert "Note saved successfully." in response.text

    @pytest.mark.asyncio
    async def test_bogus_status_shows_no_flash(self, test_client):
        response = await test_client.get("/", params={"status": "bogus"})

        assert response.status_code == 200
        assert 'class="notice success"' not in response.text

    @pytest.mark.asyncio
    async def test_edit_unknown_note_shows_error_in_create_mode(self, test_client):
        response = await test_client.get("/", params={"edit": "12345"})

        assert "Note not found or already removed." in response.text
        assert "Add a fresh note" in response.text
        assert 'name="note_id"' not in response.text

    @pytest.mark.asyncio
    async def test_response_carries_request_id(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "trace-42"})

        assert response.headers["X-Request-ID"] == "trace-42"


class TestSubmissions:
    """POST /."""

    @pytest.mark.asyncio
    async def test_create_redirects_then_lists_note(self, test_client):
        response = await test_client.post(
            "/", data={"action": "create", "title": "Standup", "body": "Ship it"}
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/?status=created"

        page = await test_client.get(response.headers["location"])
        assert "Note saved successfully." in page.text
        assert "Standup" in page.text
        assert len(note_ids_in(page.text)) == 1

    @pytest.mark.asyncio
    async def test_edit_then_update_flow(self, test_client):
        await test_client.post("/", data={"title": "Draft", "body": "v1"})
        page = await test_client.get("/")
        (note_id,) = note_ids_in(page.text)

        edit_page = await test_client.get("/", params={"edit": str(note_id)})
        assert "Edit note" in edit_page.text
        assert f'<input type="hidden" name="note_id" value="{note_id}">' in edit_page.text
        assert '<input type="hidden" name="action" value="update">' in edit_page.text

        response = await test_client.post(
            "/",
            data={"action": "update", "note_id": str(note_id), "title": "Final", "body": "v2"},
        )
        assert response.status_code == 303
        assert response.headers["location"] == "/?status=updated"

        page = await test_client.get("/?status=updated")
        assert "Note updated successfully." in page.text
        assert "Final" in page.text
        assert "Draft" not in page.text

    @pytest.mark.asyncio
    async def test_delete_redirects_and_removes(self, test_client):
        await test_client.post("/", data={"title": "Temporary", "body": "bye"})
        (note_id,) = note_ids_in((await test_client.get("/")).text)

        response = await test_client.post(
            "/", data={"action": "delete", "note_id": str(note_id)}
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/?status=deleted"
        page = await test_client.get("/?status=deleted")
        assert "Note removed successfully." in page.text
        assert note_ids_in(page.text) == []

    @pytest.mark.asyncio
    async def test_invalid_submission_renders_all_errors(self, test_client):
        response = await test_client.post("/", data={"action": "create", "title": "", "body": ""})

        assert response.status_code == 200
        assert "<li>Title is required.</li>" in response.text
        assert "<li>Content cannot be empty.</li>" in response.text
        assert note_ids_in(response.text) == []

    @pytest.mark.asyncio
    async def test_long_title_is_rejected(self, test_client):
        response = await test_client.post("/", data={"title": "y" * 121, "body": "ok"})

        assert response.status_code == 200
        assert "Title must be 120 characters or less." in response.text
        assert note_ids_in(response.text) == []

    @pytest.mark.asyncio
    async def test_newest_update_listed_first(self, test_client):
        await test_client.post("/", data={"title": "Alpha", "body": "a"})
        await test_client.post("/", data={"title": "Beta", "body": "b"})
        beta, alpha = note_ids_in((await test_client.get("/")).text)

        await test_client.post(
            "/", data={"action": "update", "note_id": str(alpha), "title": "Alpha", "body": "a2"}
        )

        assert note_ids_in((await test_client.get("/")).text) == [alpha, beta]


class TestEscaping:
    """User text must never be interpreted as markup."""

    @pytest.mark.asyncio
    async def test_title_and_body_are_escaped_and_line_breaks_kept(self, test_client):
        await test_client.post(
            "/",
            data={"title": "<script>alert(1)</script>", "body": "first & <b>bold</b>\nsecond"},
        )

        page = await test_client.get("/")

        assert "<script>alert(1)</script>" not in page.text
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in page.text
        assert "first &amp; &lt;b&gt;bold&lt;/b&gt;<br>\nsecond" in page.text

    @pytest.mark.asyncio
    async def test_rejected_form_echo_is_escaped(self, test_client):
        response = await test_client.post("/", data={"title": '"><img src=x>', "body": ""})

        assert 'value="&#34;&gt;&lt;img src=x&gt;"' in response.text


class TestInfrastructure:
    """Static assets, storage failures and health."""

    @pytest.mark.asyncio
    async def test_stylesheet_is_served(self, test_client):
        response = await test_client.get("/assets/style.css")

        assert response.status_code == 200
        assert "text/css" in response.headers["content-type"]

    @pytest.mark.asyncio
    async def test_storage_error_renders_500_page(self, test_client):
        with patch(
            "skyward.services.note_store.NoteStore.list_all",
            new=AsyncMock(side_effect=StorageError(operation="list_all")),
        ):
            response = await test_client.get("/")

        assert response.status_code == 500
        assert "Your notes could not be reached right now." in response.text
        assert "list_all" not in response.text

    @pytest.mark.asyncio
    async def test_health_reports_connected_database(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
