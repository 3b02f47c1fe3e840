import pytest

from highway_notes.flows.notes_board import FILL_ALL_FIELDS_MESSAGE, NotesBoard


def _note(note_id: str, title: str = "Title", content: str = "Body") -> dict:
    return {
        "_id": note_id,
        "title": title,
        "content": content,
        "createdAt": "2024-05-10T12:00:00Z",
        "updatedAt": "2024-05-10T12:00:00Z",
    }


@pytest.fixture
def board(api_client, notifier):
    return NotesBoard(notify=notifier, client=api_client)


@pytest.mark.asyncio
async def test_load_replaces_cache(board, fake_http):
    fake_http.add("GET", "/notes", 200, {"notes": [_note("n2"), _note("n1")]})
    board.notes = []

    await board.load()

    assert board.is_loading is False
    assert [note.id for note in board.notes] == ["n2", "n1"]


@pytest.mark.asyncio
async def test_load_failure_keeps_cache_and_notifies(board, fake_http, notifier):
    fake_http.add("GET", "/notes", 500, {"message": "boom"})

    await board.load()

    assert board.is_loading is False
    assert board.notes == []
    assert notifier.last == ("Failed to fetch notes", "negative")


@pytest.mark.asyncio
async def test_create_with_empty_content_rejected_locally(board, fake_http, notifier):
    assert await board.create("Groceries", "   ") is None

    assert fake_http.calls == []
    assert notifier.last == (FILL_ALL_FIELDS_MESSAGE, "warning")


@pytest.mark.asyncio
async def test_created_note_goes_to_head_of_list(board, fake_http, notifier):
    fake_http.add("GET", "/notes", 200, {"notes": [_note("n1")]})
    fake_http.add("POST", "/notes", 201, {"note": _note("n2", "Groceries", "Milk")})
    await board.load()

    note = await board.create("Groceries", "Milk")

    assert note.id == "n2"
    assert [n.id for n in board.notes] == ["n2", "n1"]
    assert notifier.last == ("Note created successfully!", "positive")


@pytest.mark.asyncio
async def test_failed_create_leaves_list_untouched(board, fake_http, notifier):
    fake_http.add("POST", "/notes", 400, {"message": "Title too long"})

    assert await board.create("x" * 300, "Milk") is None

    assert board.notes == []
    assert notifier.last == ("Title too long", "negative")


@pytest.mark.asyncio
async def test_delete_requires_confirmation(board, fake_http):
    fake_http.add("GET", "/notes", 200, {"notes": [_note("n1")]})
    await board.load()
    fake_http.calls.clear()

    board.request_delete("n1")
    board.cancel_delete()

    assert await board.confirm_delete() is False
    assert fake_http.calls == []
    assert len(board.notes) == 1


@pytest.mark.asyncio
async def test_confirmed_delete_removes_note(board, fake_http, notifier):
    fake_http.add("GET", "/notes", 200, {"notes": [_note("n2"), _note("n1")]})
    fake_http.add("DELETE", "/notes/n2", 200, {"message": "deleted"})
    await board.load()

    board.request_delete("n2")
    assert await board.confirm_delete() is True

    assert [n.id for n in board.notes] == ["n1"]
    assert board.pending_delete is None
    assert notifier.last == ("Note deleted successfully!", "positive")


@pytest.mark.asyncio
async def test_failed_delete_keeps_note(board, fake_http, notifier):
    fake_http.add("GET", "/notes", 200, {"notes": [_note("n1")]})
    fake_http.add("DELETE", "/notes/n1", 404, {"message": "Note not found"})
    await board.load()

    board.request_delete("n1")
    assert await board.confirm_delete() is False

    assert [n.id for n in board.notes] == ["n1"]
    assert notifier.last == ("Note not found", "negative")


@pytest.mark.asyncio
async def test_401_on_notes_clears_session(board, fake_http, session_ctx, navigator, notifier):
    session_ctx.login("expired")
    fake_http.add("GET", "/notes", 401, {"message": "Invalid token"})

    await board.load()

    assert session_ctx.token is None
    assert navigator.last == ("/signin",)
    assert notifier.calls == []
