import pytest

from highway_notes.api import auth_client, notes_client
from highway_notes.api.http_client import ApiError


@pytest.mark.asyncio
async def test_register_omits_empty_date_of_birth(api_client, fake_http):
    fake_http.add("POST", "/auth/register", 201, {"message": "OTP sent"})

    await auth_client.register_user("Jane Doe", "jane@example.com", None, client=api_client)

    assert fake_http.calls[0]["json"] == {"name": "Jane Doe", "email": "jane@example.com"}


@pytest.mark.asyncio
async def test_register_sends_date_of_birth(api_client, fake_http):
    fake_http.add("POST", "/auth/register", 201, {"message": "OTP sent"})

    await auth_client.register_user(
        "Jane Doe", "jane@example.com", "1990-04-02", client=api_client
    )

    assert fake_http.calls[0]["json"]["dateOfBirth"] == "1990-04-02"


@pytest.mark.asyncio
async def test_verify_otp_parses_token_and_user(api_client, fake_http):
    fake_http.add(
        "POST",
        "/auth/verify-otp",
        200,
        {
            "token": "tok",
            "user": {"name": "Jane Doe", "email": "jane@example.com", "dateOfBirth": "1990-04-02"},
        },
    )

    result = await auth_client.verify_otp("jane@example.com", "123456", client=api_client)

    assert result.token == "tok"
    assert result.user.date_of_birth == "1990-04-02"
    assert fake_http.calls[0]["json"] == {"email": "jane@example.com", "otp": "123456"}


@pytest.mark.asyncio
async def test_verify_otp_rejects_malformed_response(api_client, fake_http):
    fake_http.add("POST", "/auth/verify-otp", 200, {"ok": True})

    with pytest.raises(ApiError):
        await auth_client.verify_otp("jane@example.com", "123456", client=api_client)


def test_google_sign_in_url(api_client):
    assert auth_client.google_sign_in_url(client=api_client) == "http://api.test/api/auth/google"


@pytest.mark.asyncio
async def test_fetch_notes_accepts_mongo_ids(api_client, fake_http):
    fake_http.add(
        "GET",
        "/notes",
        200,
        {
            "notes": [
                {
                    "_id": "n2",
                    "title": "Second",
                    "content": "b",
                    "createdAt": "2024-05-02T10:00:00.000Z",
                    "updatedAt": "2024-05-02T10:00:00.000Z",
                },
                {"id": "n1", "title": "First", "content": "a"},
            ]
        },
    )

    notes = await notes_client.fetch_notes(client=api_client)

    assert [note.id for note in notes] == ["n2", "n1"]
    assert notes[0].created_at.year == 2024


@pytest.mark.asyncio
async def test_create_note_returns_server_note(api_client, fake_http):
    fake_http.add(
        "POST",
        "/notes",
        201,
        {"note": {"_id": "n9", "title": "Groceries", "content": "Milk"}},
    )

    note = await notes_client.create_note("Groceries", "Milk", client=api_client)

    assert note.id == "n9"
    assert fake_http.calls[0]["json"] == {"title": "Groceries", "content": "Milk"}


@pytest.mark.asyncio
async def test_delete_note_targets_note_path(api_client, fake_http):
    fake_http.add("DELETE", "/notes/n9", 200, {"message": "Note deleted"})

    await notes_client.delete_note("n9", client=api_client)

    assert fake_http.calls[0]["method"] == "DELETE"
    assert fake_http.paths() == ["/notes/n9"]


@pytest.mark.asyncio
async def test_delete_note_escapes_the_id(api_client, fake_http):
    fake_http.add("DELETE", "/notes/..%2Fauth%20x", 200, {"message": "Note deleted"})

    await notes_client.delete_note("../auth x", client=api_client)

    assert fake_http.paths() == ["/notes/..%2Fauth%20x"]
