"""
Notes API client.

Handles listing, creating and deleting the signed-in user's notes.
"""

from typing import List
from urllib.parse import quote

from pydantic import ValidationError

from highway_notes.api.http_client import ApiClient, ApiError
from highway_notes.api.schemas import Note, NoteCreated, NotesPage
from highway_notes.utils.logger import get_logger

logger = get_logger(__name__)


async def fetch_notes(*, client: ApiClient) -> List[Note]:
    """
    Fetch every note of the current user.

    Raises:
        ApiError: On request or response failure.
    """
    logger.info("Fetching notes")

    payload = await client.get("/notes")

    try:
        return NotesPage.model_validate(payload).notes
    except ValidationError as exc:
        logger.exception("Invalid notes payload")
        raise ApiError("Invalid response from server") from exc


async def create_note(
    title: str,
    content: str,
    *,
    client: ApiClient,
) -> Note:
    """
    Create a note.

    Returns:
        The note as stored by the backend.
    """
    logger.info("Creating note")

    payload = await client.post(
        "/notes",
        {"title": title, "content": content},
    )

    try:
        return NoteCreated.model_validate(payload).note
    except ValidationError as exc:
        logger.exception("Invalid note payload")
        raise ApiError("Invalid response from server") from exc


async def delete_note(note_id: str, *, client: ApiClient) -> None:
    logger.info("Deleting note", extra={"note_id": note_id})

    await client.delete(f"/notes/{quote(note_id, safe='')}")
