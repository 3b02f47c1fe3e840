"""
Dashboard notes controller.

The local list is a read-through cache over the backend collection: it is
replaced wholesale on load and only changed after the backend confirmed a
create or delete.
"""

from typing import List, Optional

from highway_notes.api import notes_client
from highway_notes.api.http_client import ApiClient, ApiError, UnauthorizedError
from highway_notes.api.schemas import Note
from highway_notes.utils.logger import get_logger
from highway_notes.utils.ui_bridge import Notifier

logger = get_logger(__name__)

FILL_ALL_FIELDS_MESSAGE = "Please fill in all fields"


class NotesBoard:
    def __init__(
        self,
        *,
        notify: Notifier,
        client: ApiClient,
    ) -> None:
        self.client = client
        self._notify = notify

        self.notes: List[Note] = []
        self.is_loading = True
        self.pending_delete: Optional[str] = None
        self.disposed = False

    def dispose(self) -> None:
        self.disposed = True

    async def load(self) -> None:
        """Replace the cache with the backend's current collection."""
        try:
            notes = await notes_client.fetch_notes(client=self.client)
        except UnauthorizedError:
            return
        except ApiError:
            logger.warning("Failed to fetch notes")
            if not self.disposed:
                self._notify("Failed to fetch notes", "negative")
            return
        finally:
            self.is_loading = False

        if not self.disposed:
            self.notes = notes

    async def create(self, title: str, content: str) -> Optional[Note]:
        """
        Create a note and put it at the head of the list.

        Returns:
            The created note, or ``None`` when rejected.
        """
        if not (title or "").strip() or not (content or "").strip():
            self._notify(FILL_ALL_FIELDS_MESSAGE, "warning")
            return None

        try:
            note = await notes_client.create_note(title, content, client=self.client)
        except UnauthorizedError:
            return None
        except ApiError as exc:
            if not self.disposed:
                self._notify(exc.describe("Failed to create note"), "negative")
            return None

        if self.disposed:
            return None

        self.notes = [note, *self.notes]
        self._notify("Note created successfully!", "positive")
        return note

    # ---------- delete with confirmation ----------

    def request_delete(self, note_id: str) -> None:
        """First step: remember which note the user wants gone."""
        self.pending_delete = note_id

    def cancel_delete(self) -> None:
        self.pending_delete = None

    async def confirm_delete(self) -> bool:
        """
        Second step: delete the note picked by ``request_delete``.

        Returns:
            True when the backend deleted the note.
        """
        note_id = self.pending_delete
        if note_id is None:
            return False
        self.pending_delete = None

        try:
            await notes_client.delete_note(note_id, client=self.client)
        except UnauthorizedError:
            return False
        except ApiError as exc:
            if not self.disposed:
                self._notify(exc.describe("Failed to delete note"), "negative")
            return False

        if self.disposed:
            return False

        self.notes = [note for note in self.notes if note.id != note_id]
        self._notify("Note deleted successfully!", "positive")
        return True
