"""
Dashboard page UI.

Lists the user's notes with create and delete. There is no edit.
"""

from functools import partial

from nicegui import ui

from highway_notes.api.http_client import client_for
from highway_notes.api.schemas import Note
from highway_notes.flows.notes_board import NotesBoard
from highway_notes.layouts.app_header import app_header, sign_out
from highway_notes.state.session import SessionContext
from highway_notes.utils.logger import get_logger
from highway_notes.utils.ui_bridge import navigate_to, notify

logger = get_logger(__name__)

TITLE_MAX_LENGTH = 200
CONTENT_MAX_LENGTH = 10000


def show_dashboard_page(session: SessionContext) -> None:
    """Render the dashboard and load the notes once the client is connected."""
    logger.debug("Rendering dashboard page")

    board = NotesBoard(notify=notify, client=client_for(session))
    draft = {"title": "", "content": "", "show_form": False}

    client = ui.context.client
    client.on_disconnect(board.dispose)

    # ================= DELETE NOTE DIALOG =================
    delete_dialog = ui.dialog()
    with delete_dialog, ui.card().classes("bg-[#111827] text-white"):
        ui.label("Are you sure you want to delete this note?")
        with ui.row().classes("gap-4 justify-end w-full"):
            ui.button("Cancel", on_click=lambda: _cancel_delete(board, delete_dialog)).props(
                "flat"
            )
            confirm_btn = ui.button("Delete").classes("bg-red-600 text-white")

    async def _confirm_delete() -> None:
        delete_dialog.close()
        if await board.confirm_delete():
            notes_list.refresh()

    confirm_btn.on_click(_confirm_delete)

    def _ask_delete(note_id: str) -> None:
        board.request_delete(note_id)
        delete_dialog.open()

    # ================= NOTES LIST =================
    @ui.refreshable
    def notes_list() -> None:
        if board.is_loading:
            with ui.row().classes("w-full justify-center py-12"):
                ui.spinner(size="lg")
            return

        if not board.notes:
            ui.label("No notes yet. Create your first note!").classes(
                "text-slate-500 text-center w-full py-12"
            )
            return

        for note in board.notes:
            _note_card(note, on_delete=_ask_delete)

    @ui.refreshable
    def greeting() -> None:
        user = session.user
        ui.label(f"Welcome, {user.name if user and user.name else 'there'}!").classes(
            "text-xl font-semibold"
        )
        if user:
            ui.label(f"Email: {user.email}").classes("text-sm text-slate-400 mb-4")

    unsubscribe = session.subscribe(lambda _ctx: greeting.refresh())
    client.on_disconnect(unsubscribe)

    # ================= PAGE LAYOUT =================
    with ui.column().classes("w-full min-h-screen bg-[#0f172a] items-center"):
        app_header(
            "Dashboard",
            on_sign_out=lambda: sign_out(session, notify, navigate_to),
        )

        with ui.column().classes("w-full max-w-md px-4 py-6 gap-6"):
            with ui.card().classes("w-full bg-[#111827] text-white p-6"):
                greeting()
                ui.button(
                    "Create Note",
                    on_click=lambda: draft.update(show_form=True),
                ).classes("w-full bg-blue-600 text-white font-medium")

            with ui.card().classes("w-full bg-[#111827] text-white p-4").bind_visibility_from(
                draft, "show_form"
            ):
                ui.label("Create New Note").classes("text-lg font-medium mb-2")
                (
                    ui.input(label="Title", placeholder="Enter note title")
                    .props(f"outlined dense dark maxlength={TITLE_MAX_LENGTH}")
                    .classes("w-full")
                    .bind_value(draft, "title")
                )
                (
                    ui.textarea(label="Content", placeholder="Enter note content")
                    .props(f"outlined dense dark rows=4 maxlength={CONTENT_MAX_LENGTH}")
                    .classes("w-full mt-3")
                    .bind_value(draft, "content")
                )

                async def _create() -> None:
                    if await board.create(draft["title"], draft["content"]):
                        draft.update(title="", content="", show_form=False)
                        notes_list.refresh()

                with ui.row().classes("w-full gap-3 mt-4"):
                    ui.button("Create Note", on_click=_create).classes(
                        "flex-1 bg-blue-600 text-white"
                    )
                    ui.button(
                        "Cancel",
                        on_click=lambda: draft.update(title="", content="", show_form=False),
                    ).props("flat").classes("flex-1 text-slate-300")

            ui.label("Notes").classes("text-lg font-medium text-white")
            notes_list()

    async def _load() -> None:
        await board.load()
        notes_list.refresh()

    ui.timer(0, _load, once=True)


def _cancel_delete(board: NotesBoard, dialog: ui.dialog) -> None:
    board.cancel_delete()
    dialog.close()


def _note_card(note: Note, *, on_delete) -> None:
    with ui.card().classes("w-full bg-[#111827] text-white p-4"):
        with ui.row().classes("w-full justify-between items-start no-wrap"):
            ui.label(note.title).classes("text-base font-medium truncate flex-1")
            ui.button(
                icon="delete",
                on_click=partial(on_delete, note.id),
            ).props("flat round dense").classes("text-slate-400").tooltip("Delete note")
        ui.label(note.content).classes("text-slate-400 text-sm line-clamp-2")
