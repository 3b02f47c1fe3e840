"""
Header bar for the signed-in pages.
"""

from nicegui import ui

from highway_notes.state.session import SessionContext
from highway_notes.utils.logger import get_logger
from highway_notes.utils.ui_bridge import Navigator, Notifier

logger = get_logger(__name__)

SIGN_IN_PATH = "/signin"


def sign_out(session: SessionContext, notify: Notifier, navigate: Navigator) -> None:
    """End the session locally and return to sign-in."""
    logger.info("User signed out")
    session.logout()
    notify("Logged out successfully!", "positive")
    navigate(SIGN_IN_PATH)


def app_header(title: str, on_sign_out) -> None:
    with ui.row().classes(
        "w-full px-6 py-3 bg-[#0b1220] justify-between items-center shrink-0"
    ):
        ui.label(title).classes("text-xl font-bold text-white")
        ui.button("Sign Out", on_click=on_sign_out).props("flat no-caps").classes(
            "text-slate-300"
        )
