"""
Default UI side effects for the screen flows.

Flows receive ``notify`` and ``navigate`` callables so they stay
independent of the rendering layer; these are the NiceGUI-backed defaults,
together with the lookup of the current browser's session.
"""

from typing import Callable

from nicegui import app, ui

from highway_notes.config import settings
from highway_notes.state.session import MappingTokenStore, SessionContext, sessions

Notifier = Callable[[str, str], None]
Navigator = Callable[[str], None]


def notify(message: str, kind: str = "info") -> None:
    """Show a transient notification (``positive``, ``negative``, ``warning``, ``info``)."""
    ui.notify(message, type=kind)


def navigate_to(path: str) -> None:
    ui.navigate.to(path)


def current_session() -> SessionContext:
    """
    Session of the browser behind the current request.

    Must be called while a page is being built. The token is kept in that
    browser's ``app.storage.user``, which NiceGUI persists per session
    cookie, so it survives reloads and server restarts.
    """
    user_storage = app.storage.user
    return sessions.get(
        app.storage.browser["id"],
        lambda: MappingTokenStore(
            lambda: user_storage,
            key=settings.TOKEN_STORAGE_KEY,
        ),
    )
