"""
Application entrypoint and route definitions.

Registers all frontend pages and starts the NiceGUI app.
"""

from typing import Optional

from nicegui import ui

from highway_notes.config import settings
from highway_notes.pages.dashboard_page import show_dashboard_page
from highway_notes.pages.signin_page import show_signin_page
from highway_notes.pages.signup_page import show_signup_page
from highway_notes.pages.welcome_page import show_welcome_page
from highway_notes.state.session import SessionContext
from highway_notes.utils.logger import get_logger
from highway_notes.utils.ui_bridge import current_session

logger = get_logger(__name__)


def _enable_dark_mode() -> None:
    """Enable global dark mode."""
    ui.dark_mode().enable()


def _require_session(route: str) -> Optional[SessionContext]:
    """Return this browser's session, or redirect to sign-in when no token is stored."""
    ctx = current_session()
    if ctx.is_authenticated:
        return ctx

    logger.warning(
        "Unauthenticated access; redirecting to sign-in",
        extra={"route": route},
    )
    ui.navigate.to("/signin")
    return None


@ui.page("/")
def root() -> None:
    """Root route – dashboard when signed in, sign-in otherwise."""
    target = "/dashboard" if current_session().is_authenticated else "/signin"
    logger.debug("Root route accessed; redirecting", extra={"target": target})
    ui.navigate.to(target)


@ui.page("/signin")
def signin(token: Optional[str] = None) -> None:
    """Sign-in page route; ``token`` is set by the Google OAuth redirect."""
    _enable_dark_mode()
    logger.debug("Sign-in page accessed")
    show_signin_page(current_session(), token)


@ui.page("/signup")
def signup() -> None:
    """Sign-up page route."""
    _enable_dark_mode()
    logger.debug("Sign-up page accessed")
    show_signup_page(current_session())


@ui.page("/welcome")
def welcome() -> None:
    """Welcome page route."""
    _enable_dark_mode()

    ctx = _require_session("/welcome")
    if ctx is None:
        return

    show_welcome_page(ctx)


@ui.page("/dashboard")
def dashboard() -> None:
    """Dashboard page route."""
    _enable_dark_mode()

    ctx = _require_session("/dashboard")
    if ctx is None:
        return

    show_dashboard_page(ctx)


def start_app() -> None:
    """
    Start the NiceGUI application.
    """
    logger.info(
        "Starting Highway Notes frontend",
        extra={"env": settings.ENV, "api_base_url": settings.api_base_url},
    )

    ui.run(
        title=settings.TITLE,
        port=settings.PORT,
        reload=False,
        storage_secret=settings.STORAGE_SECRET,
    )


if __name__ == "__main__":
    start_app()
