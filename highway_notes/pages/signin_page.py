"""
Sign-in page UI.

Email-only sign-in: the backend emails a one-time password which the user
enters on the OTP panel. Also receives the token handed back by the Google
OAuth redirect.
"""

from typing import Optional

from nicegui import ui

from highway_notes.api.auth_client import google_sign_in_url
from highway_notes.api.http_client import ApiClient
from highway_notes.flows.auth_flow import AuthState, SignInFlow
from highway_notes.layouts.auth_layout import auth_layout
from highway_notes.pages.otp_panel import render_otp_panel
from highway_notes.state.session import SessionContext
from highway_notes.utils import validation
from highway_notes.utils.logger import get_logger
from highway_notes.utils.ui_bridge import navigate_to, notify

logger = get_logger(__name__)


def show_signin_page(session: SessionContext, token: Optional[str] = None) -> None:
    """
    Render the sign-in page.

    Args:
        session: Session of the requesting browser.
        token: Session token from the OAuth redirect, if any.
    """
    flow = SignInFlow(session=session, notify=notify, navigate=navigate_to)

    if flow.accept_oauth_token(token):
        return

    flow.open()
    ui.context.client.on_disconnect(flow.dispose)

    draft = {"email": ""}

    @ui.refreshable
    def content() -> None:
        if flow.state is AuthState.OTP_PENDING:
            render_otp_panel(flow, back_label="Back to Sign In", on_back=content.refresh)
        else:
            _render_form(flow, draft, on_submitted=content.refresh)

    auth_layout("Sign in", "Welcome back! Please sign in to your account", content)


def _render_form(flow: SignInFlow, draft: dict, *, on_submitted) -> None:
    # -------- INPUTS --------
    (
        ui.input(
            label="Email",
            placeholder="Enter your email",
            validation=validation.email_error,
        )
        .props("outlined dense dark type=email")
        .classes("w-full")
        .bind_value(draft, "email")
    )

    # -------- GET OTP BUTTON --------
    submit_btn = ui.button("Get OTP").classes(
        "w-full mt-5 bg-emerald-600 "
        "hover:bg-emerald-500 text-white font-semibold rounded-lg"
    )

    async def _submit() -> None:
        submit_btn.disable()
        submit_btn.text = "Sending OTP..."
        if await flow.submit(draft["email"]):
            on_submitted()
            return
        submit_btn.text = "Get OTP"
        submit_btn.enable()

    submit_btn.on_click(_submit)

    # -------- GOOGLE --------
    ui.button(
        "Sign in with Google",
        on_click=lambda: _handle_google_sign_in(flow.client),
    ).props("outline no-caps").classes("w-full mt-3 text-slate-200")

    # -------- FOOTER --------
    ui.separator().classes("my-4")

    ui.label("Don't have an account?").classes("text-center text-gray-400 text-sm")

    ui.button(
        "Sign up",
        on_click=lambda: navigate_to("/signup"),
    ).props("flat").classes("w-full text-emerald-400")


def _handle_google_sign_in(client: ApiClient) -> None:
    url = google_sign_in_url(client=client)
    logger.info("Redirecting to Google OAuth", extra={"url": url})
    navigate_to(url)
