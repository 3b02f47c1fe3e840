"""
Sign-up page UI.

Collects name, optional date of birth, email and terms acceptance, then
hands over to the shared OTP panel.
"""

from nicegui import ui

from highway_notes.flows.auth_flow import AuthState, SignUpFlow, SignUpForm
from highway_notes.layouts.auth_layout import auth_layout
from highway_notes.pages.otp_panel import render_otp_panel
from highway_notes.state.session import SessionContext
from highway_notes.utils import validation
from highway_notes.utils.logger import get_logger
from highway_notes.utils.ui_bridge import navigate_to, notify

logger = get_logger(__name__)


def show_signup_page(session: SessionContext) -> None:
    """
    Render the sign-up page.
    """
    logger.debug("Rendering sign-up page")

    flow = SignUpFlow(session=session, notify=notify, navigate=navigate_to)
    flow.open()
    ui.context.client.on_disconnect(flow.dispose)

    form = SignUpForm()

    @ui.refreshable
    def content() -> None:
        if flow.state is AuthState.OTP_PENDING:
            render_otp_panel(flow, back_label="Back to Sign Up", on_back=content.refresh)
        else:
            _render_form(flow, form, on_submitted=content.refresh)

    auth_layout("Sign up", "Create your account to get started", content)


def _render_form(flow: SignUpFlow, form: SignUpForm, *, on_submitted) -> None:
    # -------- INPUTS --------
    (
        ui.input(
            label="Your Name",
            placeholder="Enter your name",
            validation=validation.name_error,
        )
        .props("outlined dense dark")
        .classes("w-full")
        .bind_value(form, "name")
    )

    (
        ui.input(
            label="Date of Birth",
            validation=validation.date_of_birth_error,
        )
        .props("outlined dense dark type=date stack-label")
        .classes("w-full mt-3")
        .bind_value(form, "date_of_birth")
    )

    (
        ui.input(
            label="Email",
            placeholder="Enter your email",
            validation=validation.email_error,
        )
        .props("outlined dense dark type=email")
        .classes("w-full mt-3")
        .bind_value(form, "email")
    )

    ui.checkbox("I agree to the terms and conditions").classes(
        "mt-3 text-slate-300 text-sm"
    ).bind_value(form, "agree_to_terms")

    # -------- SIGN UP BUTTON --------
    submit_btn = ui.button("Sign up").classes(
        "w-full mt-5 bg-emerald-600 "
        "hover:bg-emerald-500 text-white font-semibold rounded-lg"
    )

    async def _submit() -> None:
        submit_btn.disable()
        submit_btn.text = "Creating Account..."
        if await flow.submit(form):
            on_submitted()
            return
        submit_btn.text = "Sign up"
        submit_btn.enable()

    submit_btn.on_click(_submit)

    # -------- EXISTING ACCOUNT --------
    with ui.column().classes("w-full mt-3 items-center").bind_visibility_from(
        flow, "suggest_sign_in"
    ):
        ui.label("This email already has an account.").classes(
            "text-amber-400 text-sm"
        )
        ui.button(
            "Sign in instead",
            on_click=lambda: navigate_to("/signin"),
        ).props("outline no-caps").classes("w-full text-emerald-400")

    # -------- FOOTER --------
    ui.separator().classes("my-4")

    ui.label("Already have an account?").classes("text-center text-gray-400 text-sm")

    ui.button(
        "Sign in",
        on_click=lambda: navigate_to("/signin"),
    ).props("flat").classes("w-full text-emerald-400")
