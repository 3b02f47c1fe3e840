"""
Welcome page UI.

Landing screen after a successful OTP verification.
"""

from typing import Optional

from nicegui import ui

from highway_notes.layouts.app_header import app_header, sign_out
from highway_notes.state.session import SessionContext
from highway_notes.utils.validation import parse_date_of_birth
from highway_notes.utils.ui_bridge import navigate_to, notify


def format_date_of_birth(value: Optional[str]) -> Optional[str]:
    """Render an ISO date as ``Month D, YYYY``; ``None`` when unknown or invalid."""
    if not value:
        return None
    parsed = parse_date_of_birth(value)
    if parsed is None:
        return None
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def show_welcome_page(session: SessionContext) -> None:
    """Render the profile summary of the signed-in user."""
    with ui.column().classes("w-full min-h-screen bg-[#0f172a]"):
        app_header(
            "Welcome",
            on_sign_out=lambda: sign_out(session, notify, navigate_to),
        )

        with ui.card().classes(
            "w-full max-w-2xl mx-auto mt-10 bg-[#111827] text-white "
            "shadow-xl rounded-2xl p-8"
        ):
            _render_profile(session)

            with ui.row().classes("w-full gap-4 mt-6"):
                ui.button(
                    "Go to Dashboard",
                    on_click=lambda: navigate_to("/dashboard"),
                ).classes("flex-1 bg-emerald-600 text-white font-semibold")
                ui.button(
                    "Create Your First Note",
                    on_click=lambda: navigate_to("/dashboard"),
                ).props("outline").classes("flex-1 text-slate-200")


def _render_profile(ctx: SessionContext) -> None:
    user = ctx.user
    name = user.name if user and user.name else "there"

    ui.label(f"Welcome, {name}!").classes("text-3xl font-bold text-center w-full")
    ui.label(
        "You have successfully signed up and logged in to Highway Notes"
    ).classes("text-slate-400 text-center w-full mb-6")

    ui.label("Your Information").classes("text-xl font-semibold mb-2")

    if user:
        _info_row("Full Name", user.name)
        _info_row("Email Address", user.email)

        dob = format_date_of_birth(user.date_of_birth)
        if dob:
            _info_row("Date of Birth", dob)

    _info_row("Account Status", "Verified ✓", value_classes="text-emerald-400")


def _info_row(label: str, value: str, value_classes: str = "text-white") -> None:
    with ui.column().classes("gap-0 mt-2"):
        ui.label(label).classes("text-sm text-slate-500")
        ui.label(value).classes(f"text-lg font-medium {value_classes}")
