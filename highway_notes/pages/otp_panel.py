"""
OTP verification panel shared by the sign-in and sign-up pages.
"""

from typing import Callable

from nicegui import ui

from highway_notes.flows.auth_flow import AuthFlow


def render_otp_panel(
    flow: AuthFlow,
    *,
    back_label: str,
    on_back: Callable[[], None],
) -> None:
    """
    Render the code input, resend link, verify button and back link.

    Args:
        flow: Flow in the ``OTP_PENDING`` state.
        back_label: Caption of the back link.
        on_back: Called after the flow returned to the form step.
    """
    ui.label("Verify OTP").classes("text-xl font-semibold text-white")
    ui.label(f"Enter the OTP sent to {flow.target_email}").classes(
        "text-sm text-slate-300 mb-4"
    )

    def _on_otp_change(event) -> None:
        cleaned = flow.set_otp(event.value)
        if cleaned != event.value:
            event.sender.value = cleaned

    (
        ui.input(label="OTP Code", placeholder="000000", on_change=_on_otp_change)
        .props("outlined dense dark maxlength=6 input-class=text-center")
        .classes("w-full text-2xl tracking-widest")
    )

    with ui.row().classes("w-full justify-end mt-1"):
        resend_btn = ui.button("Resend OTP").props("flat dense no-caps").classes(
            "text-emerald-400 text-sm"
        )

    def _sync_resend() -> None:
        if flow.can_resend:
            resend_btn.text = "Resend OTP"
            resend_btn.enable()
        else:
            resend_btn.text = "OTP limit reached"
            resend_btn.disable()

    async def _resend() -> None:
        await flow.resend()
        _sync_resend()

    resend_btn.on_click(_resend)
    _sync_resend()

    verify_btn = ui.button("Verify OTP").classes(
        "w-full mt-5 bg-emerald-600 "
        "hover:bg-emerald-500 text-white font-semibold rounded-lg"
    )

    async def _verify() -> None:
        verify_btn.disable()
        if not await flow.verify():
            verify_btn.enable()

    verify_btn.on_click(_verify)

    def _back() -> None:
        flow.back()
        on_back()

    ui.button(back_label, on_click=_back).props("flat no-caps").classes(
        "w-full mt-3 text-emerald-400"
    )
