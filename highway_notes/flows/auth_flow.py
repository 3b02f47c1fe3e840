"""
Sign-in / sign-up flow controllers.

Both screens share one state machine::

    IDLE -> FORM_ENTRY -> OTP_PENDING -> VERIFIED
                 ^             |
                 +---- back ---+

The controllers own the credentials-in-flight and the OTP resend throttle
for one screen lifetime. Rendering lives in ``highway_notes.pages``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from highway_notes.api import auth_client
from highway_notes.api.http_client import (
    ApiClient,
    ApiError,
    UnauthorizedError,
    client_for,
)
from highway_notes.config import settings
from highway_notes.flows.otp_throttle import OtpThrottle, OtpThrottleError
from highway_notes.state.session import SessionContext
from highway_notes.utils import validation
from highway_notes.utils.logger import get_logger
from highway_notes.utils.ui_bridge import Navigator, Notifier

logger = get_logger(__name__)

WELCOME_PATH = "/welcome"

EMAIL_EXISTS_MESSAGE = (
    "This email is already registered. "
    "Please use a different email or try signing in instead."
)


class AuthState(str, Enum):
    IDLE = "idle"
    FORM_ENTRY = "form_entry"
    OTP_PENDING = "otp_pending"
    VERIFIED = "verified"


@dataclass
class SignUpForm:
    name: str = ""
    email: str = ""
    date_of_birth: str = ""
    agree_to_terms: bool = False

    def first_error(self) -> Optional[str]:
        return (
            validation.name_error(self.name)
            or validation.date_of_birth_error(self.date_of_birth)
            or validation.email_error(self.email)
            or validation.terms_error(self.agree_to_terms)
        )


class AuthFlow:
    """
    Shared OTP request / verify behaviour.

    Args:
        session: Session context committed on successful verification.
        notify: Transient notification sink ``(message, kind)``.
        navigate: Navigation sink.
        client: API client; one bound to ``session`` when omitted.
        throttle: OTP resend throttle for this screen lifetime.
    """

    submit_fallback = "Request failed"
    submit_success = "OTP sent to your email"

    def __init__(
        self,
        *,
        session: SessionContext,
        notify: Notifier,
        navigate: Navigator,
        client: Optional[ApiClient] = None,
        throttle: Optional[OtpThrottle] = None,
    ) -> None:
        self.session = session
        self.client = client or client_for(session)
        self._notify = notify
        self._navigate = navigate
        self.throttle = throttle or OtpThrottle(
            max_requests=settings.OTP_MAX_REQUESTS,
            cooldown_seconds=settings.OTP_COOLDOWN_SECONDS,
        )

        self.state = AuthState.IDLE
        self.target_email = ""
        self.otp = ""
        self.is_loading = False
        self.is_verifying = False
        self.disposed = False

    # ---------- lifecycle ----------

    def open(self) -> None:
        """Screen mounted: the form is ready for input."""
        if self.state is AuthState.IDLE:
            self.state = AuthState.FORM_ENTRY

    def dispose(self) -> None:
        """Screen unmounted: results of in-flight requests are dropped."""
        self.disposed = True

    def back(self) -> None:
        """Leave the OTP step without contacting the backend."""
        if self.state is not AuthState.OTP_PENDING:
            return
        self.otp = ""
        self.state = AuthState.FORM_ENTRY

    # ---------- OTP step ----------

    @property
    def can_resend(self) -> bool:
        return not self.throttle.exhausted

    def set_otp(self, value: Optional[str]) -> str:
        self.otp = validation.sanitize_otp(value)
        return self.otp

    async def resend(self) -> bool:
        """
        Ask the backend for a fresh OTP, subject to the local throttle.

        Returns:
            True when the backend accepted the request.
        """
        if self.state is not AuthState.OTP_PENDING:
            return False

        if not self.target_email:
            self._notify("Please enter your email first", "warning")
            return False

        try:
            previous = self.throttle.reserve()
        except OtpThrottleError as exc:
            logger.info(
                "OTP resend throttled",
                extra={"remaining_seconds": exc.remaining_seconds},
            )
            self._notify(str(exc), "warning")
            return False

        try:
            await auth_client.request_otp(self.target_email, client=self.client)
        except UnauthorizedError:
            self.throttle.release(previous)
            return False
        except ApiError as exc:
            self.throttle.release(previous)
            logger.warning("OTP resend failed", extra={"email": self.target_email})
            if not self.disposed:
                self._notify(exc.describe("Failed to send OTP"), "negative")
            return False

        if not self.disposed:
            self._notify("OTP sent to your email", "positive")
        return True

    async def verify(self) -> bool:
        """
        Exchange the entered OTP for a session.

        Returns:
            True when the session was established.
        """
        if self.state is not AuthState.OTP_PENDING:
            return False

        if not self.otp or not self.target_email:
            self._notify("Please enter OTP and email", "warning")
            return False

        error = validation.otp_error(self.otp)
        if error:
            self._notify(error, "warning")
            return False

        if self.is_verifying:
            return False

        self.is_verifying = True
        try:
            result = await auth_client.verify_otp(
                self.target_email,
                self.otp,
                client=self.client,
            )
        except UnauthorizedError:
            return False
        except ApiError as exc:
            logger.warning("OTP verification failed", extra={"email": self.target_email})
            if not self.disposed:
                self._notify(exc.describe("OTP verification failed"), "negative")
            return False
        finally:
            self.is_verifying = False

        if self.disposed:
            logger.info("Verification finished after screen closed; result dropped")
            return False

        self.session.login(result.token, result.user)
        self.state = AuthState.VERIFIED
        self._notify("Email verified successfully!", "positive")
        self._navigate(WELCOME_PATH)
        return True

    # ---------- form step ----------

    async def _submit(
        self,
        email: str,
        request: Callable[[], Awaitable[Any]],
    ) -> bool:
        self.open()
        if self.is_loading or self.state is not AuthState.FORM_ENTRY:
            return False

        self.is_loading = True
        try:
            await request()
        except UnauthorizedError:
            return False
        except ApiError as exc:
            if not self.disposed:
                self._on_submit_error(exc)
            return False
        finally:
            self.is_loading = False

        if self.disposed:
            return False

        self.target_email = email
        self.otp = ""
        self.state = AuthState.OTP_PENDING
        self._notify(self.submit_success, "positive")
        return True

    def _on_submit_error(self, exc: ApiError) -> None:
        logger.warning("Form submission rejected", extra={"status_code": exc.status_code})
        self._notify(exc.describe(self.submit_fallback), "negative")


class SignInFlow(AuthFlow):
    submit_fallback = "Login failed"
    submit_success = "OTP sent to your email for login verification"

    async def submit(self, email: str) -> bool:
        """
        Validate the email and ask the backend to start sign-in.

        Returns:
            True when the flow moved on to the OTP step.
        """
        email = (email or "").strip()
        error = validation.email_error(email)
        if error:
            self._notify(error, "warning")
            return False

        return await self._submit(
            email,
            lambda: auth_client.login_user(email, client=self.client),
        )

    def accept_oauth_token(self, token: Optional[str]) -> bool:
        """
        Adopt a token handed back by the Google OAuth redirect.

        Returns:
            True when a token was present and the user was sent on.
        """
        if not token:
            return False

        logger.info("Session token received from OAuth redirect")
        self.session.login(token)
        self.state = AuthState.VERIFIED
        self._navigate("/dashboard")
        return True


class SignUpFlow(AuthFlow):
    submit_fallback = "Registration failed"
    submit_success = (
        "Registration successful! Please check your email for OTP verification."
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.suggest_sign_in = False

    async def submit(self, form: SignUpForm) -> bool:
        """
        Validate the registration form and create the account.

        Returns:
            True when the flow moved on to the OTP step.
        """
        form.name = form.name.strip()
        form.email = form.email.strip()

        error = form.first_error()
        if error:
            self._notify(error, "warning")
            return False

        self.suggest_sign_in = False
        return await self._submit(
            form.email,
            lambda: auth_client.register_user(
                form.name,
                form.email,
                form.date_of_birth or None,
                client=self.client,
            ),
        )

    def _on_submit_error(self, exc: ApiError) -> None:
        if _email_already_exists(exc):
            logger.info("Registration hit an existing account")
            self.suggest_sign_in = True
            self._notify(EMAIL_EXISTS_MESSAGE, "negative")
            return
        super()._on_submit_error(exc)


def _email_already_exists(exc: ApiError) -> bool:
    for err in exc.errors:
        if err.get("path") == "email" and "already exists" in str(err.get("msg", "")):
            return True
    return False
