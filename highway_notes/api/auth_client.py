"""
Authentication API client for frontend.

Wraps the OTP-based sign-in / sign-up endpoints of the backend.
"""

from typing import Any, Dict, Optional

from pydantic import ValidationError

from highway_notes.api.http_client import ApiClient, ApiError
from highway_notes.api.schemas import AuthResult
from highway_notes.utils.logger import get_logger

logger = get_logger(__name__)


async def login_user(email: str, *, client: ApiClient) -> Any:
    """
    Begin sign-in; the backend emails a one-time password.

    Raises:
        ApiError: On request failure.
    """
    logger.info("Requesting sign-in OTP", extra={"email": email})

    return await client.post(
        "/auth/login",
        {"email": email},
    )


async def register_user(
    name: str,
    email: str,
    date_of_birth: Optional[str] = None,
    *,
    client: ApiClient,
) -> Any:
    """
    Create an account; the backend emails a one-time password.

    Args:
        name: Display name.
        email: Account email.
        date_of_birth: Optional ISO date, omitted from the payload when empty.

    Raises:
        ApiError: On registration failure.
    """
    logger.info("Attempting user registration", extra={"email": email})

    payload: Dict[str, Any] = {"name": name, "email": email}
    if date_of_birth:
        payload["dateOfBirth"] = date_of_birth

    return await client.post("/auth/register", payload)


async def request_otp(email: str, *, client: ApiClient) -> Any:
    """Ask the backend to (re)send a one-time password."""
    logger.info("Requesting OTP resend", extra={"email": email})

    return await client.post(
        "/auth/request-otp",
        {"email": email},
    )


async def verify_otp(
    email: str,
    otp: str,
    *,
    client: ApiClient,
) -> AuthResult:
    """
    Exchange a one-time password for a session token.

    Returns:
        Token and user profile.

    Raises:
        ApiError: On verification failure or a malformed response.
    """
    logger.info("Verifying OTP", extra={"email": email})

    payload = await client.post(
        "/auth/verify-otp",
        {"email": email, "otp": otp},
    )

    try:
        return AuthResult.model_validate(payload)
    except ValidationError as exc:
        logger.exception("Invalid verification response")
        raise ApiError("Invalid response from server") from exc


def google_sign_in_url(*, client: ApiClient) -> str:
    """URL of the backend's Google OAuth hand-off."""
    return f"{client.base_url}/auth/google"
