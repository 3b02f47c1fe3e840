"""
Form validation rules for the Highway Notes screens.

Validators are pure predicates. The ``*_error`` helpers return the first
failing message (or ``None``) and back both NiceGUI on-change validation
and submit-time checks.
"""

import re
from datetime import date, datetime
from typing import Callable, Dict, Optional

EMAIL_REGEX = re.compile(r"^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}$", re.IGNORECASE)
PASSWORD_REGEX = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9])(?=.*[@$!%*?&])[A-Za-z0-9@$!%*?&]"
)
NAME_REGEX = re.compile(r"^[a-zA-Z\s]+$")
OTP_REGEX = re.compile(r"^[0-9]{6}$")

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 8
OTP_LENGTH = 6

VALIDATION_MESSAGES: Dict[str, Dict[str, str]] = {
    "email": {
        "required": "Email is required",
        "invalid": "Please provide a valid email address",
        "exists": "User already exists with this email",
    },
    "password": {
        "required": "Password is required",
        "min_length": "Password must be at least 8 characters",
        "pattern": "Password must contain uppercase, lowercase, number, and special character",
    },
    "name": {
        "required": "Name is required",
        "min_length": "Name must be at least 2 characters",
        "max_length": "Name must be less than 50 characters",
        "pattern": "Name can only contain letters and spaces",
    },
    "date_of_birth": {
        "required": "Date of birth is required",
        "invalid": "Please provide a valid date of birth",
        "future": "Date of birth cannot be in the future",
    },
    "otp": {
        "required": "OTP is required",
        "length": "OTP must be exactly 6 digits",
        "numeric": "OTP must contain only numbers",
    },
    "confirm_password": {
        "required": "Please confirm your password",
        "match": "Passwords do not match",
    },
    "terms": {
        "required": "You must agree to the terms and conditions",
    },
}


def validate_email(email: str) -> bool:
    return bool(EMAIL_REGEX.fullmatch(email))


def validate_password(password: str) -> bool:
    return len(password) >= PASSWORD_MIN_LENGTH and bool(PASSWORD_REGEX.match(password))


def validate_name(name: str) -> bool:
    return (
        NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH
        and bool(NAME_REGEX.fullmatch(name))
    )


def validate_otp(otp: str) -> bool:
    return len(otp) == OTP_LENGTH and bool(OTP_REGEX.fullmatch(otp))


def validate_password_match(password: str, confirm_password: str) -> bool:
    return password == confirm_password


def parse_date_of_birth(value: str) -> Optional[date]:
    """
    Parse an ISO calendar date (``YYYY-MM-DD``, optionally with a time part).

    Returns:
        The parsed date, or ``None`` when the value is not a real date.
    """
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def sanitize_otp(value: Optional[str]) -> str:
    """Drop every non-digit character and cap the code at six digits."""
    return re.sub(r"[^0-9]", "", value or "")[:OTP_LENGTH]


# --------------------------------------------------
# Form-level rules
# --------------------------------------------------


def email_error(value: Optional[str]) -> Optional[str]:
    messages = VALIDATION_MESSAGES["email"]
    if not value:
        return messages["required"]
    if not validate_email(value):
        return messages["invalid"]
    return None


def password_error(value: Optional[str]) -> Optional[str]:
    messages = VALIDATION_MESSAGES["password"]
    if not value:
        return messages["required"]
    if len(value) < PASSWORD_MIN_LENGTH:
        return messages["min_length"]
    if not PASSWORD_REGEX.match(value):
        return messages["pattern"]
    return None


def name_error(value: Optional[str]) -> Optional[str]:
    messages = VALIDATION_MESSAGES["name"]
    if not value:
        return messages["required"]
    if len(value) < NAME_MIN_LENGTH:
        return messages["min_length"]
    if len(value) > NAME_MAX_LENGTH:
        return messages["max_length"]
    if not NAME_REGEX.fullmatch(value):
        return messages["pattern"]
    return None


def date_of_birth_error(
    value: Optional[str],
    *,
    today: Optional[date] = None,
) -> Optional[str]:
    """
    Optional field: empty passes, otherwise it must be a real, non-future date.
    """
    if not value:
        return None

    messages = VALIDATION_MESSAGES["date_of_birth"]
    parsed = parse_date_of_birth(value)
    if parsed is None:
        return messages["invalid"]
    if parsed > (today or date.today()):
        return messages["future"]
    return None


def otp_error(value: Optional[str]) -> Optional[str]:
    messages = VALIDATION_MESSAGES["otp"]
    if not value:
        return messages["required"]
    if len(value) != OTP_LENGTH:
        return messages["length"]
    if not validate_otp(value):
        return messages["numeric"]
    return None


def terms_error(accepted: bool) -> Optional[str]:
    if not accepted:
        return VALIDATION_MESSAGES["terms"]["required"]
    return None


FORM_RULES: Dict[str, Callable[[Optional[str]], Optional[str]]] = {
    "email": email_error,
    "password": password_error,
    "name": name_error,
    "date_of_birth": date_of_birth_error,
    "otp": otp_error,
}
