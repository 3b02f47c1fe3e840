from datetime import date, timedelta

import pytest

from highway_notes.utils import validation
from highway_notes.utils.validation import (
    VALIDATION_MESSAGES,
    date_of_birth_error,
    email_error,
    name_error,
    otp_error,
    sanitize_otp,
    validate_email,
    validate_name,
    validate_otp,
    validate_password,
    validate_password_match,
)


@pytest.mark.parametrize(
    "email",
    ["jane@example.com", "JANE.DOE+notes@Mail.Example.ORG", "a_b%c-d@sub-domain.io"],
)
def test_valid_emails_accepted(email):
    assert validate_email(email) is True


@pytest.mark.parametrize(
    "email",
    ["jane.example.com", "jane@example", "jane@example.c", "@example.com", "", "jane@example.com\n"],
)
def test_emails_without_at_or_dotted_suffix_rejected(email):
    assert validate_email(email) is False


@pytest.mark.parametrize("password", ["", "Ab1!", "Abc12!x", "aB3$aB3"])
def test_short_passwords_rejected_whatever_the_content(password):
    assert validate_password(password) is False


def test_password_needs_every_character_class():
    assert validate_password("Abcdef1!") is True
    assert validate_password("abcdef1!") is False
    assert validate_password("ABCDEF1!") is False
    assert validate_password("Abcdefg!") is False
    assert validate_password("Abcdefg1") is False


def test_password_digit_must_be_ascii():
    # Arabic-Indic digit one
    assert validate_password("Abcdefg١!") is False


def test_name_length_and_alphabet():
    assert validate_name("Jane Doe") is True
    assert validate_name("J") is False
    assert validate_name("J" * 51) is False
    assert validate_name("J" * 50) is True
    assert validate_name("Jane2") is False


@pytest.mark.parametrize("otp", ["000000", "123456", "987654"])
def test_six_digit_codes_accepted(otp):
    assert validate_otp(otp) is True


@pytest.mark.parametrize("otp", ["12a456", "12345", "1234567", "", "12 456", "١٢٣٤٥٦"])
def test_other_codes_rejected(otp):
    assert validate_otp(otp) is False


def test_password_match():
    assert validate_password_match("Secret1!", "Secret1!") is True
    assert validate_password_match("Secret1!", "secret1!") is False


def test_date_of_birth_is_optional():
    assert date_of_birth_error("") is None
    assert date_of_birth_error(None) is None


def test_date_of_birth_rejects_unparseable_and_future_dates():
    today = date(2024, 5, 10)

    assert date_of_birth_error("not-a-date", today=today) == VALIDATION_MESSAGES["date_of_birth"]["invalid"]
    assert date_of_birth_error("2023-02-30", today=today) == VALIDATION_MESSAGES["date_of_birth"]["invalid"]
    assert date_of_birth_error("2024-05-11", today=today) == VALIDATION_MESSAGES["date_of_birth"]["future"]
    assert date_of_birth_error("2024-05-10", today=today) is None
    assert date_of_birth_error("1990-01-31", today=today) is None


def test_date_of_birth_defaults_to_current_day():
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    assert date_of_birth_error(tomorrow) == VALIDATION_MESSAGES["date_of_birth"]["future"]


def test_form_rules_report_reason_specific_messages():
    assert email_error("") == "Email is required"
    assert email_error("nope") == "Please provide a valid email address"
    assert email_error("jane@example.com") is None

    assert name_error("") == "Name is required"
    assert name_error("J") == "Name must be at least 2 characters"
    assert name_error("J" * 51) == "Name must be less than 50 characters"
    assert name_error("Jane!") == "Name can only contain letters and spaces"

    assert otp_error("") == "OTP is required"
    assert otp_error("123") == "OTP must be exactly 6 digits"
    assert otp_error("12a456") == "OTP must contain only numbers"
    assert otp_error("123456") is None


def test_password_form_rule():
    assert validation.password_error("") == "Password is required"
    assert validation.password_error("Ab1!") == "Password must be at least 8 characters"
    assert validation.password_error("abcdefgh") == (
        "Password must contain uppercase, lowercase, number, and special character"
    )
    assert validation.password_error("Abcdef1!") is None


def test_sanitize_otp_keeps_digits_only():
    assert sanitize_otp("12a4-56") == "12456"
    assert sanitize_otp(" 1 2 3 4 5 6 7") == "123456"
    assert sanitize_otp(None) == ""
