"""Shared validation utilities"""

import re
from typing import Optional

EMAIL_PATTERN = re.compile(r"^[\w.+-]+@[\w-]+(\.[\w-]+)+$")
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Returns:
        Lowercase, trimmed email address

    Raises:
        ValueError: If email format is invalid
    """
    if email is None:
        return email

    email = email.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Please provide a valid email")
    return email


def validate_indian_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate a 10 digit Indian mobile number (starts with 6-9).

    Accepts +91 / 0 prefixes and separators; returns the bare 10 digits.
    """
    if not phone:
        return phone

    digits = re.sub(r"\D", "", phone)
    if len(digits) == 12 and digits.startswith("91"):
        digits = digits[2:]
    elif len(digits) == 11 and digits.startswith("0"):
        digits = digits[1:]

    if not re.fullmatch(r"[6-9]\d{9}", digits):
        raise ValueError("Please enter a valid 10-digit phone number")
    return digits


def validate_pincode(pincode: str) -> str:
    pincode = (pincode or "").strip()
    if not re.fullmatch(r"\d{6}", pincode):
        raise ValueError("Please enter a valid 6-digit pincode")
    return pincode


def validate_time_of_day(value: Optional[str]) -> Optional[str]:
    """HH:MM, 24 hour clock"""
    if value is None:
        return value
    value = value.strip()
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM format")
    return value
