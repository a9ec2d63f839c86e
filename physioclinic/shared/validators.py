"""Shared validation utilities"""

import re
from typing import Optional

EMAIL_RE = re.compile(r"[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}")


def validate_required_text(value: Optional[str], field_name: str) -> str:
    """
    Ensure a mandatory free-text field is present and not blank.

    Returns:
        The stripped value

    Raises:
        ValueError: If the value is missing or blank
    """
    if value is None or not str(value).strip():
        raise ValueError(f"{field_name} is required")
    return str(value).strip()


def validate_br_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a Brazilian phone number.

    Accepts landlines (10 digits) and mobiles (11 digits), with or without the
    +55 country code and any punctuation.

    Args:
        phone: Phone number string in various formats

    Returns:
        Display format "(DD) NNNNN-NNNN" or "(DD) NNNN-NNNN"

    Raises:
        ValueError: If phone number is invalid
    """
    if not phone:
        return phone

    # Remove all non-digit characters
    digits = re.sub(r"\D", "", phone)

    # Handle +55 prefix
    if digits.startswith("55") and len(digits) in (12, 13):
        digits = digits[2:]

    if len(digits) not in (10, 11):
        raise ValueError("Phone number must have 10 or 11 digits including area code")

    area, number = digits[:2], digits[2:]
    return f"({area}) {number[:-4]}-{number[-4:]}"


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Normalize a patient e-mail to lowercase and check its shape.

    Raises:
        ValueError: If the address is not of the form local@domain.tld
    """
    if not email:
        return email

    normalized = email.strip().lower()
    if not EMAIL_RE.fullmatch(normalized):
        raise ValueError(f"Invalid email: {email!r}")
    return normalized
