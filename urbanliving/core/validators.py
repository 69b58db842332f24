"""
Input Validation and Sanitization

Reusable checks applied by the Pydantic schemas. Client-side validation in
the dashboard and lead form is a convenience only; these run on every
request.
"""

import re
from typing import Optional

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")


def validate_email(email: str) -> str:
    """
    Validate email address format.

    Perfect email validation is complex (RFC 5322); a basic format check
    catches typos in the lead form, which is all we need here.

    Args:
        email: Email address to validate

    Returns:
        str: Validated and normalized (trimmed, lowercased) email

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        raise ValueError("Email cannot be empty")

    email = email.strip().lower()

    # RFC 5321 limit
    if len(email) > 254:
        raise ValueError("Email too long (max 254 characters)")

    if not EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email format")

    return email


def validate_hex_color(color: Optional[str]) -> Optional[str]:
    """Accept ``#rgb`` / ``#rrggbb`` colors for branding."""
    if color is None:
        return None
    color = color.strip()
    if not HEX_COLOR_PATTERN.match(color):
        raise ValueError("Color must be a hex value like #2563eb")
    return color.lower()


def strip_text(value: Optional[str]) -> Optional[str]:
    """Trim surrounding whitespace; blank strings become None."""
    if value is None:
        return None
    value = value.strip()
    return value or None
