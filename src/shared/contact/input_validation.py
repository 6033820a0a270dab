"""
Field validation and sanitization for contact form submissions.
All validators are total: they never raise, they only return a bool.
"""

import re
import html


# Maximum lengths per submitted field
FIELD_MAX_LENGTHS = {
    "firstName": 50,
    "lastName": 50,
    "email": 100,
    "phone": 20,
    "zipCode": 10,
    "caseType": 100,
    "description": 1200,
}

MIN_PHONE_DIGITS = 10

_EMAIL_RE = re.compile(r'[^\s@]+@[^\s@]+\.[^\s@]+')
_ZIP_CODE_RE = re.compile(r'[0-9]{5}(-[0-9]{4})?')
_NON_DIGIT_RE = re.compile(r'[^0-9]')


def is_valid_email(value) -> bool:
    """Check for a local@domain.tld shape with a single "@"."""
    if not isinstance(value, str):
        return False
    return bool(_EMAIL_RE.fullmatch(value))


def is_valid_phone(value) -> bool:
    """
    Check that a phone number has at least 10 digits.
    Formatting characters such as spaces, dashes and parentheses are ignored.
    """
    if not isinstance(value, str):
        return False
    digits = _NON_DIGIT_RE.sub("", value)
    return len(digits) >= MIN_PHONE_DIGITS


def is_valid_zip_code(value) -> bool:
    """Check for a US ZIP code: 12345 or 12345-6789."""
    if not isinstance(value, str):
        return False
    return bool(_ZIP_CODE_RE.fullmatch(value))


def sanitize_text(text: str) -> str:
    """Strip and HTML-escape user text before it is placed in an HTML email."""
    if not text:
        return ""
    return html.escape(text.strip())
