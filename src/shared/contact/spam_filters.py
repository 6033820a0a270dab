"""
Heuristic bot and spam filters for contact form submissions.

These are simple regex/ratio checks. The thresholds below decide which
submissions are accepted, so changing them changes acceptance behavior.
"""

import re
from typing import Iterable, Optional


VOWELS = set("aeiou")
MAX_CONSONANT_RATIO = 0.8
MIN_GIBBERISH_LENGTH = 2

# Addresses that are rejected outright
BLOCKED_EMAILS = frozenset({
    "test@test.com",
    "spam@spam.com",
    "noreply@example.com",
})

_CONSONANT_RE = re.compile(r'[b-df-hj-np-tv-z]', re.IGNORECASE)
_REPEATED_CHAR_RE = re.compile(r'(.)\1{2,}')

_URL_PATTERNS = [
    r'[a-z][a-z0-9+.-]*://',
    r'\bwww\.',
    r'\b[a-z0-9-]+\.(?:com|net|org|info|biz|io|co|us|ru|cn|xyz|top|online|site|club|shop|app|dev|me|ly)\b',
]
_URL_RE = re.compile("|".join(_URL_PATTERNS), re.IGNORECASE)


def is_gibberish(text: Optional[str]) -> bool:
    """
    Detect keyboard-mash names such as "xkcdqz" or "Jjjohn".

    Text shorter than 2 characters is too short to judge and is never
    flagged. Otherwise the text is gibberish if it has no vowels, if more
    than 80% of its characters are consonants, or if any character repeats
    3 or more times in a row.
    """
    if not text or len(text) < MIN_GIBBERISH_LENGTH:
        return False

    lowered = text.lower()
    if not any(char in VOWELS for char in lowered):
        return True

    consonants = len(_CONSONANT_RE.findall(text))
    if consonants / len(text) > MAX_CONSONANT_RATIO:
        return True

    return bool(_REPEATED_CHAR_RE.search(lowered))


def contains_urls(text: Optional[str]) -> bool:
    """Detect links: a scheme, a "www." prefix or a bare domain name."""
    if not text:
        return False
    return bool(_URL_RE.search(text))


def is_honeypot_filled(value: Optional[str]) -> bool:
    """The honeypot field is hidden from people, so any content means a bot."""
    return bool(value and value.strip())


def is_blocked_email(email: Optional[str], blocklist: Iterable[str] = BLOCKED_EMAILS) -> bool:
    """Case-insensitive exact match against the deny-list."""
    if not email:
        return False
    normalized = email.strip().lower()
    return any(normalized == blocked.strip().lower() for blocked in blocklist)
