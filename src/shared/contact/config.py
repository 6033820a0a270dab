"""Contact form configuration read from environment variables."""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from src.shared.contact.rate_limit import DEFAULT_MAX_REQUESTS, DEFAULT_WINDOW_MS

# Load environment variables from .env file (for local development)
load_dotenv()

RECAPTCHA_VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"


def _split_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _as_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ContactSettings:
    """
    Settings for the contact form endpoint.

    Secrets and credentials may be left unset: they are only checked when a
    request actually needs them (a captcha token arrives, an email is sent).
    """
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    sender_address: str = "donotreply@bullattorneys.com"
    recipient_addresses: List[str] = field(default_factory=list)
    recaptcha_secret: Optional[str] = None
    recaptcha_verify_url: str = RECAPTCHA_VERIFY_URL
    blocked_emails: List[str] = field(default_factory=list)
    rate_limit_max_requests: int = DEFAULT_MAX_REQUESTS
    rate_limit_window_ms: int = DEFAULT_WINDOW_MS
    auto_reply_enabled: bool = False
    firm_name: str = "Bull Attorneys"
    firm_phone: str = "(316) 684-4400"


def get_settings() -> ContactSettings:
    """Build settings from the current environment."""
    return ContactSettings(
        smtp_host=os.environ.get("SMTP_HOST", "smtp.gmail.com"),
        smtp_port=int(os.environ.get("SMTP_PORT", "587")),
        smtp_user=os.environ.get("SMTP_USER"),
        smtp_password=os.environ.get("SMTP_PASSWORD"),
        sender_address=os.environ.get("SENDER_EMAIL_ADDRESS", "donotreply@bullattorneys.com"),
        recipient_addresses=_split_list(os.environ.get("CONTACT_RECIPIENTS")),
        recaptcha_secret=os.environ.get("RECAPTCHA_SECRET_KEY") or None,
        recaptcha_verify_url=os.environ.get("RECAPTCHA_VERIFY_URL", RECAPTCHA_VERIFY_URL),
        blocked_emails=_split_list(os.environ.get("CONTACT_BLOCKED_EMAILS")),
        rate_limit_max_requests=int(os.environ.get("CONTACT_RATE_LIMIT_MAX_REQUESTS", str(DEFAULT_MAX_REQUESTS))),
        rate_limit_window_ms=int(os.environ.get("CONTACT_RATE_LIMIT_WINDOW_MS", str(DEFAULT_WINDOW_MS))),
        auto_reply_enabled=_as_bool(os.environ.get("CONTACT_AUTO_REPLY_ENABLED")),
        firm_name=os.environ.get("FIRM_NAME", "Bull Attorneys"),
        firm_phone=os.environ.get("FIRM_PHONE", "(316) 684-4400"),
    )
