"""Contact form request pipeline."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from pydantic import ValidationError

from src.shared.contact.captcha import CaptchaVerifier, RecaptchaVerifier
from src.shared.contact.config import ContactSettings, get_settings
from src.shared.contact.email_dispatch import (
    EmailDispatcher,
    SmtpEmailDispatcher,
    render_auto_reply,
    render_notification,
)
from src.shared.contact.errors import (
    CaptchaFailed,
    ContactFormError,
    EmailConfigurationError,
    EmailDispatchError,
    FieldTooLong,
    FormatInvalid,
    InputRejected,
    InternalError,
    InvalidName,
    MethodNotAllowed,
    MissingField,
    RateLimited,
    RequestMalformed,
    ServiceMisconfigured,
    SpamDetected,
    UpstreamSendFailed,
)
from src.shared.contact.input_validation import (
    FIELD_MAX_LENGTHS,
    is_valid_email,
    is_valid_phone,
    is_valid_zip_code,
)
from src.shared.contact.rate_limit import RateLimiter, get_client_identifier
from src.shared.contact.schemas import REQUIRED_FIELDS, ContactResponse, SubmissionRequest
from src.shared.contact.spam_filters import (
    BLOCKED_EMAILS,
    contains_urls,
    is_blocked_email,
    is_gibberish,
    is_honeypot_filled,
)


CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

SUCCESS_MESSAGE = "Form submitted successfully"


@dataclass
class ContactFormResult:
    status_code: int
    content: Optional[dict] = None
    headers: dict = field(default_factory=lambda: dict(CORS_HEADERS))


class ContactFormHandler:
    """
    Validates a contact form submission and relays it by email.

    Steps run in a fixed order and the first failing step decides the
    response:
    method gate, body parsing, honeypot, blocklist, rate limit, required
    fields, field lengths, formats, gibberish names, links in the
    description, captcha (only when a token is sent), email dispatch.
    """

    def __init__(
        self,
        settings: Optional[ContactSettings] = None,
        rate_limiter: Optional[RateLimiter] = None,
        captcha_verifier: Optional[CaptchaVerifier] = None,
        email_dispatcher: Optional[EmailDispatcher] = None,
    ):
        self.settings = settings or get_settings()
        self.rate_limiter = rate_limiter or RateLimiter()
        self.captcha_verifier = captcha_verifier or RecaptchaVerifier(
            secret=self.settings.recaptcha_secret,
            verify_url=self.settings.recaptcha_verify_url,
        )
        self.email_dispatcher = email_dispatcher or SmtpEmailDispatcher(
            host=self.settings.smtp_host,
            port=self.settings.smtp_port,
            user=self.settings.smtp_user,
            password=self.settings.smtp_password,
        )
        self.blocklist = set(BLOCKED_EMAILS) | set(self.settings.blocked_emails)

    def handle(self, method: str, body, headers=None) -> ContactFormResult:
        """Run the pipeline for one request and build the HTTP response."""
        method = (method or "").upper()
        if method == "OPTIONS":
            return ContactFormResult(status_code=200)

        try:
            if method != "POST":
                raise MethodNotAllowed()
            self._process(body, headers or {})
        except ContactFormError as e:
            logging.info(f"Contact form rejected: {e.code} ({e.message})")
            return ContactFormResult(status_code=e.status_code, content=e.to_dict())
        except Exception as e:
            logging.error(f"Unexpected error processing contact form: {str(e)}", exc_info=True)
            error = InternalError()
            return ContactFormResult(status_code=error.status_code, content=error.to_dict())

        response = ContactResponse(success=True, message=SUCCESS_MESSAGE)
        return ContactFormResult(status_code=200, content=response.model_dump())

    def _process(self, body, headers) -> None:
        submission = self._parse(body)

        if is_honeypot_filled(submission.website):
            logging.warning("Contact form honeypot field was filled, rejecting as bot")
            raise SpamDetected()

        if is_blocked_email(submission.email, self.blocklist):
            logging.warning("Contact form submitted from a blocked email address")
            raise InputRejected()

        identifier = get_client_identifier({k.lower(): v for k, v in headers.items()})
        if not self.rate_limiter.allow(
            identifier,
            max_requests=self.settings.rate_limit_max_requests,
            window_ms=self.settings.rate_limit_window_ms,
        ):
            logging.warning(f"Contact form rate limit exceeded for {identifier}")
            raise RateLimited()

        submission = submission.stripped()
        self._check_required(submission)
        self._check_lengths(submission)
        self._check_formats(submission)

        for name in ("firstName", "lastName"):
            if is_gibberish(getattr(submission, name)):
                raise InvalidName(name)

        if contains_urls(submission.description):
            logging.warning("Contact form description contains links, rejecting as spam")
            raise SpamDetected()

        if submission.captchaToken:
            result = self.captcha_verifier.verify(submission.captchaToken)
            if not result.passed:
                raise CaptchaFailed()

        self._dispatch(submission)

    @staticmethod
    def _parse(body) -> SubmissionRequest:
        if not body:
            raise RequestMalformed()
        try:
            return SubmissionRequest.model_validate_json(body)
        except ValidationError as e:
            logging.info(f"Failed to parse contact form body: {e.error_count()} error(s)")
            raise RequestMalformed() from e

    @staticmethod
    def _check_required(submission: SubmissionRequest) -> None:
        missing = [name for name in REQUIRED_FIELDS if not getattr(submission, name)]
        if missing:
            raise MissingField(missing[0], missing_fields=missing)

    @staticmethod
    def _check_lengths(submission: SubmissionRequest) -> None:
        for name, max_length in FIELD_MAX_LENGTHS.items():
            value = getattr(submission, name) or ""
            if len(value) > max_length:
                raise FieldTooLong(name, max_length)

    @staticmethod
    def _check_formats(submission: SubmissionRequest) -> None:
        if not is_valid_email(submission.email):
            raise FormatInvalid("email")
        if not is_valid_phone(submission.phone):
            raise FormatInvalid("phone")
        if not is_valid_zip_code(submission.zipCode):
            raise FormatInvalid("zipCode")

    def _dispatch(self, submission: SubmissionRequest) -> None:
        notification = render_notification(
            submission,
            sender_address=self.settings.sender_address,
            recipients=self.settings.recipient_addresses,
        )
        try:
            self.email_dispatcher.send(notification)
        except EmailConfigurationError as e:
            logging.error(f"Email dispatcher is not configured: {str(e)}")
            raise ServiceMisconfigured() from e
        except EmailDispatchError as e:
            logging.error(f"Failed to send contact form notification: {str(e)}", exc_info=True)
            raise UpstreamSendFailed() from e

        logging.info("Contact form notification sent")

        if self.settings.auto_reply_enabled:
            self._send_auto_reply(submission)

    def _send_auto_reply(self, submission: SubmissionRequest) -> None:
        auto_reply = render_auto_reply(
            submission,
            sender_address=self.settings.sender_address,
            firm_name=self.settings.firm_name,
            firm_phone=self.settings.firm_phone,
        )
        try:
            self.email_dispatcher.send(auto_reply)
        except EmailDispatchError as e:
            # Auto-reply failures never fail the submission
            logging.error(f"Failed to send contact form auto-reply: {str(e)}", exc_info=True)
            return
        logging.info("Contact form auto-reply sent")
