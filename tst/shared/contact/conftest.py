"""Shared fakes and fixtures for the contact form tests."""

import json

import pytest

from src.shared.contact.captcha import CaptchaResult, CaptchaVerifier
from src.shared.contact.config import ContactSettings
from src.shared.contact.email_dispatch import EmailDispatcher
from src.shared.contact.handler import ContactFormHandler
from src.shared.contact.rate_limit import RateLimiter


RECIPIENTS = ["intake@firm.example", "web@firm.example"]


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class RecordingDispatcher(EmailDispatcher):
    """
    Records every message. When error is set it is raised on every send,
    or only on the fail_on-th send if fail_on is set.
    """

    def __init__(self):
        self.sent = []
        self.error = None
        self.fail_on = None

    def send(self, message) -> None:
        self.sent.append(message)
        if self.error is not None and self.fail_on in (None, len(self.sent)):
            raise self.error


class StubVerifier(CaptchaVerifier):
    def __init__(self):
        self.result = CaptchaResult(success=True, score=0.9)
        self.tokens = []

    def verify(self, token: str) -> CaptchaResult:
        self.tokens.append(token)
        return self.result


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def verifier():
    return StubVerifier()


@pytest.fixture
def recipients():
    return list(RECIPIENTS)


@pytest.fixture
def settings(recipients):
    return ContactSettings(
        recipient_addresses=recipients,
        sender_address="donotreply@firm.example",
        recaptcha_secret="test-secret",
        blocked_emails=["blocked@spammer.example"],
    )


@pytest.fixture
def handler(settings, clock, verifier, dispatcher):
    return ContactFormHandler(
        settings=settings,
        rate_limiter=RateLimiter(clock=clock),
        captcha_verifier=verifier,
        email_dispatcher=dispatcher,
    )


@pytest.fixture
def valid_form():
    return {
        "firstName": "John",
        "lastName": "Smith",
        "email": "john.smith@gmail.com",
        "phone": "(316) 684-4400",
        "zipCode": "67202",
        "caseType": "Personal Injury",
        "description": "I was injured in a car accident on the highway last week.",
    }


@pytest.fixture
def post(handler):
    """Submit a form dict through the handler as a JSON POST."""
    def _post(form, headers=None):
        return handler.handle("POST", json.dumps(form), headers or {"X-Forwarded-For": "203.0.113.7"})
    return _post
