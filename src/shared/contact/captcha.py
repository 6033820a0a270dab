"""Captcha token verification against the reCAPTCHA siteverify API."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import httpx

from src.shared.contact.config import RECAPTCHA_VERIFY_URL
from src.shared.contact.errors import ServiceMisconfigured


MIN_CAPTCHA_SCORE = 0.5


@dataclass
class CaptchaResult:
    success: bool
    score: float

    @property
    def passed(self) -> bool:
        return self.success and self.score >= MIN_CAPTCHA_SCORE


FAILED_RESULT = CaptchaResult(success=False, score=0.0)


class CaptchaVerifier(ABC):
    @abstractmethod
    def verify(self, token: str) -> CaptchaResult:
        """Check a client captcha token."""


class RecaptchaVerifier(CaptchaVerifier):
    """
    Verifies tokens with a single POST to the siteverify endpoint.

    Transport and parse failures never propagate: they are logged and
    reported as a failed verification.
    """

    def __init__(self, secret: Optional[str], verify_url: str = RECAPTCHA_VERIFY_URL,
                 client: Optional[httpx.Client] = None):
        self.secret = secret
        self.verify_url = verify_url
        self.client = client

    def verify(self, token: str) -> CaptchaResult:
        if not self.secret:
            logging.error("Captcha token received but RECAPTCHA_SECRET_KEY is not configured")
            raise ServiceMisconfigured()

        try:
            if self.client is not None:
                response = self.client.post(self.verify_url, data={"secret": self.secret, "response": token})
            else:
                with httpx.Client() as client:
                    response = client.post(self.verify_url, data={"secret": self.secret, "response": token})
            payload = response.json()
            result = CaptchaResult(
                success=payload.get("success") is True,
                score=float(payload.get("score", 0.0)),
            )
        except (httpx.HTTPError, ValueError, TypeError, AttributeError) as e:
            logging.error(f"Captcha verification request failed: {str(e)}", exc_info=True)
            return FAILED_RESULT

        logging.info(f"Captcha verification result: success={result.success}, score={result.score}")
        return result
