"""Error types for the contact form pipeline."""

from typing import Optional


class ContactFormError(Exception):
    """Client-facing failure with an HTTP status and a stable error code."""
    status_code = 500
    code = "internal_error"
    message = "An error occurred while processing your request"

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        self.message = message or self.message
        self.field = field
        super().__init__(self.message)

    def to_dict(self) -> dict:
        content = {"error": self.code, "message": self.message}
        if self.field:
            content["field"] = self.field
        return content


class MethodNotAllowed(ContactFormError):
    status_code = 405
    code = "method_not_allowed"
    message = "Method not allowed"


class RequestMalformed(ContactFormError):
    status_code = 400
    code = "request_malformed"
    message = "Invalid JSON in request body"


class SpamDetected(ContactFormError):
    status_code = 400
    code = "spam_detected"
    message = "Submission rejected"


class InputRejected(ContactFormError):
    status_code = 400
    code = "input_rejected"
    message = "Submission rejected"


class RateLimited(ContactFormError):
    status_code = 429
    code = "rate_limited"
    message = "Too many submissions. Please wait before trying again."


class MissingField(ContactFormError):
    status_code = 400
    code = "missing_field"
    message = "All required fields must be filled out"

    def __init__(self, field: str, missing_fields: Optional[list] = None):
        super().__init__(f"{field} is required", field=field)
        self.missing_fields = missing_fields or [field]

    def to_dict(self) -> dict:
        content = super().to_dict()
        content["missingFields"] = self.missing_fields
        return content


class FieldTooLong(ContactFormError):
    status_code = 400
    code = "field_too_long"

    def __init__(self, field: str, max_length: int):
        super().__init__(f"{field} must be no more than {max_length} characters", field=field)


class FormatInvalid(ContactFormError):
    status_code = 400
    code = "format_invalid"

    def __init__(self, field: str):
        super().__init__(f"{field} has an invalid format", field=field)


class InvalidName(ContactFormError):
    status_code = 400
    code = "invalid_name"

    def __init__(self, field: str):
        super().__init__("Please enter a valid name", field=field)


class CaptchaFailed(ContactFormError):
    status_code = 400
    code = "captcha_failed"
    message = "Captcha verification failed"


class ServiceMisconfigured(ContactFormError):
    status_code = 500
    code = "service_misconfigured"
    message = "Service is not configured correctly"


class UpstreamSendFailed(ContactFormError):
    status_code = 500
    code = "upstream_send_failed"
    message = "Failed to send message. Please try again later."


class InternalError(ContactFormError):
    status_code = 500
    code = "internal_error"
    message = "An error occurred while processing your request"


class EmailDispatchError(Exception):
    """Raised by an email dispatcher when a message could not be delivered."""


class EmailConfigurationError(EmailDispatchError):
    """Raised when the email dispatcher is missing credentials or recipients."""
