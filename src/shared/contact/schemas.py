"""Pydantic schemas for the contact form API."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from typing import Optional


REQUIRED_FIELDS = ("firstName", "lastName", "email", "phone", "zipCode", "caseType")


class SubmissionRequest(BaseModel):
    """
    Schema for a contact form submission.

    Every field is optional at parse time so that the anti-abuse checks can
    run before required-field validation. Values must be JSON strings; null is
    treated as an empty string.
    """
    model_config = ConfigDict(extra="ignore")

    firstName: StrictStr = ""
    lastName: StrictStr = ""
    email: StrictStr = ""
    phone: StrictStr = ""
    zipCode: StrictStr = ""
    caseType: StrictStr = ""
    description: Optional[StrictStr] = None
    captchaToken: Optional[StrictStr] = None
    website: Optional[StrictStr] = Field(default=None, description="Honeypot, hidden from people")

    @field_validator("firstName", "lastName", "email", "phone", "zipCode", "caseType", mode="before")
    @classmethod
    def null_to_empty(cls, v):
        return "" if v is None else v

    def stripped(self) -> "SubmissionRequest":
        """Return a copy with surrounding whitespace removed from every field."""
        values = {
            name: value.strip() if isinstance(value, str) else value
            for name, value in self.model_dump().items()
        }
        return SubmissionRequest(**values)


class ContactResponse(BaseModel):
    """Schema for contact form response."""
    success: bool
    message: str
