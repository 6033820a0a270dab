"""Email rendering and delivery for contact form submissions."""

import smtplib
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from email.errors import MessageError
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import List, Optional

from src.shared.contact.errors import EmailConfigurationError, EmailDispatchError
from src.shared.contact.input_validation import sanitize_text


@dataclass
class EmailMessage:
    sender_address: str
    subject: str
    plain_text: str
    html: str
    recipients: List[str] = field(default_factory=list)
    reply_to: Optional[str] = None


class EmailDispatcher(ABC):
    @abstractmethod
    def send(self, message: EmailMessage) -> None:
        """Deliver message, raising EmailDispatchError on failure."""


class SmtpEmailDispatcher(EmailDispatcher):
    """Sends messages through an SMTP relay using STARTTLS."""

    def __init__(self, host: str, port: int, user: Optional[str], password: Optional[str]):
        self.host = host
        self.port = port
        self.user = user
        self.password = password

    def send(self, message: EmailMessage) -> None:
        if not self.user or not self.password:
            logging.error("SMTP credentials not configured")
            raise EmailConfigurationError("SMTP credentials not configured")
        if not message.recipients:
            logging.error("No recipients configured for contact form email")
            raise EmailConfigurationError("No recipients configured")

        try:
            msg = MIMEMultipart('alternative')
            msg['From'] = message.sender_address
            msg['To'] = ", ".join(message.recipients)
            msg['Subject'] = message.subject
            if message.reply_to:
                msg['Reply-To'] = message.reply_to

            msg.attach(MIMEText(message.plain_text, 'plain'))
            msg.attach(MIMEText(message.html, 'html'))

            with smtplib.SMTP(self.host, self.port) as server:
                server.starttls()  # Enable encryption
                server.login(self.user, self.password)
                server.send_message(msg)
        except (smtplib.SMTPException, MessageError, OSError) as e:
            raise EmailDispatchError(f"SMTP delivery failed: {str(e)}") from e

        logging.info(f"Email '{message.subject}' sent to {len(message.recipients)} recipient(s)")


def single_line(text: str) -> str:
    """Collapse all whitespace, including CR/LF, so user text is safe in a header."""
    return " ".join((text or "").split())


def render_notification(submission, sender_address: str, recipients: List[str]) -> EmailMessage:
    """Build the email that tells the firm about a new inquiry."""
    description = submission.description.strip() if submission.description else ""

    plain_text = (
        "New Contact Form Submission\n"
        f"Case Type: {submission.caseType}\n"
        f"Name: {submission.firstName} {submission.lastName}\n"
        f"Email: {submission.email}\n"
        f"Phone: {submission.phone}\n"
        f"Zip Code: {submission.zipCode}"
    )
    if description:
        plain_text += f"\nDescription: {description}"

    description_html = ""
    if description:
        description_html = f"<p><strong>Description:</strong><br>{sanitize_text(description)}</p>"

    html_body = f"""
<h2>New Contact Form Submission</h2>
<p><strong>Case Type:</strong> {sanitize_text(submission.caseType)}</p>
<p><strong>Name:</strong> {sanitize_text(submission.firstName)} {sanitize_text(submission.lastName)}</p>
<p><strong>Email:</strong> {sanitize_text(submission.email)}</p>
<p><strong>Phone:</strong> {sanitize_text(submission.phone)}</p>
<p><strong>Zip Code:</strong> {sanitize_text(submission.zipCode)}</p>
{description_html}
"""

    return EmailMessage(
        sender_address=sender_address,
        subject=f"New Contact Form - {single_line(submission.caseType)} Case",
        plain_text=plain_text,
        html=html_body,
        recipients=list(recipients),
        reply_to=submission.email,
    )


def render_auto_reply(submission, sender_address: str, firm_name: str, firm_phone: str) -> EmailMessage:
    """Build the thank-you email sent back to the person who submitted the form."""
    name = f"{submission.firstName} {submission.lastName}"
    phone_digits = "".join(char for char in firm_phone if char.isdigit())
    tel_number = f"+1{phone_digits}" if len(phone_digits) == 10 else f"+{phone_digits}"

    plain_text = f"""Thank you for contacting {firm_name}

Dear {name},

We have received your inquiry regarding your {submission.caseType} case. One of our attorneys will review your information and contact you shortly.

If you need immediate assistance, please call us at {firm_phone}.

Best regards,
{firm_name} Team
"""

    html_body = f"""
<h2>Thank you for contacting {firm_name}</h2>
<p>Dear {sanitize_text(name)},</p>
<p>We have received your inquiry regarding your {sanitize_text(submission.caseType)} case. One of our attorneys will review your information and contact you shortly.</p>
<p>If you need immediate assistance, please call us at <a href="tel:{tel_number}">{firm_phone}</a>.</p>
<p>Best regards,<br>{firm_name} Team</p>
"""

    return EmailMessage(
        sender_address=sender_address,
        subject=f"Thank you for contacting {firm_name}",
        plain_text=plain_text,
        html=html_body,
        recipients=[submission.email],
    )
