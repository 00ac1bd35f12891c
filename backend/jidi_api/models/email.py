"""
Pydantic models for the contact and signup flows.

Models:
  ContactRequest    — validated body of POST /contact
  SignupRequest     — validated body of POST /email-signup
  ComposedMessage   — a rendered email ready for the transport
  DeliveryOutcome   — result of one send attempt
  SignupOutcome     — mandatory notification + best-effort confirmation
  SuccessResponse / ErrorResponse — endpoint response bodies
"""

from email.message import EmailMessage
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------

class ContactRequest(BaseModel):
    """Contact form submission. JSON uses the frontend's camelCase key ``fullName``."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    full_name: str = Field(alias="fullName")
    email: str
    message: str


class SignupRequest(BaseModel):
    """Newsletter signup. ``message`` is an optional note from the visitor."""
    model_config = ConfigDict(extra="ignore")

    email: str
    message: Optional[str] = None


# ---------------------------------------------------------------------------
# Outgoing mail
# ---------------------------------------------------------------------------

class ComposedMessage(BaseModel):
    """
    Fully rendered email. ``sender`` and ``to`` are RFC 5322 address strings,
    e.g. ``"Ada Lovelace" <ada@example.com>``.
    """
    sender: str
    to: str
    subject: str
    html: str
    text: Optional[str] = None

    def to_email_message(self) -> EmailMessage:
        """Convert to a stdlib EmailMessage (HTML body, optional text part)."""
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = self.to
        msg["Subject"] = self.subject
        if self.text:
            msg.set_content(self.text)
            if self.html:
                msg.add_alternative(self.html, subtype="html")
        else:
            msg.set_content(self.html, subtype="html")
        return msg


class DeliveryOutcome(BaseModel):
    delivered: bool
    error: Optional[str] = None


class SignupOutcome(BaseModel):
    """
    Two-step signup result. ``notification`` is always delivered when an
    outcome exists (a failed notification raises instead); ``confirmation``
    may carry an error without affecting the response.
    """
    notification: DeliveryOutcome
    confirmation: DeliveryOutcome


# ---------------------------------------------------------------------------
# Response bodies
# ---------------------------------------------------------------------------

class SuccessResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    error: str
