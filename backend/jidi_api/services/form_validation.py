"""
Field validation for the website forms.

Both validators take the decoded JSON body and return a request model or
raise ValidationError with a message that is safe to show to the visitor.
Non-string values are treated the same as missing ones.
"""

from typing import Any

from jidi_api.errors import ValidationError
from jidi_api.models.email import ContactRequest, SignupRequest

CONTACT_FIELDS_REQUIRED = "Full name, email, and message are all required"
EMAIL_INVALID = "Valid email address is required"


def _text(payload: dict, key: str) -> str:
    value: Any = payload.get(key)
    if not isinstance(value, str):
        return ""
    return value


def _is_email(value: str) -> bool:
    return "@" in value


def validate_contact(payload: dict) -> ContactRequest:
    full_name = _text(payload, "fullName")
    email = _text(payload, "email")
    message = _text(payload, "message")

    if not full_name or not email or not message:
        raise ValidationError(CONTACT_FIELDS_REQUIRED)
    if not _is_email(email):
        raise ValidationError(EMAIL_INVALID, field="email")

    return ContactRequest(fullName=full_name, email=email, message=message)


def validate_signup(payload: dict) -> SignupRequest:
    email = _text(payload, "email")
    if not email or not _is_email(email):
        raise ValidationError(EMAIL_INVALID, field="email")

    # An optional note that is not a string is dropped rather than rejected.
    message = _text(payload, "message") or None
    return SignupRequest(email=email, message=message)
