"""
Error taxonomy for the website API.

ValidationError     — a request field is missing or malformed (HTTP 400).
ConfigurationError  — mail transport settings are absent or invalid (HTTP 500).
SendFailure         — the mail server rejected or never received a message (HTTP 500).
"""


class MailError(Exception):
    """Base class for mail-module failures."""


class ConfigurationError(MailError):
    """Raised when EMAIL_* environment settings are missing or malformed."""


class SendFailure(MailError):
    """Raised when a single send attempt fails. The library error is chained."""


class ValidationError(Exception):
    """
    Raised by request validation. ``str(exc)`` is safe to return to the
    caller verbatim.
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field
