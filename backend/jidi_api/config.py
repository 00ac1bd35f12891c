"""
Mail transport configuration.

Settings are read from the process environment (a local ``.env`` file is
loaded first when present).

Environment variables
---------------------
EMAIL_HOST              SMTP server hostname (required).
EMAIL_PORT              SMTP port (default: 587).
EMAIL_SECURE            "true" for implicit TLS (port 465), "false" otherwise.
EMAIL_USER              SMTP username; also the sender and operator address (required).
EMAIL_PASS              SMTP password. When empty, no login is attempted.
EMAIL_OPERATOR_ADDRESS  Where contact/signup notifications go (default: EMAIL_USER).
EMAIL_FROM_NAME         Display name on outgoing mail (default: "JIDI Institute").
EMAIL_TIMEOUT           SMTP timeout in seconds (default: 30).
APP_ENV                 "production" disables the startup SMTP self-check.
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from jidi_api.errors import ConfigurationError

load_dotenv()

DEFAULT_PORT = "587"
DEFAULT_FROM_NAME = "JIDI Institute"
DEFAULT_TIMEOUT = "30"


class MailSettings(BaseModel):
    """Resolved SMTP settings, read once when the transport is first built."""
    model_config = {"frozen": True}

    host: str
    port: int
    secure: bool = False
    user: str
    password: Optional[str] = None
    operator_address: str
    from_name: str = DEFAULT_FROM_NAME
    timeout: float = 30.0
    environment: str = "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in ("", "false"):
        return False
    if value == "true":
        return True
    raise ConfigurationError(f"{name} must be 'true' or 'false', got {raw!r}")


def _parse_number(name: str, raw: str, cast):
    try:
        return cast(raw.strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be numeric, got {raw!r}") from None


def load_mail_settings() -> MailSettings:
    """
    Build MailSettings from the environment.

    Raises:
        ConfigurationError: EMAIL_HOST or EMAIL_USER is missing, or a numeric
            / boolean value cannot be parsed.
    """
    host = os.getenv("EMAIL_HOST", "").strip()
    user = os.getenv("EMAIL_USER", "").strip()
    missing = [name for name, value in (("EMAIL_HOST", host), ("EMAIL_USER", user)) if not value]
    if missing:
        raise ConfigurationError(f"Missing required mail settings: {', '.join(missing)}")

    port = _parse_number("EMAIL_PORT", os.getenv("EMAIL_PORT") or DEFAULT_PORT, int)
    if not 0 < port < 65536:
        raise ConfigurationError(f"EMAIL_PORT out of range: {port}")

    return MailSettings(
        host=host,
        port=port,
        secure=_parse_bool("EMAIL_SECURE", os.getenv("EMAIL_SECURE", "")),
        user=user,
        password=os.getenv("EMAIL_PASS") or None,
        operator_address=os.getenv("EMAIL_OPERATOR_ADDRESS", "").strip() or user,
        from_name=os.getenv("EMAIL_FROM_NAME", "").strip() or DEFAULT_FROM_NAME,
        timeout=_parse_number("EMAIL_TIMEOUT", os.getenv("EMAIL_TIMEOUT") or DEFAULT_TIMEOUT, float),
        environment=os.getenv("APP_ENV", "development").strip().lower(),
    )
