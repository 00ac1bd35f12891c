"""
SMTP transport provider.

Builds one MailTransport from the EMAIL_* settings on first use and reuses it
for every send in the process. Each send opens its own short SMTP session via
aiosmtplib, so the cached handle holds configuration only and there is
nothing to reconnect when a server drops an idle connection.

Public API:
  get_transport() -> MailTransport
  reset_transport() -> None
  wait_for_self_check() -> None
"""

import asyncio
import logging
import threading
from email.message import EmailMessage
from typing import Any, Optional

import aiosmtplib

from jidi_api.config import MailSettings, load_mail_settings

logger = logging.getLogger(__name__)


class MailTransport:
    """Thin async wrapper around aiosmtplib bound to one set of settings."""

    def __init__(self, settings: MailSettings):
        self.settings = settings

    def _connection_kwargs(self) -> dict[str, Any]:
        s = self.settings
        return {
            "hostname": s.host,
            "port": s.port,
            "username": s.user if s.password else None,
            "password": s.password,
            # Implicit TLS (465) and STARTTLS are mutually exclusive; None lets
            # aiosmtplib upgrade when the server advertises STARTTLS.
            "use_tls": s.secure,
            "start_tls": False if s.secure else None,
            "timeout": s.timeout,
        }

    async def send(self, message: EmailMessage) -> None:
        """Send one message. Library errors propagate unchanged."""
        await aiosmtplib.send(message, **self._connection_kwargs())

    async def verify(self) -> None:
        """Connect, authenticate if configured, and disconnect."""
        smtp = aiosmtplib.SMTP(**self._connection_kwargs())
        await smtp.connect()
        try:
            await smtp.noop()
        finally:
            await smtp.quit()


# ---------------------------------------------------------------------------
# Process-wide cached handle
# ---------------------------------------------------------------------------

_transport: Optional[MailTransport] = None
_transport_lock = threading.Lock()

# Strong references so pending self-check tasks are not garbage collected.
_background_tasks: set[asyncio.Task] = set()


def get_transport() -> MailTransport:
    """
    Return the cached MailTransport, building it on first call.

    Construction runs under a lock so concurrent cold starts share a single
    handle. Outside production a one-off asynchronous self-check is scheduled
    on the running event loop; its failure is only logged.

    Raises:
        ConfigurationError: EMAIL_* settings are missing or malformed.
    """
    global _transport
    transport = _transport
    if transport is not None:
        return transport

    with _transport_lock:
        if _transport is None:
            settings = load_mail_settings()
            _transport = MailTransport(settings)
            logger.info(
                "SMTP transport created for %s:%s (secure=%s)",
                settings.host,
                settings.port,
                settings.secure,
            )
            if not settings.is_production:
                _schedule_self_check(_transport)
        return _transport


def reset_transport() -> None:
    """Drop the cached handle so the next get_transport() rebuilds it."""
    global _transport
    with _transport_lock:
        _transport = None


def _schedule_self_check(transport: MailTransport) -> None:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        logger.debug("No running event loop; skipping SMTP self-check")
        return
    task = loop.create_task(_self_check(transport))
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)


async def _self_check(transport: MailTransport) -> None:
    try:
        await transport.verify()
    except Exception as exc:
        logger.warning("SMTP connection failed: %s", exc)
        return
    logger.info("SMTP connection verified")


async def wait_for_self_check() -> None:
    """Await any scheduled self-check. For short-lived callers such as dev scripts."""
    pending = list(_background_tasks)
    if pending:
        await asyncio.gather(*pending)
