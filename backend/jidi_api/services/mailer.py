"""
Send operations for the website forms.

Each operation acquires the shared transport, composes one message and makes
exactly one send attempt. There is no retry: a failed attempt is logged and
re-raised as SendFailure with the library error chained. ConfigurationError
from the transport provider propagates unchanged.

process_signup() combines the mandatory operator notification with the
best-effort welcome mail and reports both results as a SignupOutcome.
"""

import logging
from typing import Callable, Optional

from jidi_api.config import MailSettings
from jidi_api.errors import ConfigurationError, SendFailure
from jidi_api.models.email import ComposedMessage, DeliveryOutcome, SignupOutcome
from jidi_api.services.mail_templates import (
    compose_contact_notification,
    compose_signup_confirmation,
    compose_signup_notification,
)
from jidi_api.services.mail_transport import get_transport

logger = logging.getLogger(__name__)

DEFAULT_SIGNUP_MESSAGE = "User signed up for updates"


async def _deliver(kind: str, compose: Callable[[MailSettings], ComposedMessage]) -> None:
    """
    Compose and send one message. Anything that goes wrong after the transport
    is acquired, including header encoding, becomes SendFailure.
    """
    transport = get_transport()
    try:
        composed = compose(transport.settings)
        await transport.send(composed.to_email_message())
    except Exception as exc:
        logger.error("Error sending %s email: %s", kind, exc)
        raise SendFailure(f"{kind} email could not be sent") from exc


async def send_signup_notification(email: str, message: Optional[str] = None) -> None:
    """Tell the operator that ``email`` signed up."""
    await _deliver(
        "signup notification",
        lambda config: compose_signup_notification(email, message, config=config),
    )
    logger.info("Signup notification sent for %s", email)


async def send_contact_notification(full_name: str, email: str, message: str) -> None:
    """Forward a contact form message to the operator."""
    await _deliver(
        "contact notification",
        lambda config: compose_contact_notification(full_name, email, message, config=config),
    )
    logger.info("Contact form email received from %s", email)


async def send_signup_confirmation(email: str) -> None:
    """Send the welcome mail to a new subscriber."""
    await _deliver(
        "signup confirmation",
        lambda config: compose_signup_confirmation(email, config=config),
    )
    logger.info("Confirmation email sent to %s", email)


async def process_signup(email: str, message: Optional[str] = None) -> SignupOutcome:
    """
    Run the two-step signup flow.

    Step 1, the operator notification, is mandatory: its SendFailure (or a
    ConfigurationError) propagates and step 2 is never attempted.

    Step 2, the welcome mail, is best effort: a failure is logged as a
    warning and recorded on ``outcome.confirmation``.
    """
    await send_signup_notification(email, message or DEFAULT_SIGNUP_MESSAGE)
    notification = DeliveryOutcome(delivered=True)

    try:
        await send_signup_confirmation(email)
        confirmation = DeliveryOutcome(delivered=True)
    except (SendFailure, ConfigurationError) as exc:
        logger.warning("Confirmation email failed, but signup was successful: %s", exc)
        confirmation = DeliveryOutcome(delivered=False, error=str(exc))

    return SignupOutcome(notification=notification, confirmation=confirmation)
