"""
Unit tests for the send operations and the two-step signup flow.

The shared transport is replaced with a MailTransport whose ``send`` is an
AsyncMock, so composed EmailMessage objects can be inspected directly.
"""

from unittest.mock import AsyncMock, patch

import aiosmtplib
import pytest

from jidi_api.config import load_mail_settings
from jidi_api.errors import ConfigurationError, SendFailure
from jidi_api.services.mail_transport import MailTransport
from jidi_api.services.mailer import (
    process_signup,
    send_contact_notification,
    send_signup_confirmation,
    send_signup_notification,
)


def _fake_transport(side_effect=None) -> MailTransport:
    transport = MailTransport(load_mail_settings())
    transport.send = AsyncMock(side_effect=side_effect)
    return transport


def _sent(transport: MailTransport, index: int = 0):
    return transport.send.await_args_list[index].args[0]


class TestSendOperations:

    @pytest.mark.asyncio
    async def test_contact_notification_sent_once(self):
        transport = _fake_transport()
        with patch("jidi_api.services.mailer.get_transport", return_value=transport):
            await send_contact_notification("Ada", "ada@x.com", "hello")

        assert transport.send.await_count == 1
        msg = _sent(transport)
        assert msg["From"] == "Ada <ada@x.com>"
        assert msg["To"] == "info@jidi.test"
        assert msg["Subject"] == "New Contact Form Message from Ada"

    @pytest.mark.asyncio
    async def test_signup_notification_goes_to_operator(self):
        transport = _fake_transport()
        with patch("jidi_api.services.mailer.get_transport", return_value=transport):
            await send_signup_notification("ada@example.com", "hi")

        msg = _sent(transport)
        assert msg["To"] == "info@jidi.test"
        assert "ada@example.com" in msg.get_content()

    @pytest.mark.asyncio
    async def test_confirmation_goes_to_subscriber(self):
        transport = _fake_transport()
        with patch("jidi_api.services.mailer.get_transport", return_value=transport):
            await send_signup_confirmation("ada@example.com")

        assert _sent(transport)["To"] == "ada@example.com"

    @pytest.mark.asyncio
    async def test_library_error_wrapped_as_send_failure(self):
        error = aiosmtplib.SMTPException("mailbox unavailable")
        transport = _fake_transport(side_effect=error)

        with patch("jidi_api.services.mailer.get_transport", return_value=transport):
            with pytest.raises(SendFailure) as exc_info:
                await send_contact_notification("Ada", "ada@x.com", "hello")

        assert exc_info.value.__cause__ is error
        # No retry
        assert transport.send.await_count == 1

    @pytest.mark.asyncio
    async def test_unencodable_header_wrapped_as_send_failure(self):
        """A message that cannot be built is reported like a failed send."""
        transport = _fake_transport()

        with patch("jidi_api.services.mailer.get_transport", return_value=transport):
            with pytest.raises(SendFailure):
                await send_contact_notification("Ada", "ada\n@x.com", "hello")

        transport.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_configuration_error_propagates(self, mail_env):
        mail_env.delenv("EMAIL_HOST")
        with pytest.raises(ConfigurationError):
            await send_signup_confirmation("ada@example.com")


class TestProcessSignup:

    @pytest.mark.asyncio
    async def test_both_steps_delivered(self):
        transport = _fake_transport()
        with patch("jidi_api.services.mailer.get_transport", return_value=transport):
            outcome = await process_signup("ada@example.com")

        assert outcome.notification.delivered is True
        assert outcome.confirmation.delivered is True
        assert transport.send.await_count == 2
        # Notification first, then confirmation
        assert _sent(transport, 0)["To"] == "info@jidi.test"
        assert _sent(transport, 1)["To"] == "ada@example.com"

    @pytest.mark.asyncio
    async def test_default_message_used_when_absent(self):
        transport = _fake_transport()
        with patch("jidi_api.services.mailer.get_transport", return_value=transport):
            await process_signup("ada@example.com")

        assert "User signed up for updates" in _sent(transport, 0).get_content()

    @pytest.mark.asyncio
    async def test_notification_failure_skips_confirmation(self):
        transport = _fake_transport(side_effect=aiosmtplib.SMTPException("down"))

        with patch("jidi_api.services.mailer.get_transport", return_value=transport):
            with pytest.raises(SendFailure):
                await process_signup("ada@example.com")

        assert transport.send.await_count == 1

    @pytest.mark.asyncio
    async def test_confirmation_failure_recorded_not_raised(self, caplog):
        transport = _fake_transport(side_effect=[None, aiosmtplib.SMTPException("rejected")])

        with patch("jidi_api.services.mailer.get_transport", return_value=transport):
            outcome = await process_signup("ada@example.com")

        assert outcome.notification.delivered is True
        assert outcome.confirmation.delivered is False
        assert outcome.confirmation.error == "signup confirmation email could not be sent"
        assert "Confirmation email failed, but signup was successful" in caplog.text
