#!/usr/bin/env python3
"""
Dev helper: send a plain-text test email through the configured SMTP server.

Uses the same transport as the API (EMAIL_HOST, EMAIL_PORT, EMAIL_SECURE,
EMAIL_USER, EMAIL_PASS), so a successful run means the contact and signup
endpoints can deliver mail too.

Usage
-----
# Addresses from EMAIL_FROM / EMAIL_TO in the environment or .env
python scripts/send_test_email.py

# Explicit addresses
python scripts/send_test_email.py --from site@example.com --to me@example.com

Exit status is 0 on success and 1 on any configuration or send failure.
"""

import argparse
import asyncio
import logging
import os
import sys
import textwrap

from jidi_api.errors import ConfigurationError
from jidi_api.models.email import ComposedMessage
from jidi_api.services.mail_transport import get_transport, wait_for_self_check

DEFAULT_SUBJECT = "SMTP Test"
DEFAULT_BODY = "This is a test email from the JIDI backend setup."


async def send_test_email(sender: str, recipient: str, subject: str) -> None:
    transport = get_transport()
    message = ComposedMessage(
        sender=sender,
        to=recipient,
        subject=subject,
        html="",
        text=DEFAULT_BODY,
    )
    try:
        await transport.send(message.to_email_message())
    finally:
        # Let the startup SMTP check finish so its result is logged.
        await wait_for_self_check()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description=textwrap.dedent("""\
            Send a test email with the API's SMTP settings.
        """),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--from",
        dest="sender",
        default=os.getenv("EMAIL_FROM") or os.getenv("EMAIL_USER"),
        help="Sender address (default: EMAIL_FROM, then EMAIL_USER)",
    )
    parser.add_argument(
        "--to",
        dest="recipient",
        default=os.getenv("EMAIL_TO"),
        help="Recipient address (default: EMAIL_TO)",
    )
    parser.add_argument("--subject", default=DEFAULT_SUBJECT)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    if not args.sender or not args.recipient:
        parser.error("both a sender and a recipient are required (--from/--to or EMAIL_FROM/EMAIL_TO)")

    try:
        asyncio.run(send_test_email(args.sender, args.recipient, args.subject))
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Success: test email sent to {args.recipient}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
