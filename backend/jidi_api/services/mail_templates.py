"""
HTML email templates for the website forms.

Three fixed messages are rendered here:
  compose_signup_notification   — operator notice of a newsletter signup
  compose_contact_notification  — operator copy of a contact form message
  compose_signup_confirmation   — welcome mail back to the subscriber

Composers never validate: callers pass already-checked values and empty
strings simply render as empty fields. Interpolated values are HTML-escaped
by jinja2 autoescaping.
"""

from email.headerregistry import Address
from typing import Optional

from jinja2 import Environment

from jidi_api.config import MailSettings
from jidi_api.models.email import ComposedMessage

SIGNUP_NOTIFICATION_SUBJECT = "New Email Signup from JIDI Institute Website"
CONTACT_NOTIFICATION_SUBJECT = "New Contact Form Message from {full_name}"
SIGNUP_CONFIRMATION_SUBJECT = "Welcome to JIDI Institute - Thank You for Signing Up!"

BRAND_COLOR = "#087B66"

_env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)

# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

_SIGNUP_NOTIFICATION_HTML = _env.from_string("""\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: {{ brand }};">New Email Signup</h2>
  <p>A new person has signed up for updates from JIDI Institute:</p>
  <div style="background-color: #f5f5f5; padding: 20px; border-radius: 8px; margin: 20px 0;">
    <p style="margin: 0; font-size: 16px;"><strong>Email:</strong> {{ email }}</p>
  </div>
  {% if message %}
  <p><strong>Message:</strong> {{ message }}</p>
  {% endif %}
  <p style="color: #666; font-size: 14px;">
    This signup was received from the JIDI Institute website.
  </p>
</div>
""")

_CONTACT_NOTIFICATION_HTML = _env.from_string("""\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: {{ brand }};">New Contact Form Submission</h2>
  <p>A new message has been received through the JIDI Institute contact form:</p>

  <div style="background-color: #f5f5f5; padding: 20px; border-radius: 8px; margin: 20px 0;">
    <div style="margin-bottom: 15px;">
      <strong style="color: {{ brand }};">Full Name:</strong><br>
      <span style="font-size: 16px;">{{ full_name }}</span>
    </div>

    <div style="margin-bottom: 15px;">
      <strong style="color: {{ brand }};">Email:</strong><br>
      <a href="mailto:{{ email }}" style="color: {{ brand }}; text-decoration: none;">{{ email }}</a>
    </div>

    <div>
      <strong style="color: {{ brand }};">Message:</strong><br>
      <div style="background-color: white; padding: 15px; border-radius: 4px; margin-top: 5px; white-space: pre-wrap;">{{ message }}</div>
    </div>
  </div>

  <div style="text-align: center; margin: 30px 0;">
    <a href="mailto:{{ email }}" style="background-color: {{ brand }}; color: white; padding: 12px 24px; text-decoration: none; border-radius: 6px; display: inline-block;">Reply to {{ full_name }}</a>
  </div>

  <p style="color: #666; font-size: 14px;">
    This message was sent from the JIDI Institute website contact form.
  </p>
</div>
""")

_SIGNUP_CONFIRMATION_HTML = _env.from_string("""\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <div style="text-align: center; margin-bottom: 30px;">
    <h1 style="color: {{ brand }}; margin: 0;">Welcome to JIDI Institute</h1>
    <p style="color: #666; font-size: 16px;">Empowering Africa Through Ethical AI</p>
  </div>

  <div style="background-color: #f5f5f5; padding: 30px; border-radius: 8px; margin: 20px 0;">
    <h2 style="color: {{ brand }}; margin-top: 0;">Thank You for Joining Us!</h2>
    <p>We're excited to have you as part of our community. You'll be among the first to know about:</p>
    <ul style="text-align: left;">
      <li>Upcoming AI education programs and bootcamps</li>
      <li>Research findings and policy developments</li>
      <li>Events and networking opportunities</li>
      <li>Partnerships and collaborations</li>
    </ul>
  </div>

  <div style="text-align: center; margin: 30px 0;">
    <p style="font-size: 18px; font-weight: bold; color: {{ brand }};">
      "Believe" (Twi) - Our logo symbolizes growth.
    </p>
  </div>

  <div style="border-top: 1px solid #ddd; padding-top: 20px; text-align: center;">
    <p style="color: #666; font-size: 14px;">
      JIDI Institute | Burma Camp, Accra, Ghana<br>
      <a href="https://linkedin.com/company/jidi-institute" style="color: {{ brand }};">Connect with us on LinkedIn</a>
    </p>
  </div>
</div>
""")


# ---------------------------------------------------------------------------
# Composers
# ---------------------------------------------------------------------------

def _header_text(value: str) -> str:
    """Collapse whitespace runs (including CR/LF) so a value is safe in a header."""
    return " ".join(value.split())


def _mailbox(display_name: str, address: str) -> str:
    """
    Format ``"Name" <user@domain>``.

    Unlike email.utils.formataddr this accepts non-ASCII local parts, which
    aiosmtplib delivers with SMTPUTF8.
    """
    username, at, domain = address.rpartition("@")
    if not at:
        username, domain = address, ""
    return str(Address(display_name=_header_text(display_name), username=username, domain=domain))


def _institute_sender(config: MailSettings) -> str:
    return _mailbox(config.from_name, config.user)


def compose_signup_notification(
    email: str,
    message: Optional[str] = None,
    *,
    config: MailSettings,
    subject: Optional[str] = None,
) -> ComposedMessage:
    """Operator notice of a new signup. The message paragraph is omitted when empty."""
    return ComposedMessage(
        sender=_institute_sender(config),
        to=config.operator_address,
        subject=subject or SIGNUP_NOTIFICATION_SUBJECT,
        html=_SIGNUP_NOTIFICATION_HTML.render(brand=BRAND_COLOR, email=email, message=message),
    )


def compose_contact_notification(
    full_name: str,
    email: str,
    message: str,
    *,
    config: MailSettings,
    subject: Optional[str] = None,
) -> ComposedMessage:
    """
    Operator copy of a contact form message.

    The From header carries the visitor's own name and address so that a plain
    "Reply" in the operator's mail client goes straight back to them.
    """
    return ComposedMessage(
        sender=_mailbox(full_name, email),
        to=config.operator_address,
        subject=subject or CONTACT_NOTIFICATION_SUBJECT.format(full_name=_header_text(full_name)),
        html=_CONTACT_NOTIFICATION_HTML.render(
            brand=BRAND_COLOR,
            full_name=full_name,
            email=email,
            message=message,
        ),
    )


def compose_signup_confirmation(
    email: str,
    *,
    config: MailSettings,
    subject: Optional[str] = None,
) -> ComposedMessage:
    return ComposedMessage(
        sender=_institute_sender(config),
        to=email,
        subject=subject or SIGNUP_CONFIRMATION_SUBJECT,
        html=_SIGNUP_CONFIRMATION_HTML.render(brand=BRAND_COLOR),
    )
