"""
Contact form router.

Endpoints:
  POST /contact  — forward a visitor's message to the institute mailbox
"""

import logging

from fastapi import APIRouter, Request

from jidi_api.errors import ConfigurationError, SendFailure, ValidationError
from jidi_api.models.email import ErrorResponse, SuccessResponse
from jidi_api.routers._common import error_response, read_json_object
from jidi_api.services.form_validation import validate_contact
from jidi_api.services.mailer import send_contact_notification

logger = logging.getLogger(__name__)

router = APIRouter()

CONTACT_SUCCESS = "Thank you for your message! We'll get back to you soon."
CONTACT_FAILURE = "Failed to send message. Please try again later."


@router.post(
    "/contact",
    response_model=SuccessResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_contact(request: Request):
    """
    Validate a contact form submission and email it to the operator.

    400 on a missing field or malformed email; 500 when the message could not
    be sent. Failure detail goes to the server log only.
    """
    try:
        payload = await read_json_object(request)
        contact = validate_contact(payload)
    except ValidationError as exc:
        logger.info("Rejected contact form submission: %s", exc)
        return error_response(400, str(exc))

    try:
        await send_contact_notification(contact.full_name, contact.email, contact.message)
    except ConfigurationError as exc:
        logger.error("Contact form error: mail transport misconfigured: %s", exc)
        return error_response(500, CONTACT_FAILURE)
    except SendFailure as exc:
        logger.error("Contact form error: %s (%s)", exc, exc.__cause__)
        return error_response(500, CONTACT_FAILURE)

    return SuccessResponse(message=CONTACT_SUCCESS)
