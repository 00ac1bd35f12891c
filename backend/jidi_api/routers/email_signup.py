"""
Newsletter signup router.

Endpoints:
  POST /email-signup  — notify the operator, then welcome the subscriber

The operator notification is mandatory; the welcome mail is best effort and
its failure never changes the 200 response.
"""

import logging

from fastapi import APIRouter, Request

from jidi_api.errors import ConfigurationError, SendFailure, ValidationError
from jidi_api.models.email import ErrorResponse, SuccessResponse
from jidi_api.routers._common import error_response, read_json_object
from jidi_api.services.form_validation import validate_signup
from jidi_api.services.mailer import process_signup

logger = logging.getLogger(__name__)

router = APIRouter()

SIGNUP_SUCCESS = "Successfully signed up! Check your email for confirmation."
SIGNUP_FAILURE = "Failed to process signup. Please try again later."


@router.post(
    "/email-signup",
    response_model=SuccessResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def email_signup(request: Request):
    try:
        payload = await read_json_object(request)
        signup = validate_signup(payload)
    except ValidationError as exc:
        logger.info("Rejected email signup: %s", exc)
        return error_response(400, str(exc))

    try:
        outcome = await process_signup(signup.email, signup.message)
    except ConfigurationError as exc:
        logger.error("Email signup error: mail transport misconfigured: %s", exc)
        return error_response(500, SIGNUP_FAILURE)
    except SendFailure as exc:
        logger.error("Email signup error: %s (%s)", exc, exc.__cause__)
        return error_response(500, SIGNUP_FAILURE)

    if not outcome.confirmation.delivered:
        logger.info("Signup for %s completed without confirmation email", signup.email)
    return SuccessResponse(message=SIGNUP_SUCCESS)
