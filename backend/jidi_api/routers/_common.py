"""Helpers shared by the form routers."""

import json
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from jidi_api.errors import ValidationError

INVALID_BODY = "Invalid request body"


async def read_json_object(request: Request) -> dict[str, Any]:
    """
    Decode the request body as a JSON object.

    Raises:
        ValidationError: body is empty, not JSON, or not an object.
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError(INVALID_BODY) from None
    if not isinstance(payload, dict):
        raise ValidationError(INVALID_BODY)
    return payload


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})
