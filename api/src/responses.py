"""
JSON response helpers.

Every handler answers through these two functions so that success bodies are
plain JSON and every failure carries the same {"error": ...} envelope.
"""

from typing import Any

import structlog
from fastapi import status
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel

logger = structlog.get_logger(__name__)


def respond_with_json(status_code: int, payload: Any) -> Response:
    """
    Serialize a payload into a JSON response.

    Pydantic models are dumped in JSON mode first. If the payload cannot be
    serialized the intended status is dropped and a plain-text 500 carrying
    the serialization error is returned instead.

    Args:
        status_code: HTTP status for the response
        payload: Any JSON-serializable value or pydantic model

    Returns:
        Response ready to be returned from a route
    """
    try:
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(mode="json")
        return JSONResponse(content=payload, status_code=status_code)
    except (TypeError, ValueError) as e:
        logger.error("response_serialization_failed", error=str(e))
        return PlainTextResponse(
            content=str(e),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


def respond_with_error(status_code: int, message: str) -> Response:
    """
    Wrap a message in the error envelope.

    Server-side failures (5xx) are logged before responding.

    Args:
        status_code: HTTP status for the response
        message: Client-visible error message

    Returns:
        Response with body {"error": message}
    """
    if status_code >= 500:
        logger.error("responding_with_5xx_error", status_code=status_code, message=message)

    return respond_with_json(status_code, {"error": message})
