"""
Version 1 API router.

Provides:
- GET  /health - liveness probe, independent of the database
- GET  /err    - always answers with the error envelope
- POST /users  - create a user
"""

import structlog
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import Response
from pydantic import ValidationError

from api.src.dependencies import UserGateway, get_user_gateway
from api.src.models.user import CreateUserRequest, ErrorResponse, User, database_user_to_user
from api.src.responses import respond_with_error, respond_with_json

logger = structlog.get_logger(__name__)

router = APIRouter(
    responses={
        500: {"model": ErrorResponse, "description": "Internal Server Error"}
    }
)


@router.get("/health", tags=["Health"], summary="Health Check")
async def health_check() -> Response:
    """Report that the process is serving requests."""
    return respond_with_json(status.HTTP_200_OK, {"status": "ok"})


@router.get("/err", tags=["Health"], summary="Error Envelope Example")
async def error_example() -> Response:
    return respond_with_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "something went wrong")


@router.post(
    "/users",
    tags=["Users"],
    summary="Create User",
    response_model=User,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": CreateUserRequest.model_json_schema()}
            },
        }
    },
)
async def create_user(
    request: Request,
    users: UserGateway = Depends(get_user_gateway),
) -> Response:
    """
    Create a user from a JSON body of the form {"name": "..."}.

    The body is decoded by hand so that a malformed body produces the error
    envelope rather than FastAPI's validation payload. Each failure branch
    returns immediately.
    """
    body = await request.body()

    try:
        params = CreateUserRequest.model_validate_json(body)
    except ValidationError as e:
        logger.warning("create_user_decode_failed", errors=e.error_count())
        return respond_with_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "couldn't decode parameters")

    try:
        user = await users.create_user(params.name)
    except Exception as e:
        logger.error("create_user_failed", error=str(e))
        return respond_with_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Couldn't create user")

    return respond_with_json(status.HTTP_200_OK, database_user_to_user(user))
