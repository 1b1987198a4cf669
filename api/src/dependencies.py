"""
FastAPI dependency injection for settings and the database gateway.

The ApiConfig container is built once per application and kept on
app.state; routes reach it through Depends so tests can substitute the
gateway without touching a database.
"""

from dataclasses import dataclass
from typing import Optional, Protocol

import structlog
from fastapi import Depends, Request

from api.src.config import Settings
from api.src.models.user import UserDB

logger = structlog.get_logger(__name__)


class UserGateway(Protocol):
    """Persistence operations the handlers rely on."""

    async def create_user(self, name: str) -> UserDB:
        ...


@dataclass
class ApiConfig:
    """Process-wide dependencies shared by every handler."""

    settings: Settings
    users: Optional[UserGateway] = None


def get_api_config(request: Request) -> ApiConfig:
    """
    Get the dependency container of the running application.

    Args:
        request: Current request

    Returns:
        ApiConfig stored on app.state
    """
    return request.app.state.api_config


def get_user_gateway(api_config: ApiConfig = Depends(get_api_config)) -> UserGateway:
    """
    Get the user gateway.

    Raises:
        RuntimeError: If the gateway was never initialized
    """
    if api_config.users is None:
        logger.error("user_gateway_not_initialized")
        raise RuntimeError(
            "User gateway not initialized. The database pool is opened during startup."
        )
    return api_config.users
