"""
User repository for database operations.

Provides the async insert-and-return operation for users using asyncpg with
PostgreSQL, plus helpers to open and close the shared connection pool.
"""

import asyncpg
import structlog
from datetime import datetime, timezone
from uuid import uuid4

from api.src.config import Settings
from api.src.models.user import UserDB

logger = structlog.get_logger(__name__)


async def create_pool(settings: Settings) -> asyncpg.Pool:
    """
    Open the shared connection pool.

    The pool connects eagerly, so an unreachable database fails here rather
    than on the first request.

    Args:
        settings: Application settings

    Returns:
        asyncpg connection pool
    """
    try:
        pool = await asyncpg.create_pool(
            settings.db_connection_string,
            min_size=settings.database_pool_min_size,
            max_size=max(settings.database_pool_max_size, settings.database_pool_min_size),
        )
    except Exception as e:
        logger.error("database_pool_init_failed", error=str(e))
        raise

    logger.info(
        "database_pool_initialized",
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
        database=settings.db_connection_string.split("@")[-1]
    )
    return pool


async def close_pool(pool: asyncpg.Pool) -> None:
    """Close the shared connection pool."""
    await pool.close()
    logger.info("database_pool_closed")


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, pool: asyncpg.Pool):
        """
        Initialize user repository.

        Args:
            pool: asyncpg connection pool
        """
        self.pool = pool

    async def create_user(self, name: str) -> UserDB:
        """
        Insert a new user and return the persisted record.

        The identifier and both timestamps are generated here; created_at and
        updated_at share the same instant.

        Args:
            name: Display name

        Returns:
            Created user

        Raises:
            asyncpg.PostgresError: On database error
            OSError: On connectivity loss
        """
        user_id = uuid4()
        now = datetime.now(timezone.utc).replace(tzinfo=None)

        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(
                    """
                    INSERT INTO users (id, created_at, updated_at, name)
                    VALUES ($1, $2, $3, $4)
                    RETURNING id, created_at, updated_at, name
                    """,
                    user_id,
                    now,
                    now,
                    name
                )
        except Exception as e:
            logger.error("user_create_failed", error=str(e), user_id=str(user_id))
            raise

        logger.info("user_created", user_id=str(user_id))

        return UserDB(
            id=row["id"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            name=row["name"]
        )
