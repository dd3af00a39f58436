# database.py
"""
Meal Planner MongoDB Database Connection.

Motor client plus Beanie ODM for saved plans and favorites. Only the
record store needs MongoDB, so connecting is lazy and a failed attempt is
not retried until ``RECONNECT_COOLDOWN_SECONDS`` have passed.
"""

import asyncio
import logging
import time
from typing import Optional

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from settings import settings

logger = logging.getLogger(__name__)

RECONNECT_COOLDOWN_SECONDS = 30.0


class Database:
    """MongoDB connection manager shared by the whole process."""

    client: Optional[AsyncIOMotorClient] = None
    _initialized: bool = False
    _last_failure: Optional[float] = None
    _lock: Optional[asyncio.Lock] = None

    @classmethod
    def _get_lock(cls) -> asyncio.Lock:
        if cls._lock is None:
            cls._lock = asyncio.Lock()
        return cls._lock

    @classmethod
    async def connect_db(cls, database_url: str, database_name: str):
        """
        Open the client, ping it and register the record documents.

        Raises whatever Motor or Beanie raised; the caller decides whether
        a failure is fatal.
        """
        if cls._initialized:
            return

        client = AsyncIOMotorClient(database_url, serverSelectionTimeoutMS=5000)
        try:
            await client.admin.command("ping")

            from app.models.mongodb import DOCUMENT_MODELS

            await init_beanie(database=client[database_name], document_models=DOCUMENT_MODELS)
        except Exception as e:
            client.close()
            logger.error(f"Error connecting to MongoDB ({database_name}): {e}")
            raise

        cls.client = client
        cls._initialized = True
        logger.info(f"Connected to MongoDB: {database_name} ({len(DOCUMENT_MODELS)} record models)")

    @classmethod
    async def ensure_connected(cls) -> bool:
        """
        Connect with the configured URL unless already connected.

        Concurrent callers share one attempt. Returns False while MongoDB is
        unreachable, without retrying inside the cooldown window.
        """
        if cls._initialized:
            return True

        async with cls._get_lock():
            if cls._initialized:
                return True
            if cls._last_failure is not None:
                if time.monotonic() - cls._last_failure < RECONNECT_COOLDOWN_SECONDS:
                    return False
            try:
                logger.info("Lazy initializing MongoDB connection...")
                await cls.connect_db(settings.DATABASE_URL, settings.DATABASE_NAME)
            except Exception:
                cls._last_failure = time.monotonic()
                return False
            cls._last_failure = None
            return True

    @classmethod
    async def close_db(cls):
        """Close the MongoDB connection."""
        if cls.client:
            cls.client.close()
            logger.info("MongoDB connection closed")
        cls.client = None
        cls._initialized = False
        cls._last_failure = None

    @classmethod
    async def ping(cls) -> bool:
        """Check that the server still answers."""
        if not cls.client:
            return False
        try:
            await cls.client.admin.command("ping")
            return True
        except Exception as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False
