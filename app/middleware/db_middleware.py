# app/middleware/db_middleware.py
"""
Lazy Database Connection Middleware.

Connects MongoDB on the first saved-plan or favorite request. Generation
and health routes never touch the database and pass straight through.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from database import Database
from settings import settings
from app.utils.errors import RecordStoreError

logger = logging.getLogger(__name__)

RECORD_PATH_PREFIXES = (
    "/api/save-plan",
    "/api/saved-plans",
    "/api/add-favorite",
    "/api/remove-favorite",
    "/api/favorites",
)


def is_record_path(path: str) -> bool:
    return path.startswith(RECORD_PATH_PREFIXES)


class LazyDatabaseMiddleware(BaseHTTPMiddleware):
    """Ensure MongoDB is reachable before record routes run."""

    async def dispatch(self, request: Request, call_next):
        if not settings.uses_mongodb or not is_record_path(request.url.path):
            return await call_next(request)

        if not await Database.ensure_connected():
            error = RecordStoreError(detail="MongoDB unavailable")
            logger.error(f"{request.method} {request.url.path} failed: {error.detail}")
            return JSONResponse(status_code=error.status_code, content={"error": error.message})

        return await call_next(request)
