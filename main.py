# main.py
"""
Meal Planner API - Main Application.

FastAPI app that generates meal plans and recipes with Gemini and keeps
saved plans and favorite meals in a record store.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from database import Database
from settings import settings
from app.middleware.db_middleware import LazyDatabaseMiddleware
from app.utils.errors import MealPlannerException

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize Sentry for error tracking
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(
                level=logging.INFO,
                event_level=logging.ERROR
            ),
        ],
    )
    logger.info(f"Sentry initialized ({settings.SENTRY_ENVIRONMENT})")
else:
    logger.warning("Sentry DSN not configured - error tracking disabled")

# Import routers
from app.routes import meal_plan, saved_plans, favorites
from app.dependencies import get_record_store


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting Meal Planner API...")
    if settings.uses_mongodb:
        if await Database.ensure_connected():
            logger.info("Database initialized successfully")
        else:
            logger.warning("Database will be initialized lazily on first record request")

    yield

    if settings.uses_mongodb:
        await Database.close_db()
    logger.info("Meal Planner API shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Meal Planner API",
    version="1.0.0",
    description="AI-generated meal plans, shopping lists and recipes",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=settings.CORS_ORIGINS != "*",
    allow_methods=["*"],
    allow_headers=["*"],
)

# Lazy database connection middleware
app.add_middleware(LazyDatabaseMiddleware)


@app.exception_handler(MealPlannerException)
async def meal_planner_exception_handler(request: Request, exc: MealPlannerException):
    """Convert application faults to ``{"error": message}`` responses."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report the first invalid request field as a 400."""
    errors = exc.errors()
    if not errors:
        message = "Request body is missing."
    else:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body") or "body"
        if first.get("type") == "missing":
            message = f"Missing required field: {field}"
        else:
            message = f"Invalid value for field {field}: {first.get('msg')}"
    logger.info(f"{request.method} {request.url.path} rejected: {message}")
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last resort: never leak internals to the client."""
    logger.exception(f"Unhandled error in {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Health check
@app.get("/health")
async def health_check():
    """Health check endpoint - fast response without database dependency."""
    return {
        "status": "ok",
        "environment": settings.ENV,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": "1.0.0"
    }


@app.get("/health/detailed")
async def health_check_detailed():
    """Detailed health check with record store connectivity test."""
    try:
        store_ok = await get_record_store().ping()
        return {
            "status": "ok" if store_ok else "degraded",
            "record_store": settings.RECORD_STORE_BACKEND,
            "record_store_connected": store_ok,
            "gemini_configured": bool(settings.GEMINI_API_KEY),
            "environment": settings.ENV,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": "1.0.0"
        }
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return {
            "status": "error",
            "record_store": settings.RECORD_STORE_BACKEND,
            "record_store_connected": False,
            "environment": settings.ENV,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "error": str(e)
        }


# Include routers
app.include_router(meal_plan.router, prefix="/api", tags=["Generation"])
app.include_router(saved_plans.router, prefix="/api", tags=["Saved Plans"])
app.include_router(favorites.router, prefix="/api", tags=["Favorites"])


# Root endpoint
@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "message": "Meal Planner API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT)
