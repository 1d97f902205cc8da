"""
botkeeper/main.py

Purpose: Application entry point

- Initializes FastAPI app
- Loads configuration and logging
- Registers API routes (auth, users, bots)
- No business logic should be written here
- Manages application lifecycle (startup/shutdown)
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import time

from botkeeper.core.config import settings, validate_settings
from botkeeper.core.errors import add_exception_handlers
from botkeeper.core.logging import setup_logging, get_logger
from botkeeper.db.store import open_store, close_store, check_store_health
from botkeeper.api import auth, users, bots

APP_VERSION = "1.0.0"

# Initialize logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info("Starting Botkeeper application...")

    try:
        logger.info("Validating configuration...")
        validate_settings()

        logger.info("Opening record store...")
        open_store()

        if not check_store_health():
            logger.warning("Record store health check failed during startup")
        else:
            logger.info("Record store health check passed")

        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info(f"Debug Mode: {settings.DEBUG}")

    except Exception as e:
        logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
        raise

    yield

    logger.info("Shutting down Botkeeper application...")
    close_store()


app = FastAPI(
    title="Botkeeper",
    description="User accounts with per-user trading bot state",
    version=APP_VERSION,
    lifespan=lifespan,
    debug=settings.DEBUG,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time header to all responses."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    if process_time > settings.SLOW_REQUEST_SECONDS:
        logger.warning(
            f"Slow request detected: {request.method} {request.url.path}",
            extra={"process_time": process_time}
        )

    return response


add_exception_handlers(app)

app.include_router(auth.router, prefix=settings.API_PREFIX, tags=["Auth"])
app.include_router(users.router, prefix=settings.API_PREFIX, tags=["Users"])
app.include_router(bots.router, prefix=settings.API_PREFIX, tags=["Bots"])


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - basic info."""
    return {
        "message": "Botkeeper API",
        "version": APP_VERSION,
        "status": "running",
        "environment": settings.ENVIRONMENT
    }


@app.get("/health", tags=["Health"])
def health_check():
    """
    Health check endpoint.
    Checks that the users file can be loaded.
    """
    store_healthy = check_store_health()
    health_status = {
        "message": "healthy" if store_healthy else "unhealthy",
        "status": "healthy" if store_healthy else "unhealthy",
        "timestamp": time.time(),
        "environment": settings.ENVIRONMENT,
        "version": APP_VERSION,
        "checks": {
            "store": "healthy" if store_healthy else "unhealthy"
        }
    }

    status_code = 200 if store_healthy else 503
    return JSONResponse(content=health_status, status_code=status_code)


@app.get("/ready", tags=["Health"])
def readiness_check():
    """
    Readiness probe - indicates if app is ready to receive traffic.
    """
    if check_store_health():
        return {"message": "ready", "status": "ready"}
    return JSONResponse(
        status_code=503,
        content={"message": "not ready", "status": "not_ready", "reason": "store_unavailable"}
    )


@app.get("/live", tags=["Health"])
async def liveness_check():
    """
    Liveness probe - indicates if app is alive.
    """
    return {"message": "alive", "status": "alive"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "botkeeper.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )
