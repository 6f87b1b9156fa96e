"""
FastAPI Application Entry Point
"""
import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cdr_gateway.api.v1.endpoints import health
from cdr_gateway.api.v1.routes import api_router
from cdr_gateway.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan - startup and shutdown events.

    Startup:
    - Validates collaborator configuration
    - Opens the shared backend HTTP client

    Shutdown:
    - Closes the HTTP client
    """
    # ========================
    # STARTUP
    # ========================
    logger.info("Starting CDR Gateway...")

    strict_validation = settings.environment == "production"

    try:
        from cdr_gateway.core.validation import validate_config_on_startup
        validate_config_on_startup(settings, strict=strict_validation)
    except RuntimeError as e:
        if strict_validation:
            logger.error(f"Startup failed: {e}")
            raise
        else:
            logger.warning(f"Configuration warnings (non-fatal in {settings.environment}): {e}")

    app.state.http_client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)

    logger.info("CDR Gateway started successfully")

    yield  # Application is running

    # ========================
    # SHUTDOWN
    # ========================
    logger.info("Shutting down CDR Gateway...")

    try:
        await app.state.http_client.aclose()
    except Exception as e:
        logger.error(f"Error during shutdown: {e}")
    app.state.http_client = None

    logger.info("CDR Gateway shutdown complete")


app = FastAPI(
    title="CDR Gateway",
    description="Call-detail record ingestion with line classification, fraud gating and VoIP routing",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(api_router, prefix=settings.api_prefix)
