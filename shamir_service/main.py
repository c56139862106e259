"""Shamir Secret Sharing Service - Main FastAPI Application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shamir_service import __version__
from shamir_service.api import sss_router
from shamir_service.config import get_settings
from shamir_service.core.logging import RequestLoggingMiddleware, get_logger, setup_logging
from shamir_service.core.metrics import setup_metrics
from shamir_service.core.sharing_service import get_sharing_service

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    setup_logging(json_output=settings.log_json, level=settings.log_level)
    service = get_sharing_service()
    logger.info(
        "Secret sharing service ready",
        environment=settings.environment,
        modulus_bits=service.field.bits,
        max_shares=service.share_limit,
    )
    yield


app = FastAPI(
    title="Shamir Secret Sharing Service",
    description="Split integer secrets into threshold shares and reconstruct them",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

if settings.cors_origin_list:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

if settings.metrics_enabled:
    setup_metrics(app)

app.include_router(sss_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Shamir Secret Sharing Service",
        "version": __version__,
        "docs": "/docs",
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
