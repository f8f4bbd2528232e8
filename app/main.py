"""FastAPI application factory: entry point for Tablewise."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes.bookings import router as bookings_router
from app.api.routes.recommendations import router as recommendations_router
from app.api.routes.restaurants import router as restaurants_router
from app.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown events."""
    logger.info("Tablewise starting up...")
    logger.info(
        "Recommendation alpha: %.2f (trending window %d days, %d neighbors)",
        settings.recommendation_alpha,
        settings.trending_window_days,
        settings.neighbor_limit,
    )
    logger.info(
        "Booking platforms: resy latency %.2fs, opentable latency %.2fs",
        settings.resy_latency_seconds,
        settings.opentable_latency_seconds,
    )
    yield
    logger.info("Tablewise shutting down...")


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="Tablewise",
        description="Restaurant discovery, reservations and personalized recommendations",
        version="1.0.0",
        lifespan=lifespan,
    )

    # ── Middleware ──────────────────────────────────
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routes ─────────────────────────────────────
    application.include_router(restaurants_router)
    application.include_router(recommendations_router)
    application.include_router(bookings_router)

    # ── Health Check ───────────────────────────────
    @application.get("/health", tags=["System"])
    async def health() -> dict[str, str]:
        return {"status": "healthy", "service": "tablewise"}

    return application


app = create_app()
