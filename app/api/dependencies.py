"""Shared FastAPI dependencies for adapters."""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.data.sqlalchemy_store import SQLAlchemyRestaurantData
from app.adapters.platforms.factory import build_platform_clients
from app.adapters.recommender.hybrid import HybridRecommenderAdapter
from app.config import settings
from app.database import get_session
from app.domain.enums import Platform
from app.ports.booking_platform import BookingPlatformPort
from app.ports.recommender import RecommenderPort


def get_recommender(session: AsyncSession = Depends(get_session)) -> RecommenderPort:
    return HybridRecommenderAdapter(
        data=SQLAlchemyRestaurantData(session),
        alpha=settings.recommendation_alpha,
        trending_window_days=settings.trending_window_days,
        neighbor_limit=settings.neighbor_limit,
    )


@lru_cache
def get_booking_platforms() -> dict[Platform, BookingPlatformPort]:
    return build_platform_clients(settings)
