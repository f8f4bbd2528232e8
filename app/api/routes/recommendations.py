"""Recommendation and preference routes."""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_recommender
from app.api.middleware.auth import get_current_user, get_optional_user
from app.api.schemas import PreferencesRequest, PreferencesResponse, RestaurantResponse
from app.database import get_session
from app.domain.models import User, UserPreference
from app.ports.recommender import RecommenderPort

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Recommendations"])


@router.get("/recommendations", response_model=list[RestaurantResponse])
async def get_recommendations(
    limit: int = Query(default=10, ge=1, le=50),
    user: User | None = Depends(get_optional_user),
    recommender: RecommenderPort = Depends(get_recommender),
) -> list[RestaurantResponse]:
    """Personalized picks for signed-in users, trending restaurants otherwise."""
    if user is not None:
        restaurants = await recommender.recommend(user.id, limit=limit)
    else:
        restaurants = await recommender.trending(limit=limit)
    return [RestaurantResponse.model_validate(r) for r in restaurants]


@router.get("/recommendations/trending", response_model=list[RestaurantResponse])
async def get_trending(
    limit: int = Query(default=10, ge=1, le=50),
    recommender: RecommenderPort = Depends(get_recommender),
) -> list[RestaurantResponse]:
    """Most booked restaurants of the past week."""
    restaurants = await recommender.trending(limit=limit)
    return [RestaurantResponse.model_validate(r) for r in restaurants]


@router.put("/preferences", response_model=PreferencesResponse)
async def update_preferences(
    data: PreferencesRequest,
    session: AsyncSession = Depends(get_session),
    user: User = Depends(get_current_user),
) -> PreferencesResponse:
    """Update the user's explicit dining preferences."""
    result = await session.execute(
        select(UserPreference).where(UserPreference.user_id == user.id)
    )
    prefs = result.scalar_one_or_none()

    if prefs is None:
        prefs = UserPreference(user_id=user.id)
        session.add(prefs)

    prefs.cuisine_preferences = data.cuisine_preferences
    prefs.price_range_min = data.price_range_min
    prefs.price_range_max = data.price_range_max
    prefs.dietary_restrictions = data.dietary_restrictions
    prefs.preferred_neighborhoods = data.preferred_neighborhoods

    await session.flush()
    logger.info("Preferences updated for user %s", user.id)
    return PreferencesResponse.model_validate(prefs)
