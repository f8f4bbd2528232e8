"""Restaurant browsing, availability and review routes."""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_booking_platforms, get_recommender
from app.api.middleware.auth import get_current_user
from app.api.schemas import (
    AvailabilityResponse,
    RestaurantDetailResponse,
    RestaurantResponse,
    ReviewCreateRequest,
    ReviewResponse,
    SlotOfferResponse,
)
from app.database import get_session
from app.domain.enums import Platform
from app.domain.models import User
from app.ports.booking_platform import BookingPlatformError, BookingPlatformPort
from app.ports.recommender import RecommenderPort
from app.services.restaurant import RestaurantFilters, RestaurantService
from app.services.review import ReviewService

router = APIRouter(prefix="/restaurants", tags=["Restaurants"])


@router.get("", response_model=list[RestaurantResponse])
async def list_restaurants(
    cuisine: str | None = None,
    price_range: int | None = Query(default=None, ge=1, le=4),
    neighborhood: str | None = None,
    search: str | None = None,
    date: datetime | None = None,
    time: str | None = Query(default=None, pattern=r"^\d{2}:\d{2}$"),
    party_size: int | None = Query(default=None, ge=1),
    session: AsyncSession = Depends(get_session),
) -> list[RestaurantResponse]:
    """Browse restaurants with optional filters."""
    filters = RestaurantFilters(
        cuisine=cuisine,
        price_range=price_range,
        neighborhood=neighborhood,
        search=search,
        date=date,
        time=time,
        party_size=party_size,
    )
    restaurants = await RestaurantService(session).search(filters)
    return [RestaurantResponse.model_validate(r) for r in restaurants]


@router.get("/{restaurant_id}", response_model=RestaurantDetailResponse)
async def get_restaurant(
    restaurant_id: str,
    session: AsyncSession = Depends(get_session),
) -> RestaurantDetailResponse:
    """Restaurant details with its most recent reviews."""
    service = RestaurantService(session)
    restaurant = await service.get(restaurant_id)
    reviews = await service.recent_reviews(restaurant_id)

    detail = RestaurantDetailResponse.model_validate(restaurant)
    detail.reviews = [ReviewResponse.model_validate(r) for r in reviews]
    return detail


@router.get("/{restaurant_id}/similar", response_model=list[RestaurantResponse])
async def get_similar_restaurants(
    restaurant_id: str,
    limit: int = Query(default=5, ge=1, le=50),
    recommender: RecommenderPort = Depends(get_recommender),
) -> list[RestaurantResponse]:
    """Restaurants sharing cuisine, price, neighborhood and features."""
    similar = await recommender.similar_to(restaurant_id, limit=limit)
    return [RestaurantResponse.model_validate(r) for r in similar]


@router.get("/{restaurant_id}/availability", response_model=AvailabilityResponse)
async def get_availability(
    restaurant_id: str,
    platform: Platform,
    date: datetime,
    party_size: int = Query(..., ge=1, le=20),
    session: AsyncSession = Depends(get_session),
    platforms: dict[Platform, BookingPlatformPort] = Depends(get_booking_platforms),
) -> AvailabilityResponse:
    """Live availability from an external booking platform."""
    await RestaurantService(session).get(restaurant_id)

    client = platforms.get(platform)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Platform '{platform.value}' has no live availability",
        )

    try:
        offers = await client.get_availability(restaurant_id, date, party_size)
    except BookingPlatformError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=exc.message,
        ) from exc

    return AvailabilityResponse(
        restaurant_id=restaurant_id,
        platform=platform,
        slots=[SlotOfferResponse.model_validate(o) for o in offers],
    )


@router.post(
    "/{restaurant_id}/reviews",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_review(
    restaurant_id: str,
    data: ReviewCreateRequest,
    session: AsyncSession = Depends(get_session),
    user: User = Depends(get_current_user),
) -> ReviewResponse:
    """Review a restaurant the current user has booked."""
    review = await ReviewService(session).create_review(restaurant_id, user.id, data)
    return ReviewResponse.model_validate(review)
