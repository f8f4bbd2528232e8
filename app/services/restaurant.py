"""Restaurant browsing: filtered search and detail pages."""

from dataclasses import dataclass
from datetime import datetime

from fastapi import HTTPException, status
from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.models import AvailabilitySlot, Restaurant, Review

RECENT_REVIEWS_LIMIT = 20


@dataclass
class RestaurantFilters:
    cuisine: str | None = None
    price_range: int | None = None
    neighborhood: str | None = None
    search: str | None = None
    date: datetime | None = None
    time: str | None = None
    party_size: int | None = None

    @property
    def wants_availability(self) -> bool:
        return self.date is not None and self.time is not None and self.party_size is not None


class RestaurantService:
    """Read-side queries for restaurants and their reviews."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def search(self, filters: RestaurantFilters) -> list[Restaurant]:
        """
        List restaurants matching every given filter.

        When date, time and party size are all given, only restaurants with an
        open slot at that time on or after the date are kept.
        """
        conditions = []
        if filters.cuisine:
            conditions.append(Restaurant.cuisine == filters.cuisine)
        if filters.price_range is not None:
            conditions.append(Restaurant.price_range == filters.price_range)
        if filters.neighborhood:
            conditions.append(Restaurant.neighborhood == filters.neighborhood)
        if filters.search:
            pattern = f"%{filters.search}%"
            conditions.append(
                or_(
                    Restaurant.name.ilike(pattern),
                    Restaurant.description.ilike(pattern),
                    Restaurant.cuisine.ilike(pattern),
                )
            )

        if filters.wants_availability:
            open_slots = select(AvailabilitySlot.restaurant_id).where(
                and_(
                    AvailabilitySlot.date >= filters.date,
                    AvailabilitySlot.time == filters.time,
                    AvailabilitySlot.party_size == filters.party_size,
                    AvailabilitySlot.available.is_(True),
                )
            )
            conditions.append(Restaurant.id.in_(open_slots))

        stmt = select(Restaurant).order_by(Restaurant.name)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get(self, restaurant_id: str) -> Restaurant:
        """Fetch a restaurant or raise 404."""
        restaurant = await self._session.get(Restaurant, restaurant_id)
        if restaurant is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Restaurant not found",
            )
        return restaurant

    async def recent_reviews(self, restaurant_id: str) -> list[Review]:
        result = await self._session.execute(
            select(Review)
            .where(Review.restaurant_id == restaurant_id)
            .order_by(Review.created_at.desc())
            .limit(RECENT_REVIEWS_LIMIT)
        )
        return list(result.scalars().all())
