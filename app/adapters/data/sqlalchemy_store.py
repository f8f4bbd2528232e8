"""SQLAlchemy implementation of the recommender's data access port."""

import logging
from collections.abc import Iterable
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.models import Booking, Restaurant, UserPreference
from app.domain.records import BookingRecord, PreferencesRecord, RestaurantRecord
from app.ports.restaurant_data import RestaurantDataPort

logger = logging.getLogger(__name__)


class SQLAlchemyRestaurantData(RestaurantDataPort):
    """Read-only queries over the relational store."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_user_preferences(self, user_id: str) -> PreferencesRecord | None:
        result = await self._session.execute(
            select(UserPreference).where(UserPreference.user_id == user_id)
        )
        prefs = result.scalar_one_or_none()
        return PreferencesRecord.from_model(prefs) if prefs else None

    async def get_user_bookings(self, user_id: str) -> list[BookingRecord]:
        # restaurant and review are selectin-loaded on Booking
        result = await self._session.execute(
            select(Booking).where(Booking.user_id == user_id).order_by(Booking.created_at)
        )
        return [BookingRecord.from_model(b, with_relations=True) for b in result.scalars()]

    async def get_restaurant(self, restaurant_id: str) -> RestaurantRecord | None:
        restaurant = await self._session.get(Restaurant, restaurant_id)
        return RestaurantRecord.from_model(restaurant) if restaurant else None

    async def get_all_restaurants(self, excluding: str | None = None) -> list[RestaurantRecord]:
        stmt = select(Restaurant).order_by(Restaurant.id)
        if excluding is not None:
            stmt = stmt.where(Restaurant.id != excluding)
        result = await self._session.execute(stmt)
        return [RestaurantRecord.from_model(r) for r in result.scalars()]

    async def count_recent_bookings_by_restaurant(self, since: datetime) -> dict[str, int]:
        booking_count = func.count(Booking.id).label("booking_count")
        result = await self._session.execute(
            select(Booking.restaurant_id, booking_count)
            .where(Booking.created_at >= since)
            .group_by(Booking.restaurant_id)
            .order_by(booking_count.desc(), Booking.restaurant_id)
        )
        return {row.restaurant_id: row.booking_count for row in result}

    async def count_overlap_booking_users(
        self,
        restaurant_ids: Iterable[str],
        excluding_user_id: str,
        top_n: int,
    ) -> list[tuple[str, int]]:
        ids = list(restaurant_ids)
        if not ids:
            return []
        overlap = func.count(Booking.id).label("overlap")
        result = await self._session.execute(
            select(Booking.user_id, overlap)
            .where(Booking.restaurant_id.in_(ids), Booking.user_id != excluding_user_id)
            .group_by(Booking.user_id)
            .order_by(overlap.desc(), Booking.user_id)
            .limit(top_n)
        )
        return [(row.user_id, row.overlap) for row in result]

    async def get_bookings_by_users_excluding_restaurants(
        self,
        user_ids: Iterable[str],
        excluded_restaurant_ids: Iterable[str],
    ) -> list[BookingRecord]:
        users = list(user_ids)
        if not users:
            return []
        stmt = select(Booking).where(Booking.user_id.in_(users))
        excluded = list(excluded_restaurant_ids)
        if excluded:
            stmt = stmt.where(Booking.restaurant_id.not_in(excluded))
        result = await self._session.execute(stmt)
        return [BookingRecord.from_model(b) for b in result.scalars()]

    async def get_restaurants_by_ids(self, ids: Iterable[str]) -> list[RestaurantRecord]:
        wanted = list(ids)
        if not wanted:
            return []
        result = await self._session.execute(
            select(Restaurant).where(Restaurant.id.in_(wanted))
        )
        return [RestaurantRecord.from_model(r) for r in result.scalars()]
