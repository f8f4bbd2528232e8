"""
Hybrid restaurant recommender.

Blends two signals into one ranking:
  - Collaborative: restaurants booked by the users whose booking history
    overlaps most with the target user's.
  - Content-based: attribute affinity to the user's stated preferences and to
    the restaurants they reviewed highly.

final = alpha * collaborative + (1 - alpha) * content

Users without any booking history get the trending list instead.
"""

import logging
from datetime import datetime, timedelta

from app.adapters.recommender import scoring
from app.domain.models import utcnow
from app.domain.records import BookingRecord, PreferencesRecord, RestaurantRecord
from app.ports.recommender import RecommenderPort
from app.ports.restaurant_data import RestaurantDataPort

logger = logging.getLogger(__name__)


class HybridRecommenderAdapter(RecommenderPort):
    """Collaborative + content-based restaurant recommender."""

    def __init__(
        self,
        data: RestaurantDataPort,
        alpha: float = 0.4,
        trending_window_days: int = 7,
        neighbor_limit: int = 10,
    ) -> None:
        self._data = data
        self._alpha = alpha
        self._trending_window = timedelta(days=trending_window_days)
        self._neighbor_limit = neighbor_limit

    async def recommend(self, user_id: str, limit: int = 10) -> list[RestaurantRecord]:
        preferences = await self._data.get_user_preferences(user_id)
        bookings = await self._data.get_user_bookings(user_id)

        if not bookings:
            logger.debug("User %s has no bookings, using trending", user_id)
            return await self.trending(limit)

        # Both scorers share one session, so they run one after the other.
        collaborative = await self.collaborative_scores(user_id, bookings)
        content = await self.content_scores(user_id, bookings, preferences)

        combined = scoring.blend(collaborative, content, self._alpha)
        ranked_ids = scoring.rank(combined, limit)
        if not ranked_ids:
            logger.debug("No positive candidates for user %s, using trending", user_id)
            return await self.trending(limit)

        logger.info(
            "Recommendations for %s: %d collaborative, %d content, %d returned",
            user_id,
            len(collaborative),
            len(content),
            len(ranked_ids),
        )
        return await self._resolve_in_order(ranked_ids)

    async def collaborative_scores(
        self, user_id: str, bookings: list[BookingRecord]
    ) -> dict[str, float]:
        """Score unvisited restaurants by how often overlapping users booked them."""
        booked_ids = {b.restaurant_id for b in bookings}

        neighbors = await self._data.count_overlap_booking_users(
            booked_ids, excluding_user_id=user_id, top_n=self._neighbor_limit
        )
        if not neighbors:
            return {}

        neighbor_bookings = await self._data.get_bookings_by_users_excluding_restaurants(
            [neighbor_id for neighbor_id, _ in neighbors], booked_ids
        )
        return scoring.neighbor_booking_scores(neighbor_bookings, booked_ids)

    async def content_scores(
        self,
        user_id: str,
        bookings: list[BookingRecord],
        preferences: PreferencesRecord | None,
    ) -> dict[str, float]:
        """Score unvisited restaurants by attribute affinity."""
        restaurants = await self._data.get_all_restaurants()
        return scoring.content_scores(restaurants, bookings, preferences)

    async def trending(self, limit: int = 10) -> list[RestaurantRecord]:
        since = self._now() - self._trending_window
        counts = await self._data.count_recent_bookings_by_restaurant(since)

        if not counts:
            restaurants = await self._data.get_all_restaurants()
            return scoring.top_rated(restaurants, limit)

        return await self._resolve_in_order(scoring.rank(counts, limit))

    async def similar_to(self, restaurant_id: str, limit: int = 5) -> list[RestaurantRecord]:
        target = await self._data.get_restaurant(restaurant_id)
        if target is None:
            return []

        others = await self._data.get_all_restaurants(excluding=restaurant_id)
        by_id = {r.id: r for r in others}
        scores = {r.id: scoring.similarity_score(r, target) for r in others}
        return [by_id[rid] for rid in scoring.rank(scores, limit)]

    async def _resolve_in_order(self, ids: list[str]) -> list[RestaurantRecord]:
        """Fetch restaurants and return them in the order of `ids`."""
        by_id = {r.id: r for r in await self._data.get_restaurants_by_ids(ids)}
        return [by_id[rid] for rid in ids if rid in by_id]

    @staticmethod
    def _now() -> datetime:
        return utcnow()
