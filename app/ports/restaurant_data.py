"""Read-only data access port used by the recommendation engine."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime

from app.domain.records import BookingRecord, PreferencesRecord, RestaurantRecord


class RestaurantDataPort(ABC):
    """Abstraction over the storage queries the recommender needs.

    Implementations never mutate state. Failures raised by the underlying
    store are propagated to the caller unchanged.
    """

    @abstractmethod
    async def get_user_preferences(self, user_id: str) -> PreferencesRecord | None:
        ...

    @abstractmethod
    async def get_user_bookings(self, user_id: str) -> list[BookingRecord]:
        """Bookings of a user, each joined with its restaurant and review."""
        ...

    @abstractmethod
    async def get_restaurant(self, restaurant_id: str) -> RestaurantRecord | None:
        ...

    @abstractmethod
    async def get_all_restaurants(self, excluding: str | None = None) -> list[RestaurantRecord]:
        ...

    @abstractmethod
    async def count_recent_bookings_by_restaurant(self, since: datetime) -> dict[str, int]:
        """Booking counts per restaurant for bookings created at or after `since`."""
        ...

    @abstractmethod
    async def count_overlap_booking_users(
        self,
        restaurant_ids: Iterable[str],
        excluding_user_id: str,
        top_n: int,
    ) -> list[tuple[str, int]]:
        """Users with bookings among `restaurant_ids`, most overlapping first."""
        ...

    @abstractmethod
    async def get_bookings_by_users_excluding_restaurants(
        self,
        user_ids: Iterable[str],
        excluded_restaurant_ids: Iterable[str],
    ) -> list[BookingRecord]:
        ...

    @abstractmethod
    async def get_restaurants_by_ids(self, ids: Iterable[str]) -> list[RestaurantRecord]:
        """Resolve ids to restaurants. Result order is not guaranteed."""
        ...
