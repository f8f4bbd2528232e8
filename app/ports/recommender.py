"""Recommender port: abstract interface for the recommendation engine."""

from abc import ABC, abstractmethod

from app.domain.records import RestaurantRecord


class RecommenderPort(ABC):
    """Abstraction for the restaurant recommendation engine."""

    @abstractmethod
    async def recommend(self, user_id: str, limit: int = 10) -> list[RestaurantRecord]:
        """Return ranked personalized restaurant recommendations for a user."""
        ...

    @abstractmethod
    async def trending(self, limit: int = 10) -> list[RestaurantRecord]:
        """Return the most booked restaurants of the recent window."""
        ...

    @abstractmethod
    async def similar_to(self, restaurant_id: str, limit: int = 5) -> list[RestaurantRecord]:
        """Return restaurants sharing attributes with the given one."""
        ...
