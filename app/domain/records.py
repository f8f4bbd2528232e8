"""Immutable read-only snapshots consumed by the recommendation engine.

The engine never touches ORM instances directly: the data adapter converts
rows into these frozen records so scoring works on detached, plain values.
"""

from dataclasses import dataclass
from datetime import datetime

from app.domain.models import Booking, Restaurant, Review, UserPreference


@dataclass(frozen=True)
class RestaurantRecord:
    id: str
    name: str
    cuisine: str
    price_range: int
    neighborhood: str
    address: str
    rating: float | None = None
    review_count: int = 0
    features: frozenset[str] = frozenset()
    description: str | None = None
    phone: str | None = None
    website: str | None = None
    image_url: str | None = None
    resy_enabled: bool = False
    opentable_enabled: bool = False

    @classmethod
    def from_model(cls, row: Restaurant) -> "RestaurantRecord":
        return cls(
            id=row.id,
            name=row.name,
            cuisine=row.cuisine,
            price_range=row.price_range,
            neighborhood=row.neighborhood,
            address=row.address,
            rating=row.rating,
            review_count=row.review_count or 0,
            features=frozenset(row.features or ()),
            description=row.description,
            phone=row.phone,
            website=row.website,
            image_url=row.image_url,
            resy_enabled=bool(row.resy_enabled),
            opentable_enabled=bool(row.opentable_enabled),
        )


@dataclass(frozen=True)
class ReviewRecord:
    rating: int

    @classmethod
    def from_model(cls, row: Review) -> "ReviewRecord":
        return cls(rating=row.rating)


@dataclass(frozen=True)
class BookingRecord:
    id: str
    user_id: str
    restaurant_id: str
    created_at: datetime | None = None
    restaurant: RestaurantRecord | None = None
    review: ReviewRecord | None = None

    @classmethod
    def from_model(cls, row: Booking, with_relations: bool = False) -> "BookingRecord":
        restaurant = review = None
        if with_relations:
            restaurant = RestaurantRecord.from_model(row.restaurant) if row.restaurant else None
            review = ReviewRecord.from_model(row.review) if row.review else None
        return cls(
            id=row.id,
            user_id=row.user_id,
            restaurant_id=row.restaurant_id,
            created_at=row.created_at,
            restaurant=restaurant,
            review=review,
        )


@dataclass(frozen=True)
class PreferencesRecord:
    cuisine_preferences: frozenset[str] = frozenset()
    price_range_min: int | None = 1
    price_range_max: int | None = 4
    preferred_neighborhoods: frozenset[str] = frozenset()

    @classmethod
    def from_model(cls, row: UserPreference) -> "PreferencesRecord":
        return cls(
            cuisine_preferences=frozenset(row.cuisine_preferences or ()),
            price_range_min=row.price_range_min,
            price_range_max=row.price_range_max,
            preferred_neighborhoods=frozenset(row.preferred_neighborhoods or ()),
        )
