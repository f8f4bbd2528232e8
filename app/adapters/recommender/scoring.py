"""
Pure scoring functions for the hybrid restaurant recommender.

Every function here works on immutable snapshots and returns plain
``{restaurant_id: score}`` mappings or ranked lists. Nothing touches storage.

Weights:
  Content-based (per candidate restaurant)
    cuisine in preferences ........ 3.0
    price inside preferred range .. 2.0
    preferred neighborhood ........ 1.5
    per liked restaurant (review >= 4):
      same cuisine ................ 1.0
      price within one level ...... 0.5
      each shared feature ......... 0.3
    rating / 5 .................... 1.0

  Similarity (candidate vs. target restaurant)
    same cuisine .................. 5.0
    same price / one level apart .. 3.0 / 1.5
    same neighborhood ............. 2.0
    each shared feature ........... 0.5
    1 - |rating diff| / 5 ......... 1.0
"""

from collections import Counter
from collections.abc import Iterable, Mapping

from app.domain.records import BookingRecord, PreferencesRecord, RestaurantRecord

LIKED_RATING_THRESHOLD = 4

# ── Content-based weights ────────────────────────────────────────
PREFERRED_CUISINE_WEIGHT = 3.0
PREFERRED_PRICE_WEIGHT = 2.0
PREFERRED_NEIGHBORHOOD_WEIGHT = 1.5
LIKED_CUISINE_WEIGHT = 1.0
LIKED_PRICE_WEIGHT = 0.5
LIKED_FEATURE_WEIGHT = 0.3
RATING_BOOST_WEIGHT = 1.0

# ── Similarity weights ───────────────────────────────────────────
SIMILAR_CUISINE_WEIGHT = 5.0
SIMILAR_PRICE_EXACT_WEIGHT = 3.0
SIMILAR_PRICE_ADJACENT_WEIGHT = 1.5
SIMILAR_NEIGHBORHOOD_WEIGHT = 2.0
SIMILAR_FEATURE_WEIGHT = 0.5
SIMILAR_RATING_WEIGHT = 1.0


def normalize(scores: Mapping[str, float]) -> dict[str, float]:
    """Divide every score by the maximum so the top entry becomes exactly 1.0.

    Callers only pass strictly positive scores.
    """
    if not scores:
        return {}
    max_score = max(scores.values())
    return {key: value / max_score for key, value in scores.items()}


def rank(scores: Mapping[str, float], limit: int) -> list[str]:
    """Ids by score descending; equal scores fall back to id ascending."""
    ordered = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
    return [key for key, _ in ordered[:limit]]


def shared_feature_count(a: RestaurantRecord, b: RestaurantRecord) -> int:
    return len(a.features & b.features)


def liked_restaurants(bookings: Iterable[BookingRecord]) -> list[RestaurantRecord]:
    """Restaurants of bookings whose review rated the visit 4 or higher."""
    return [
        b.restaurant
        for b in bookings
        if b.review is not None
        and b.review.rating >= LIKED_RATING_THRESHOLD
        and b.restaurant is not None
    ]


def neighbor_booking_scores(
    neighbor_bookings: Iterable[BookingRecord],
    booked_ids: set[str],
) -> dict[str, float]:
    """Normalized booking tally per restaurant, skipping restaurants already booked.

    Every booking counts, so repeat visits by one neighbor add up.
    """
    counts = Counter(b.restaurant_id for b in neighbor_bookings if b.restaurant_id not in booked_ids)
    return normalize({rid: float(count) for rid, count in counts.items()})


def price_in_range(price_range: int, preferences: PreferencesRecord) -> bool:
    """Inclusive bounds check.

    A missing lower bound is open. A missing upper bound never matches.
    """
    if preferences.price_range_max is None:
        return False
    low = preferences.price_range_min or 0
    return low <= price_range <= preferences.price_range_max


def content_score(
    candidate: RestaurantRecord,
    preferences: PreferencesRecord | None,
    liked: Iterable[RestaurantRecord],
) -> float:
    """Attribute affinity of one candidate to a user's tastes."""
    score = 0.0

    if preferences is not None:
        if candidate.cuisine in preferences.cuisine_preferences:
            score += PREFERRED_CUISINE_WEIGHT
        if price_in_range(candidate.price_range, preferences):
            score += PREFERRED_PRICE_WEIGHT
        if candidate.neighborhood in preferences.preferred_neighborhoods:
            score += PREFERRED_NEIGHBORHOOD_WEIGHT

    for restaurant in liked:
        if restaurant.cuisine == candidate.cuisine:
            score += LIKED_CUISINE_WEIGHT
        if abs(restaurant.price_range - candidate.price_range) <= 1:
            score += LIKED_PRICE_WEIGHT
        score += shared_feature_count(restaurant, candidate) * LIKED_FEATURE_WEIGHT

    if candidate.rating:
        score += (candidate.rating / 5.0) * RATING_BOOST_WEIGHT

    return score


def content_scores(
    restaurants: Iterable[RestaurantRecord],
    bookings: Iterable[BookingRecord],
    preferences: PreferencesRecord | None,
) -> dict[str, float]:
    """Normalized content scores for every unbooked, positively scoring restaurant."""
    bookings = list(bookings)
    booked_ids = {b.restaurant_id for b in bookings}
    liked = liked_restaurants(bookings)

    scores: dict[str, float] = {}
    for restaurant in restaurants:
        if restaurant.id in booked_ids:
            continue
        score = content_score(restaurant, preferences, liked)
        if score > 0:
            scores[restaurant.id] = score
    return normalize(scores)


def blend(
    collaborative: Mapping[str, float],
    content: Mapping[str, float],
    alpha: float,
) -> dict[str, float]:
    """Linear blend over the union of keys; a missing side counts as zero."""
    combined: dict[str, float] = {}
    for rid, score in collaborative.items():
        combined[rid] = combined.get(rid, 0.0) + score * alpha
    for rid, score in content.items():
        combined[rid] = combined.get(rid, 0.0) + score * (1.0 - alpha)
    return combined


def similarity_score(candidate: RestaurantRecord, target: RestaurantRecord) -> float:
    """Shared-attribute score between two restaurants."""
    score = 0.0

    if candidate.cuisine == target.cuisine:
        score += SIMILAR_CUISINE_WEIGHT

    price_gap = abs(candidate.price_range - target.price_range)
    if price_gap == 0:
        score += SIMILAR_PRICE_EXACT_WEIGHT
    elif price_gap == 1:
        score += SIMILAR_PRICE_ADJACENT_WEIGHT

    if candidate.neighborhood == target.neighborhood:
        score += SIMILAR_NEIGHBORHOOD_WEIGHT

    score += shared_feature_count(candidate, target) * SIMILAR_FEATURE_WEIGHT

    if candidate.rating and target.rating:
        rating_diff = abs(candidate.rating - target.rating)
        score += (1 - rating_diff / 5) * SIMILAR_RATING_WEIGHT

    return score


def top_rated(restaurants: Iterable[RestaurantRecord], limit: int) -> list[RestaurantRecord]:
    """Order by rating, then review count, both descending."""
    ordered = sorted(
        restaurants,
        key=lambda r: (-(r.rating or 0.0), -(r.review_count or 0), r.id),
    )
    return ordered[:limit]
