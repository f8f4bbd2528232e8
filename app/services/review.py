"""Review submission service with booking constraint enforcement."""

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.schemas import ReviewCreateRequest
from app.domain.models import Booking, Restaurant, Review


class ReviewService:
    """Handles review creation with booking validation."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_review(
        self, restaurant_id: str, user_id: str, data: ReviewCreateRequest
    ) -> Review:
        """
        Submit a review for a restaurant.

        Constraint: The user must have booked the restaurant. The review is
        attached to the given booking, or to the user's most recent booking
        there that has no review yet. Raises 403 without a booking and 409
        when every booking is already reviewed.
        """
        restaurant = await self._session.get(Restaurant, restaurant_id)
        if restaurant is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Restaurant not found",
            )

        stmt = select(Booking).where(
            Booking.restaurant_id == restaurant_id,
            Booking.user_id == user_id,
        )
        if data.booking_id:
            stmt = stmt.where(Booking.id == data.booking_id)
        result = await self._session.execute(stmt.order_by(Booking.date.desc()))
        bookings = list(result.scalars().all())
        if not bookings:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You must book a restaurant before reviewing it",
            )

        booking = next((b for b in bookings if b.review is None), None)
        if booking is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="This booking has already been reviewed",
            )

        review = Review(
            user_id=user_id,
            restaurant_id=restaurant_id,
            booking_id=booking.id,
            rating=data.rating,
            text=data.text,
        )
        self._session.add(review)
        await self._session.flush()

        await self._refresh_rating(restaurant)
        await self._session.refresh(review, attribute_names=["user"])
        return review

    async def _refresh_rating(self, restaurant: Restaurant) -> None:
        """Recompute the restaurant's average rating and review count."""
        stats = await self._session.execute(
            select(
                func.count(Review.id).label("total"),
                func.avg(Review.rating).label("avg_rating"),
            ).where(Review.restaurant_id == restaurant.id)
        )
        row = stats.one()
        restaurant.review_count = row.total or 0
        restaurant.rating = round(float(row.avg_rating), 2) if row.avg_rating else 0.0
        await self._session.flush()
