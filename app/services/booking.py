"""Booking service: availability checks, platform reservation, persistence."""

import logging

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.schemas import BookingCreateRequest
from app.domain.enums import BookingStatus, Platform
from app.domain.models import AvailabilitySlot, Booking, Restaurant, User
from app.ports.booking_platform import BookingPlatformError, BookingPlatformPort, GuestDetails

logger = logging.getLogger(__name__)

# Platform clients issue their own slot tokens; bookings made through this
# service reference the locally stored slot instead.
LOCAL_SLOT_TOKEN = "local-slot"


class BookingService:
    """Creates and lists a user's restaurant bookings."""

    def __init__(
        self,
        session: AsyncSession,
        platforms: dict[Platform, BookingPlatformPort],
    ) -> None:
        self._session = session
        self._platforms = platforms

    async def list_for_user(self, user_id: str) -> list[Booking]:
        """All bookings of a user, latest reservation date first."""
        result = await self._session.execute(
            select(Booking).where(Booking.user_id == user_id).order_by(Booking.date.desc())
        )
        return list(result.scalars().all())

    async def create_booking(self, user: User, data: BookingCreateRequest) -> Booking:
        """
        Reserve an open slot.

        The slot must exist and be available (400 otherwise). Resy and
        OpenTable bookings are forwarded to the platform; when the platform
        call fails the booking is still recorded, without an external id.
        """
        restaurant = await self._session.get(Restaurant, data.restaurant_id)
        if restaurant is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Restaurant not found",
            )

        slot_result = await self._session.execute(
            select(AvailabilitySlot).where(
                AvailabilitySlot.restaurant_id == data.restaurant_id,
                AvailabilitySlot.date == data.date,
                AvailabilitySlot.time == data.time,
                AvailabilitySlot.party_size == data.party_size,
                AvailabilitySlot.available.is_(True),
            )
        )
        slot = slot_result.scalars().first()
        if slot is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Time slot not available",
            )

        external_booking_id = await self._reserve_on_platform(user, data)

        booking = Booking(
            user_id=user.id,
            restaurant_id=data.restaurant_id,
            date=data.date,
            time=data.time,
            party_size=data.party_size,
            status=BookingStatus.CONFIRMED.value,
            platform=data.platform.value,
            external_booking_id=external_booking_id,
            special_requests=data.special_requests,
        )
        self._session.add(booking)
        slot.available = False
        await self._session.flush()
        await self._session.refresh(booking, attribute_names=["restaurant"])

        logger.info(
            "Booking %s created for user %s at %s (%s)",
            booking.id, user.id, data.restaurant_id, data.platform.value,
        )
        return booking

    async def _reserve_on_platform(
        self, user: User, data: BookingCreateRequest
    ) -> str | None:
        client = self._platforms.get(data.platform)
        if client is None:
            return None

        guest = GuestDetails(name=user.name or "Guest", email=user.email or "")
        try:
            platform_booking = await client.book_slot(
                LOCAL_SLOT_TOKEN,
                data.restaurant_id,
                data.date,
                data.time,
                data.party_size,
                guest,
                special_requests=data.special_requests,
            )
        except BookingPlatformError as exc:
            logger.warning("External booking failed, recording direct booking: %s", exc)
            return None
        return platform_booking.confirmation_id
