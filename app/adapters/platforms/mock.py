"""Simulated Resy and OpenTable clients with configurable latency and failure rates."""

import asyncio
import logging
import random
import string
from datetime import datetime

from app.domain.enums import BookingStatus
from app.ports.booking_platform import (
    BookingPlatformError,
    BookingPlatformPort,
    GuestDetails,
    PlatformBooking,
    SlotOffer,
)

logger = logging.getLogger(__name__)

_CONFIRMATION_CHARS = string.ascii_uppercase + string.digits
_TOKEN_CHARS = string.ascii_lowercase + string.digits


class MockBookingPlatformAdapter(BookingPlatformPort):
    """
    Simulated reservation platform for development and testing.

    Sleeps for a fixed latency on every call and fails booking, cancel and
    modify requests at configurable rates. Availability is random per slot.
    Pass a seeded ``random.Random`` for reproducible behavior.
    """

    name = "mock"
    slot_times: tuple[str, ...] = ()
    confirmation_prefix = "MOCK-"
    confirmation_length = 8
    token_prefix = "tok_"
    token_length = 13

    booking_failure_message = "Time slot no longer available"
    cancel_failure_message = "Booking not found or past cancellation window"
    modify_failure_message = "New time slot not available"

    def __init__(
        self,
        latency: float,
        availability_rate: float,
        booking_failure_rate: float,
        cancel_failure_rate: float,
        modify_failure_rate: float,
        rng: random.Random | None = None,
    ) -> None:
        self._latency = latency
        self._availability_rate = availability_rate
        self._booking_failure_rate = booking_failure_rate
        self._cancel_failure_rate = cancel_failure_rate
        self._modify_failure_rate = modify_failure_rate
        self._rng = rng or random.Random()

    async def get_availability(
        self, restaurant_id: str, date: datetime, party_size: int
    ) -> list[SlotOffer]:
        await self._simulate_latency()
        logger.info(
            "%s: availability for %s on %s (party of %d)",
            self.name, restaurant_id, date.date(), party_size,
        )
        # Availability and token are drawn independently.
        return [
            SlotOffer(
                date=date,
                time=time,
                party_size=party_size,
                available=self._rng.random() < self._availability_rate,
                token=self._token() if self._rng.random() < self._availability_rate else None,
            )
            for time in self.slot_times
        ]

    async def book_slot(
        self,
        token: str,
        restaurant_id: str,
        date: datetime,
        time: str,
        party_size: int,
        guest: GuestDetails,
        special_requests: str | None = None,
    ) -> PlatformBooking:
        await self._simulate_latency()
        self._maybe_fail(self._booking_failure_rate, self.booking_failure_message)

        booking = PlatformBooking(
            confirmation_id=self.confirmation_prefix + self._confirmation_id(),
            restaurant_id=restaurant_id,
            date=date,
            time=time,
            party_size=party_size,
            status=BookingStatus.CONFIRMED,
            guest=guest,
        )
        logger.info("%s: booked %s (%s)", self.name, booking.confirmation_id, restaurant_id)
        return booking

    async def get_booking(self, confirmation_id: str) -> PlatformBooking:
        await self._simulate_latency()
        return self._placeholder_booking(confirmation_id)

    async def cancel_booking(self, confirmation_id: str) -> None:
        await self._simulate_latency()
        self._maybe_fail(self._cancel_failure_rate, self.cancel_failure_message)
        logger.info("%s: cancelled %s", self.name, confirmation_id)

    async def modify_booking(
        self,
        confirmation_id: str,
        new_date: datetime | None = None,
        new_time: str | None = None,
        new_party_size: int | None = None,
    ) -> PlatformBooking:
        await self._simulate_latency()
        self._maybe_fail(self._modify_failure_rate, self.modify_failure_message)

        original = await self.get_booking(confirmation_id)
        return PlatformBooking(
            confirmation_id=original.confirmation_id,
            restaurant_id=original.restaurant_id,
            date=new_date or original.date,
            time=new_time or original.time,
            party_size=new_party_size or original.party_size,
            status=original.status,
            guest=original.guest,
        )

    async def search_restaurants(self, query: str, location: str) -> list[dict]:
        await self._simulate_latency()
        return []

    def _placeholder_booking(self, confirmation_id: str) -> PlatformBooking:
        return PlatformBooking(
            confirmation_id=confirmation_id,
            restaurant_id="mock-restaurant-id",
            date=datetime.now(),
            time="19:00",
            party_size=2,
            status=BookingStatus.CONFIRMED,
            guest=GuestDetails(name="Mock User", email="mock@example.com"),
        )

    async def _simulate_latency(self) -> None:
        if self._latency > 0:
            await asyncio.sleep(self._latency)

    def _maybe_fail(self, rate: float, message: str) -> None:
        if self._rng.random() < rate:
            logger.warning("%s: simulated failure: %s", self.name, message)
            raise BookingPlatformError(self.name, message)

    def _token(self) -> str:
        return self.token_prefix + "".join(
            self._rng.choice(_TOKEN_CHARS) for _ in range(self.token_length)
        )

    def _confirmation_id(self) -> str:
        return "".join(
            self._rng.choice(_CONFIRMATION_CHARS) for _ in range(self.confirmation_length)
        )


class ResyMockAdapter(MockBookingPlatformAdapter):
    """Simulated Resy API client."""

    name = "resy"
    slot_times = ("17:00", "17:30", "18:00", "18:30", "19:00", "19:30", "20:00", "20:30", "21:00")
    confirmation_prefix = "RESY-"
    confirmation_length = 8

    def __init__(
        self,
        api_key: str = "mock-api-key",
        latency: float = 0.3,
        booking_failure_rate: float = 0.05,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(
            latency=latency,
            availability_rate=0.7,
            booking_failure_rate=booking_failure_rate,
            cancel_failure_rate=0.02,
            modify_failure_rate=0.10,
            rng=rng,
        )
        self._api_key = api_key


class OpenTableMockAdapter(MockBookingPlatformAdapter):
    """Simulated OpenTable API client."""

    name = "opentable"
    slot_times = (
        "17:00", "17:30", "18:00", "18:30", "19:00",
        "19:30", "20:00", "20:30", "21:00", "21:30",
    )
    confirmation_prefix = "OT-"
    confirmation_length = 10
    token_prefix = "ottoken_"
    token_length = 16

    booking_failure_message = "Table no longer available"
    cancel_failure_message = "Reservation not found"
    modify_failure_message = "Requested time not available"

    def __init__(
        self,
        client_id: str = "mock-client-id",
        client_secret: str = "mock-client-secret",
        latency: float = 0.25,
        booking_failure_rate: float = 0.03,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(
            latency=latency,
            availability_rate=0.6,
            booking_failure_rate=booking_failure_rate,
            cancel_failure_rate=0.01,
            modify_failure_rate=0.08,
            rng=rng,
        )
        self._client_id = client_id
        self._client_secret = client_secret

    def _placeholder_booking(self, confirmation_id: str) -> PlatformBooking:
        return PlatformBooking(
            confirmation_id=confirmation_id,
            restaurant_id="mock-restaurant-id",
            date=datetime.now(),
            time="19:30",
            party_size=4,
            status=BookingStatus.CONFIRMED,
            guest=GuestDetails(name="Mock User", email="mock@example.com"),
        )
