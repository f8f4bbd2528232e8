"""Booking platform port: abstract interface for third-party reservation APIs."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import BookingStatus


class BookingPlatformError(Exception):
    """Raised when a booking platform rejects or fails a request."""

    def __init__(self, platform: str, message: str) -> None:
        super().__init__(f"{platform}: {message}")
        self.platform = platform
        self.message = message


@dataclass(frozen=True)
class SlotOffer:
    """A bookable time offered by a platform."""

    date: datetime
    time: str
    party_size: int
    available: bool
    token: str | None = None


@dataclass(frozen=True)
class GuestDetails:
    name: str
    email: str
    phone: str | None = None


@dataclass(frozen=True)
class PlatformBooking:
    """A reservation as confirmed by the external platform."""

    confirmation_id: str
    restaurant_id: str
    date: datetime
    time: str
    party_size: int
    status: BookingStatus
    guest: GuestDetails


class BookingPlatformPort(ABC):
    """Abstraction for an external reservation platform (Resy, OpenTable, ...)."""

    name: str

    @abstractmethod
    async def get_availability(
        self, restaurant_id: str, date: datetime, party_size: int
    ) -> list[SlotOffer]:
        ...

    @abstractmethod
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
        ...

    @abstractmethod
    async def get_booking(self, confirmation_id: str) -> PlatformBooking:
        ...

    @abstractmethod
    async def cancel_booking(self, confirmation_id: str) -> None:
        ...

    @abstractmethod
    async def modify_booking(
        self,
        confirmation_id: str,
        new_date: datetime | None = None,
        new_time: str | None = None,
        new_party_size: int | None = None,
    ) -> PlatformBooking:
        ...

    @abstractmethod
    async def search_restaurants(self, query: str, location: str) -> list[dict]:
        ...
