"""Build the booking platform clients from settings."""

from app.adapters.platforms.mock import OpenTableMockAdapter, ResyMockAdapter
from app.config import Settings
from app.domain.enums import Platform
from app.ports.booking_platform import BookingPlatformPort


def build_platform_clients(settings: Settings) -> dict[Platform, BookingPlatformPort]:
    """Return one client per external platform. Direct bookings have none."""
    return {
        Platform.RESY: ResyMockAdapter(
            api_key=settings.resy_api_key,
            latency=settings.resy_latency_seconds,
            booking_failure_rate=settings.resy_booking_failure_rate,
        ),
        Platform.OPENTABLE: OpenTableMockAdapter(
            client_id=settings.opentable_client_id,
            client_secret=settings.opentable_client_secret,
            latency=settings.opentable_latency_seconds,
            booking_failure_rate=settings.opentable_booking_failure_rate,
        ),
    }
