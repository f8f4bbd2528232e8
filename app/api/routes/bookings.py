"""Booking routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_booking_platforms
from app.api.middleware.auth import get_current_user
from app.api.schemas import BookingCreateRequest, BookingResponse
from app.database import get_session
from app.domain.enums import Platform
from app.domain.models import User
from app.ports.booking_platform import BookingPlatformPort
from app.services.booking import BookingService

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.get("", response_model=list[BookingResponse])
async def list_bookings(
    session: AsyncSession = Depends(get_session),
    user: User = Depends(get_current_user),
) -> list[BookingResponse]:
    bookings = await BookingService(session, {}).list_for_user(user.id)
    return [BookingResponse.model_validate(b) for b in bookings]


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    data: BookingCreateRequest,
    session: AsyncSession = Depends(get_session),
    user: User = Depends(get_current_user),
    platforms: dict[Platform, BookingPlatformPort] = Depends(get_booking_platforms),
) -> BookingResponse:
    """Book an open slot, forwarding to Resy or OpenTable when requested."""
    booking = await BookingService(session, platforms).create_booking(user, data)
    return BookingResponse.model_validate(booking)
