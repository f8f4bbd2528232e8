"""SQLAlchemy ORM models."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, relationship


def _new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the timezone-less DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=_new_id)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(200), nullable=True)
    image = Column(String(1000), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    preferences = relationship("UserPreference", back_populates="user", uselist=False)


class UserPreference(Base):
    __tablename__ = "user_preferences"

    id = Column(String(32), primary_key=True, default=_new_id)
    user_id = Column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    cuisine_preferences = Column(JSON, default=list)
    price_range_min = Column(Integer, default=1)
    price_range_max = Column(Integer, default=4)
    dietary_restrictions = Column(JSON, default=list)
    preferred_neighborhoods = Column(JSON, default=list)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="preferences")


class Restaurant(Base):
    __tablename__ = "restaurants"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String(300), nullable=False, index=True)
    description = Column(Text, nullable=True)
    cuisine = Column(String(100), nullable=False, index=True)
    price_range = Column(Integer, nullable=False)
    neighborhood = Column(String(200), nullable=False, index=True)
    address = Column(String(500), nullable=False)
    phone = Column(String(50), nullable=True)
    website = Column(String(1000), nullable=True)
    image_url = Column(String(1000), nullable=True)
    rating = Column(Float, default=0.0)
    review_count = Column(Integer, default=0)
    features = Column(JSON, default=list)
    resy_enabled = Column(Boolean, default=False)
    opentable_enabled = Column(Boolean, default=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class AvailabilitySlot(Base):
    __tablename__ = "availability_slots"

    id = Column(String(32), primary_key=True, default=_new_id)
    restaurant_id = Column(
        String(32), ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False
    )
    date = Column(DateTime, nullable=False)
    time = Column(String(5), nullable=False)
    party_size = Column(Integer, nullable=False)
    available = Column(Boolean, default=True)
    platform = Column(String(20), nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(32), primary_key=True, default=_new_id)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    restaurant_id = Column(String(32), ForeignKey("restaurants.id"), nullable=False)
    date = Column(DateTime, nullable=False)
    time = Column(String(5), nullable=False)
    party_size = Column(Integer, nullable=False)
    status = Column(
        Enum("confirmed", "pending", "cancelled", name="booking_status_enum"),
        nullable=False,
        default="confirmed",
    )
    platform = Column(String(20), nullable=False)
    external_booking_id = Column(String(100), nullable=True)
    special_requests = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    restaurant = relationship("Restaurant", lazy="selectin")
    review = relationship("Review", back_populates="booking", uselist=False, lazy="selectin")


class Review(Base):
    __tablename__ = "reviews"

    id = Column(String(32), primary_key=True, default=_new_id)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    restaurant_id = Column(
        String(32), ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False
    )
    booking_id = Column(
        String(32), ForeignKey("bookings.id", ondelete="SET NULL"), unique=True, nullable=True
    )
    rating = Column(Integer, nullable=False)
    text = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", lazy="selectin")
    booking = relationship("Booking", back_populates="review")
