"""Enumerations shared by the ORM models, ports and API schemas."""

from enum import Enum


class Platform(str, Enum):
    RESY = "resy"
    OPENTABLE = "opentable"
    DIRECT = "direct"


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"
    CANCELLED = "cancelled"
