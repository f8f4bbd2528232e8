"""Pydantic request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.domain.enums import BookingStatus, Platform


# ── Restaurants ────────────────────────────────────


class RestaurantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None
    cuisine: str
    price_range: int
    neighborhood: str
    address: str
    phone: str | None = None
    website: str | None = None
    image_url: str | None = None
    rating: float | None = None
    review_count: int = 0
    features: list[str] = Field(default_factory=list)
    resy_enabled: bool = False
    opentable_enabled: bool = False

    @model_validator(mode="after")
    def sort_features(self) -> "RestaurantResponse":
        self.features = sorted(self.features)
        return self


class ReviewAuthor(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str | None = None
    image: str | None = None


class ReviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    restaurant_id: str
    booking_id: str | None
    rating: int
    text: str | None
    created_at: datetime
    user: ReviewAuthor | None = None


class RestaurantDetailResponse(RestaurantResponse):
    reviews: list[ReviewResponse] = Field(default_factory=list)


class SlotOfferResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: datetime
    time: str
    party_size: int
    available: bool
    token: str | None = None


class AvailabilityResponse(BaseModel):
    restaurant_id: str
    platform: Platform
    slots: list[SlotOfferResponse]


# ── Reviews ────────────────────────────────────────


class ReviewCreateRequest(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    text: str | None = Field(default=None, max_length=5000)
    booking_id: str | None = None


# ── Bookings ───────────────────────────────────────


class BookingCreateRequest(BaseModel):
    restaurant_id: str = Field(..., min_length=1)
    date: datetime
    time: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    party_size: int = Field(..., ge=1, le=20)
    platform: Platform
    special_requests: str | None = Field(default=None, max_length=1000)


class BookingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    restaurant_id: str
    date: datetime
    time: str
    party_size: int
    status: BookingStatus
    platform: Platform
    external_booking_id: str | None
    special_requests: str | None
    created_at: datetime
    restaurant: RestaurantResponse | None = None


# ── Preferences ────────────────────────────────────


class PreferencesRequest(BaseModel):
    cuisine_preferences: list[str] = Field(default_factory=list)
    price_range_min: int = Field(default=1, ge=1, le=4)
    price_range_max: int = Field(default=4, ge=1, le=4)
    dietary_restrictions: list[str] = Field(default_factory=list)
    preferred_neighborhoods: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_price_bounds(self) -> "PreferencesRequest":
        if self.price_range_min > self.price_range_max:
            raise ValueError("price_range_min must not exceed price_range_max")
        return self


class PreferencesResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    cuisine_preferences: list[str]
    price_range_min: int
    price_range_max: int
    dietary_restrictions: list[str]
    preferred_neighborhoods: list[str]
