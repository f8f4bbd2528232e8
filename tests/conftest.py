import random
from collections.abc import AsyncGenerator
from datetime import datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.adapters.data.sqlalchemy_store import SQLAlchemyRestaurantData
from app.adapters.platforms.mock import OpenTableMockAdapter, ResyMockAdapter
from app.api.dependencies import get_booking_platforms
from app.api.middleware.auth import create_access_token
from app.database import get_session
from app.domain.enums import Platform
from app.domain.models import (
    AvailabilitySlot,
    Base,
    Booking,
    Restaurant,
    Review,
    User,
    UserPreference,
    utcnow,
)
from app.main import app

BASE = "http://test"


@pytest.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker, None]:
    """A fresh SQLite database per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as s:
        yield s


@pytest.fixture
async def data(session_factory) -> AsyncGenerator[SQLAlchemyRestaurantData, None]:
    """Data port on its own session, so reads never see factory identity-map state."""
    async with session_factory() as s:
        yield SQLAlchemyRestaurantData(s)


class DataFactory:
    """Inserts and commits rows for tests."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._counter = 0

    async def _save(self, obj):
        self._session.add(obj)
        await self._session.commit()
        return obj

    async def user(self, **overrides) -> User:
        self._counter += 1
        fields = {"email": f"diner{self._counter}@example.com", "name": "Ada Diner"}
        fields.update(overrides)
        return await self._save(User(**fields))

    async def restaurant(self, **overrides) -> Restaurant:
        self._counter += 1
        fields = {
            "name": f"Restaurant {self._counter}",
            "cuisine": "American",
            "price_range": 2,
            "neighborhood": "Midtown",
            "address": f"{self._counter} Main St",
            "rating": 0.0,
            "review_count": 0,
            "features": [],
        }
        fields.update(overrides)
        return await self._save(Restaurant(**fields))

    async def booking(
        self,
        user: User,
        restaurant: Restaurant,
        days_ago: float = 1,
        rating: int | None = None,
    ) -> Booking:
        created = utcnow() - timedelta(days=days_ago)
        booking = Booking(
            user_id=user.id,
            restaurant_id=restaurant.id,
            date=created + timedelta(days=3),
            time="19:00",
            party_size=2,
            status="confirmed",
            platform=Platform.DIRECT.value,
            created_at=created,
        )
        await self._save(booking)
        if rating is not None:
            await self._save(
                Review(
                    user_id=user.id,
                    restaurant_id=restaurant.id,
                    booking_id=booking.id,
                    rating=rating,
                )
            )
        return booking

    async def preferences(self, user: User, **overrides) -> UserPreference:
        fields = {
            "user_id": user.id,
            "cuisine_preferences": [],
            "price_range_min": 1,
            "price_range_max": 4,
            "preferred_neighborhoods": [],
        }
        fields.update(overrides)
        return await self._save(UserPreference(**fields))

    async def slot(
        self,
        restaurant: Restaurant,
        date: datetime,
        time: str = "19:00",
        party_size: int = 2,
        platform: Platform = Platform.RESY,
    ) -> AvailabilitySlot:
        return await self._save(
            AvailabilitySlot(
                restaurant_id=restaurant.id,
                date=date,
                time=time,
                party_size=party_size,
                platform=platform.value,
                available=True,
            )
        )


@pytest.fixture
def factory(session: AsyncSession) -> DataFactory:
    return DataFactory(session)


@pytest.fixture
def platforms():
    """Zero-latency platform clients that never fail."""
    return {
        Platform.RESY: ResyMockAdapter(latency=0, booking_failure_rate=0.0, rng=random.Random(7)),
        Platform.OPENTABLE: OpenTableMockAdapter(
            latency=0, booking_failure_rate=0.0, rng=random.Random(7)
        ),
    }


@pytest.fixture
async def client(session_factory, platforms) -> AsyncGenerator[AsyncClient, None]:
    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_booking_platforms] = lambda: platforms
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Build bearer headers for a user."""

    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers
