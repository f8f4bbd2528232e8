"""Tests for the hybrid recommender running against the SQLAlchemy data adapter."""

import pytest

from app.adapters.recommender.hybrid import HybridRecommenderAdapter


@pytest.fixture
def recommender(data) -> HybridRecommenderAdapter:
    return HybridRecommenderAdapter(data=data)


# ── Trending ───────────────────────────────────────


async def test_trending_orders_by_recent_booking_count(factory, recommender):
    diner = await factory.user()
    quiet = await factory.restaurant(name="Quiet", rating=5.0)
    busy = await factory.restaurant(name="Busy")
    medium = await factory.restaurant(name="Medium")
    for _ in range(3):
        await factory.booking(diner, busy)
    for _ in range(2):
        await factory.booking(diner, medium)
    # Old bookings fall outside the window.
    for _ in range(5):
        await factory.booking(diner, quiet, days_ago=10)

    trending = await recommender.trending(limit=10)

    assert [r.id for r in trending] == [busy.id, medium.id]


async def test_trending_respects_limit(factory, recommender):
    diner = await factory.user()
    for _ in range(4):
        await factory.booking(diner, await factory.restaurant())

    assert len(await recommender.trending(limit=2)) == 2


async def test_trending_falls_back_to_rating_without_recent_bookings(factory, recommender):
    diner = await factory.user()
    good = await factory.restaurant(rating=4.2, review_count=10)
    best = await factory.restaurant(rating=4.9, review_count=3)
    popular = await factory.restaurant(rating=4.2, review_count=80)
    await factory.booking(diner, good, days_ago=8)
    await factory.booking(diner, good, days_ago=30)

    trending = await recommender.trending(limit=3)

    assert [r.id for r in trending] == [best.id, popular.id, good.id]


# ── Recommend ──────────────────────────────────────


async def test_recommend_without_history_is_trending(factory, recommender):
    newcomer = await factory.user()
    other = await factory.user()
    italian = await factory.restaurant(cuisine="Italian", price_range=1)
    burgers = await factory.restaurant(cuisine="American", price_range=3)
    await factory.booking(other, burgers)
    await factory.preferences(
        newcomer, cuisine_preferences=["Italian"], price_range_min=1, price_range_max=2
    )

    recommended = await recommender.recommend(newcomer.id, limit=5)

    assert recommended == await recommender.trending(limit=5)
    assert [r.id for r in recommended] == [burgers.id]
    assert italian.id not in [r.id for r in recommended]


async def test_recommend_excludes_booked_and_has_no_duplicates(factory, recommender):
    diner = await factory.user()
    neighbor = await factory.user()
    visited = await factory.restaurant(cuisine="Thai", rating=4.0)
    candidates = [
        await factory.restaurant(cuisine="Thai", rating=3.5),
        await factory.restaurant(cuisine="Greek", rating=4.5),
        await factory.restaurant(cuisine="Thai", rating=4.8),
    ]
    await factory.booking(diner, visited, rating=5)
    await factory.booking(neighbor, visited)
    await factory.booking(neighbor, candidates[0])

    recommended = await recommender.recommend(diner.id, limit=2)
    ids = [r.id for r in recommended]

    assert len(ids) <= 2
    assert len(ids) == len(set(ids))
    assert visited.id not in ids


async def test_recommend_blends_collaborative_and_content(factory, recommender):
    diner = await factory.user()
    neighbor = await factory.user()
    shared = await factory.restaurant(cuisine="Thai", price_range=1)
    # Only the neighbor's pick has collaborative signal; the rated one wins on content.
    neighbor_pick = await factory.restaurant(cuisine="Greek", price_range=4, rating=1.0)
    well_rated = await factory.restaurant(cuisine="Greek", price_range=4, rating=5.0)
    await factory.booking(diner, shared)
    await factory.booking(neighbor, shared)
    await factory.booking(neighbor, neighbor_pick)

    recommended = await recommender.recommend(diner.id, limit=10)

    # neighbor_pick: 0.4 * 1.0 + 0.6 * 0.2 = 0.52; well_rated: 0.6 * 1.0 = 0.6
    assert [r.id for r in recommended] == [well_rated.id, neighbor_pick.id]


async def test_recommend_returns_score_order_not_storage_order(
    factory, recommender, monkeypatch
):
    diner = await factory.user()
    visited = await factory.restaurant()
    y = await factory.restaurant(name="Y")
    x = await factory.restaurant(name="X")
    await factory.booking(diner, visited)

    async def fake_collaborative(user_id, bookings):
        return {x.id: 1.0}

    async def fake_content(user_id, bookings, preferences):
        return {x.id: 0.5, y.id: 1.0}

    monkeypatch.setattr(recommender, "collaborative_scores", fake_collaborative)
    monkeypatch.setattr(recommender, "content_scores", fake_content)

    recommended = await recommender.recommend(diner.id, limit=10)

    assert [r.id for r in recommended] == [x.id, y.id]


async def test_recommend_falls_back_when_no_candidates(factory, recommender):
    diner = await factory.user()
    only = await factory.restaurant(rating=4.0)
    await factory.booking(diner, only)

    recommended = await recommender.recommend(diner.id, limit=5)

    assert [r.id for r in recommended] == [only.id]
    assert recommended == await recommender.trending(limit=5)


# ── Collaborative scorer ───────────────────────────


async def test_collaborative_scores_tally_neighbor_bookings(factory, data, recommender):
    diner = await factory.user()
    neighbor_a = await factory.user()
    neighbor_b = await factory.user()
    stranger = await factory.user()
    shared = await factory.restaurant()
    x = await factory.restaurant()
    y = await factory.restaurant()
    unrelated = await factory.restaurant()
    await factory.booking(diner, shared)
    await factory.booking(neighbor_a, shared)
    await factory.booking(neighbor_b, shared)
    await factory.booking(neighbor_a, x)
    await factory.booking(neighbor_a, x)
    await factory.booking(neighbor_b, y)
    await factory.booking(neighbor_b, shared)
    await factory.booking(stranger, unrelated)

    bookings = await data.get_user_bookings(diner.id)
    scores = await recommender.collaborative_scores(diner.id, bookings)

    assert scores == {x.id: 1.0, y.id: 0.5}


async def test_collaborative_scores_without_neighbors(factory, data, recommender):
    diner = await factory.user()
    await factory.booking(diner, await factory.restaurant())

    bookings = await data.get_user_bookings(diner.id)

    assert await recommender.collaborative_scores(diner.id, bookings) == {}


async def test_collaborative_neighbor_limit(factory, data):
    diner = await factory.user()
    shared = await factory.restaurant()
    await factory.booking(diner, shared)
    picks = []
    for _ in range(3):
        neighbor = await factory.user()
        await factory.booking(neighbor, shared)
        pick = await factory.restaurant()
        await factory.booking(neighbor, pick)
        picks.append(pick.id)

    recommender = HybridRecommenderAdapter(data=data, neighbor_limit=1)
    bookings = await data.get_user_bookings(diner.id)
    scores = await recommender.collaborative_scores(diner.id, bookings)

    assert len(scores) == 1
    assert set(scores) <= set(picks)


# ── Content scorer ─────────────────────────────────


async def test_content_scores_use_preferences_and_reviews(factory, data, recommender):
    diner = await factory.user()
    liked = await factory.restaurant(cuisine="Italian", price_range=2, features=["patio"])
    twin = await factory.restaurant(cuisine="Italian", price_range=2, features=["patio"])
    far = await factory.restaurant(cuisine="Korean", price_range=4, neighborhood="Queens")
    await factory.booking(diner, liked, rating=5)
    await factory.preferences(diner, preferred_neighborhoods=["Queens"], price_range_min=4)

    bookings = await data.get_user_bookings(diner.id)
    prefs = await data.get_user_preferences(diner.id)
    scores = await recommender.content_scores(diner.id, bookings, prefs)

    assert liked.id not in scores
    # twin: 1.0 + 0.5 + 0.3 = 1.8; far: 2.0 + 1.5 = 3.5
    assert scores[far.id] == 1.0
    assert scores[twin.id] == pytest.approx(1.8 / 3.5)


# ── Similar ────────────────────────────────────────


async def test_similar_to_unknown_restaurant(recommender):
    assert await recommender.similar_to("does-not-exist", limit=5) == []


async def test_similar_to_scenario(factory, recommender):
    a = await factory.restaurant(
        cuisine="Italian", price_range=2, neighborhood="SoHo", rating=4.5,
        features=["outdoor", "bar"],
    )
    b = await factory.restaurant(
        cuisine="Italian", price_range=2, neighborhood="SoHo", rating=4.0,
        features=["outdoor"],
    )
    c = await factory.restaurant(
        cuisine="Mexican", price_range=4, neighborhood="Harlem", rating=4.8, features=[],
    )

    similar = await recommender.similar_to(a.id, limit=2)

    assert [r.id for r in similar] == [b.id, c.id]


async def test_similar_to_excludes_target_and_respects_limit(factory, recommender):
    target = await factory.restaurant()
    for _ in range(4):
        await factory.restaurant()

    similar = await recommender.similar_to(target.id, limit=3)

    assert len(similar) == 3
    assert target.id not in [r.id for r in similar]
