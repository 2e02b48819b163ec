"""Tests for SubscriptionService."""

import pytest

from notefeed.core.exceptions import ConflictError, NotFoundError
from notefeed.core.services.subscription_service import SubscriptionService


@pytest.fixture
def service(test_session):
    return SubscriptionService(test_session)


@pytest.mark.asyncio
async def test_subscribe_and_status(service, make_user):
    alice = await make_user()
    bob = await make_user()

    assert await service.is_subscribed(bob.id, alice.id) is False
    await service.subscribe(bob.id, alice.id)
    assert await service.is_subscribed(bob.id, alice.id) is True
    # edges are directed
    assert await service.is_subscribed(alice.id, bob.id) is False


@pytest.mark.asyncio
async def test_subscribe_rejections(service, make_user):
    alice = await make_user()
    bob = await make_user()
    await service.subscribe(bob.id, alice.id)

    with pytest.raises(ConflictError) as exc:
        await service.subscribe(bob.id, bob.id)
    assert exc.value.message == "Cannot subscribe to yourself"

    with pytest.raises(ConflictError) as exc:
        await service.subscribe(bob.id, alice.id)
    assert exc.value.message == "Already subscribed to this user"

    with pytest.raises(NotFoundError) as exc:
        await service.subscribe(bob.id, 999)
    assert exc.value.message == "Author not found"

    authors = await service.list_authors(bob.id)
    assert authors.pagination.total == 1


@pytest.mark.asyncio
async def test_unsubscribe(service, make_user):
    alice = await make_user()
    bob = await make_user()

    with pytest.raises(NotFoundError) as exc:
        await service.unsubscribe(bob.id, alice.id)
    assert exc.value.message == "Subscription not found"

    await service.subscribe(bob.id, alice.id)
    await service.unsubscribe(bob.id, alice.id)
    assert await service.is_subscribed(bob.id, alice.id) is False


@pytest.mark.asyncio
async def test_listings_are_ordered_by_user_id(service, make_user):
    star = await make_user(username="star")
    fans = [await make_user(username=f"fan{i}") for i in range(3)]
    for fan in reversed(fans):
        await service.subscribe(fan.id, star.id)
        await service.subscribe(star.id, fan.id)

    subscribers = await service.list_subscribers(star.id)
    assert [u.username for u in subscribers.items] == ["fan0", "fan1", "fan2"]
    assert subscribers.items[0].model_dump() == {
        "id": fans[0].id,
        "username": "fan0",
        "email": "fan0@example.com",
    }

    authors = await service.list_authors(star.id, page=2, limit=2)
    assert [u.username for u in authors.items] == ["fan2"]
    assert authors.pagination.total == 3
