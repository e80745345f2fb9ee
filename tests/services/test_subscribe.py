"""Subscribe service — eligibility, payment, allocation, atomicity.

Invariants:
    - Creator receives exactly plan.price; subscriber pays price + subscription rent
    - Balance boundary: succeeds at price + rent + fee buffer, fails one below
    - Failed subscribe leaves every balance and table untouched
    - Re-subscribing to the same plan fails and undoes its own transfer
    - Plan row is never modified by subscribing
"""

import pytest
from sqlalchemy import func, select

from submarket.core.domain_types import TRANSACTION_FEE_BUFFER
from submarket.core.errors import (
    CannotSubscribeToOwnPlanError,
    CreatorMismatchError,
    InsufficientFundsError,
    MathOverflowError,
    RecordAlreadyInitializedError,
    ResourceNotFoundError,
)
from submarket.core.record_address import derive_subscription_address
from submarket.core.rent import RentSchedule
from submarket.models.plan import Plan
from submarket.models.subscription import Subscription
from submarket.services.create_plan import create_plan
from submarket.services.subscribe import subscribe

CREATOR = "creator-1"
SUBSCRIBER = "subscriber-1"
PRICE = 1000


@pytest.fixture
async def plan(test_session_factory, ledger, clock, rent):
    await ledger.fund(CREATOR, 10_000_000_000)
    async with test_session_factory() as db:
        return await create_plan(db, CREATOR, 1, "NFT Alpha", PRICE, 30, clock, rent)


def _total_required(rent: RentSchedule) -> int:
    return PRICE + rent.subscription_rent + TRANSACTION_FEE_BUFFER


async def _subscription_count(factory) -> int:
    async with factory() as db:
        return (
            await db.execute(select(func.count()).select_from(Subscription))
        ).scalar_one()


async def test_subscribe_creates_record(test_session_factory, ledger, plan, clock, rent):
    await ledger.fund(SUBSCRIBER, 10_000_000_000)

    async with test_session_factory() as db:
        record = await subscribe(db, SUBSCRIBER, plan.address, CREATOR, clock, rent)

    assert record.address == derive_subscription_address(SUBSCRIBER, CREATOR, 1)
    async with test_session_factory() as db:
        row = await db.get(Subscription, record.address)
        assert row.subscriber == SUBSCRIBER
        assert row.creator == CREATOR
        assert row.plan_id == 1
        assert row.plan_address == plan.address
        assert row.created_at == clock.now()
        assert row.expires_at - row.created_at == 2_592_000
        assert row.rent_lamports == rent.subscription_rent


async def test_subscribe_moves_exactly_price(test_session_factory, ledger, plan, clock, rent):
    await ledger.fund(SUBSCRIBER, 10_000_000_000)
    creator_before = await ledger.balance(CREATOR)

    async with test_session_factory() as db:
        await subscribe(db, SUBSCRIBER, plan.address, CREATOR, clock, rent)

    assert await ledger.balance(CREATOR) == creator_before + PRICE
    assert await ledger.balance(SUBSCRIBER) == (
        10_000_000_000 - PRICE - rent.subscription_rent
    )


async def test_subscribe_succeeds_at_exact_total(test_session_factory, ledger, plan, clock, rent):
    await ledger.fund(SUBSCRIBER, _total_required(rent))

    async with test_session_factory() as db:
        await subscribe(db, SUBSCRIBER, plan.address, CREATOR, clock, rent)

    # Fee buffer is required, not charged
    assert await ledger.balance(SUBSCRIBER) == TRANSACTION_FEE_BUFFER


async def test_subscribe_rejects_one_below_total(
    test_session_factory, ledger, plan, clock, rent,
):
    await ledger.fund(SUBSCRIBER, _total_required(rent) - 1)
    creator_before = await ledger.balance(CREATOR)

    async with test_session_factory() as db:
        with pytest.raises(InsufficientFundsError) as exc:
            await subscribe(db, SUBSCRIBER, plan.address, CREATOR, clock, rent)

    assert exc.value.required == _total_required(rent)
    assert await ledger.balance(SUBSCRIBER) == _total_required(rent) - 1
    assert await ledger.balance(CREATOR) == creator_before
    assert await _subscription_count(test_session_factory) == 0


async def test_cannot_subscribe_to_own_plan(test_session_factory, plan, clock, rent):
    async with test_session_factory() as db:
        with pytest.raises(CannotSubscribeToOwnPlanError):
            await subscribe(db, CREATOR, plan.address, CREATOR, clock, rent)


async def test_creator_mismatch(test_session_factory, ledger, plan, clock, rent):
    await ledger.fund(SUBSCRIBER, 10_000_000_000)

    async with test_session_factory() as db:
        with pytest.raises(CreatorMismatchError):
            await subscribe(db, SUBSCRIBER, plan.address, "impostor", clock, rent)

    assert await ledger.balance("impostor") == 0
    assert await ledger.balance(SUBSCRIBER) == 10_000_000_000


async def test_unknown_plan(test_session_factory, clock, rent):
    async with test_session_factory() as db:
        with pytest.raises(ResourceNotFoundError):
            await subscribe(db, SUBSCRIBER, "0" * 64, CREATOR, clock, rent)


async def test_resubscribe_fails_and_rolls_back_payment(
    test_session_factory, ledger, plan, clock, rent,
):
    await ledger.fund(SUBSCRIBER, 10_000_000_000)
    async with test_session_factory() as db:
        first = await subscribe(db, SUBSCRIBER, plan.address, CREATOR, clock, rent)
    subscriber_after_first = await ledger.balance(SUBSCRIBER)
    creator_after_first = await ledger.balance(CREATOR)

    clock.advance(3600)
    async with test_session_factory() as db:
        with pytest.raises(RecordAlreadyInitializedError):
            await subscribe(db, SUBSCRIBER, plan.address, CREATOR, clock, rent)

    assert await ledger.balance(SUBSCRIBER) == subscriber_after_first
    assert await ledger.balance(CREATOR) == creator_after_first
    async with test_session_factory() as db:
        row = await db.get(Subscription, first.address)
        assert row.created_at == first.created_at


async def test_rent_overflow_aborts_before_payment(
    test_session_factory, ledger, plan, clock,
):
    await ledger.fund(SUBSCRIBER, 10_000_000_000)
    runaway_rent = RentSchedule(lamports_per_byte_year=2**60)

    async with test_session_factory() as db:
        with pytest.raises(MathOverflowError):
            await subscribe(db, SUBSCRIBER, plan.address, CREATOR, clock, runaway_rent)

    assert await ledger.balance(SUBSCRIBER) == 10_000_000_000


async def test_subscribing_does_not_touch_plan(
    test_session_factory, ledger, plan, clock, rent,
):
    await ledger.fund(SUBSCRIBER, 10_000_000_000)
    await ledger.fund("subscriber-2", 10_000_000_000)

    async with test_session_factory() as db:
        await subscribe(db, SUBSCRIBER, plan.address, CREATOR, clock, rent)
    async with test_session_factory() as db:
        await subscribe(db, "subscriber-2", plan.address, CREATOR, clock, rent)

    async with test_session_factory() as db:
        row = await db.get(Plan, plan.address)
        assert (row.name, row.price, row.duration_days, row.created_at) == (
            plan.name, plan.price, plan.duration_days, plan.created_at,
        )
    assert await _subscription_count(test_session_factory) == 2


async def test_zero_rent_subscribe_pays_creator_without_account(
    test_session_factory, ledger, clock,
):
    free = RentSchedule(lamports_per_byte_year=0)
    async with test_session_factory() as db:
        fresh_plan = await create_plan(db, "fresh-creator", 1, "Plan", PRICE, 30, clock, free)
    await ledger.fund(SUBSCRIBER, PRICE + TRANSACTION_FEE_BUFFER)

    async with test_session_factory() as db:
        await subscribe(db, SUBSCRIBER, fresh_plan.address, "fresh-creator", clock, free)

    assert await ledger.balance("fresh-creator") == PRICE
    assert await ledger.balance(SUBSCRIBER) == TRANSACTION_FEE_BUFFER


async def test_crossing_subscriptions_between_two_creators(
    test_session_factory, ledger, clock, rent,
):
    await ledger.fund("alice", 10_000_000_000)
    await ledger.fund("bob", 10_000_000_000)
    async with test_session_factory() as db:
        alice_plan = await create_plan(db, "alice", 1, "Alice", PRICE, 30, clock, rent)
    async with test_session_factory() as db:
        bob_plan = await create_plan(db, "bob", 1, "Bob", PRICE, 30, clock, rent)

    async with test_session_factory() as db:
        await subscribe(db, "alice", bob_plan.address, "bob", clock, rent)
    async with test_session_factory() as db:
        await subscribe(db, "bob", alice_plan.address, "alice", clock, rent)

    expected = 10_000_000_000 - rent.plan_rent - rent.subscription_rent
    assert await ledger.balance("alice") == expected
    assert await ledger.balance("bob") == expected
    assert await _subscription_count(test_session_factory) == 2
