"""Subscription Creation Rules — eligibility, total cost and expiry computation.

Invariants:
    - Checks run in a fixed order and the FIRST failure wins:
      subscriber != plan.creator, payee == plan.creator,
      total_required computed without overflow, balance >= total_required
    - total_required = price + subscription rent + TRANSACTION_FEE_BUFFER (checked u64)
    - expires_at = now + duration_days * 86400 (checked i64), computed from ONE clock read
    - created_at and the base of expires_at are the same `now`
    - plan_id and creator are taken from the referenced plan, never from the caller

Design Decisions:
    - Only plan.price moves to the creator; rent and the fee buffer are cost
      checks here, charged (rent) or left untouched (buffer) by the shell
"""

from submarket.core.checked_math import checked_add, checked_add_i64, checked_mul_i64
from submarket.core.domain_types import (
    Identity, UnixTimestamp, SECONDS_PER_DAY, TRANSACTION_FEE_BUFFER,
)
from submarket.core.errors import (
    CannotSubscribeToOwnPlanError,
    CreatorMismatchError,
    InsufficientFundsError,
)
from submarket.core.record_address import derive_subscription_address
from submarket.core.records import PlanRecord, SubscriptionRecord


def check_subscription_eligibility(
    subscriber: Identity, plan: PlanRecord, creator_account: Identity,
) -> None:
    """Checks 1-2: no self-subscription, payee must be the plan's creator."""
    if subscriber == plan.creator:
        raise CannotSubscribeToOwnPlanError()
    if creator_account != plan.creator:
        raise CreatorMismatchError()


def compute_total_required(price: int, subscription_rent: int) -> int:
    """Check 3: price + rent + fee buffer, overflow-checked."""
    with_rent = checked_add(price, subscription_rent)
    return checked_add(with_rent, TRANSACTION_FEE_BUFFER)


def check_subscriber_funds(balance: int, total_required: int) -> None:
    """Check 4."""
    if balance < total_required:
        raise InsufficientFundsError(balance, total_required)


def compute_expires_at(now: UnixTimestamp, duration_days: int) -> UnixTimestamp:
    duration_seconds = checked_mul_i64(duration_days, SECONDS_PER_DAY)
    return UnixTimestamp(checked_add_i64(now, duration_seconds))


def build_subscription_record(
    subscriber: Identity, plan: PlanRecord, now: UnixTimestamp,
) -> SubscriptionRecord:
    return SubscriptionRecord(
        address=derive_subscription_address(subscriber, plan.creator, plan.plan_id),
        subscriber=subscriber,
        creator=plan.creator,
        plan_id=plan.plan_id,
        created_at=now,
        expires_at=compute_expires_at(now, plan.duration_days),
    )
