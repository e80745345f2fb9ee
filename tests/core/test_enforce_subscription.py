"""Subscription Creation Rules — eligibility, total cost, expiry.

Tests cover:
    - Self-subscription rejected before the payee check
    - Payee must equal the plan creator
    - total_required = price + rent + fee buffer, overflow-checked
    - Funds pass at exactly total_required, fail one below
    - expires_at = now + days * 86400 from a single `now`
    - Record keys come from the plan, not the caller
"""

import pytest

from submarket.core.domain_types import I64_MAX, TRANSACTION_FEE_BUFFER, U64_MAX
from submarket.core.enforce_plan import build_plan_record
from submarket.core.enforce_subscription import (
    build_subscription_record,
    check_subscriber_funds,
    check_subscription_eligibility,
    compute_expires_at,
    compute_total_required,
)
from submarket.core.errors import (
    CannotSubscribeToOwnPlanError,
    CreatorMismatchError,
    InsufficientFundsError,
    MathOverflowError,
)
from submarket.core.record_address import derive_subscription_address

NOW = 1_700_000_000


@pytest.fixture
def plan():
    return build_plan_record("creator", 1, "NFT Alpha", 1000, 30, NOW - 10)


# ─── check_subscription_eligibility ──────────────────────────────

def test_eligible_subscriber_passes(plan):
    check_subscription_eligibility("subscriber", plan, "creator")


def test_own_plan_rejected(plan):
    with pytest.raises(CannotSubscribeToOwnPlanError):
        check_subscription_eligibility("creator", plan, "creator")


def test_own_plan_checked_before_creator_mismatch(plan):
    with pytest.raises(CannotSubscribeToOwnPlanError):
        check_subscription_eligibility("creator", plan, "someone-else")


def test_creator_mismatch_rejected(plan):
    with pytest.raises(CreatorMismatchError) as exc:
        check_subscription_eligibility("subscriber", plan, "impostor")
    assert exc.value.http_status == 403


# ─── compute_total_required / check_subscriber_funds ────────────

def test_total_required_sums_price_rent_and_buffer():
    assert compute_total_required(1000, 1_559_040) == 1000 + 1_559_040 + TRANSACTION_FEE_BUFFER


def test_total_required_overflow_raises():
    with pytest.raises(MathOverflowError):
        compute_total_required(U64_MAX - TRANSACTION_FEE_BUFFER, 1)


def test_funds_pass_at_exact_total():
    check_subscriber_funds(10_001_000, 10_001_000)


def test_funds_rejected_one_below_total():
    with pytest.raises(InsufficientFundsError) as exc:
        check_subscriber_funds(10_000_999, 10_001_000)
    assert exc.value.code == "INSUFFICIENT_FUNDS"
    assert exc.value.http_status == 402


# ─── compute_expires_at ─────────────────────────────────────────

def test_thirty_days_is_2_592_000_seconds():
    assert compute_expires_at(NOW, 30) - NOW == 2_592_000


def test_expires_at_overflow_raises():
    with pytest.raises(MathOverflowError):
        compute_expires_at(I64_MAX - 86_399, 1)


def test_expires_at_at_i64_boundary():
    assert compute_expires_at(I64_MAX - 86_400, 1) == I64_MAX


# ─── build_subscription_record ──────────────────────────────────

def test_build_subscription_record(plan):
    record = build_subscription_record("subscriber", plan, NOW)
    assert record.address == derive_subscription_address("subscriber", "creator", 1)
    assert record.subscriber == "subscriber"
    assert record.creator == "creator"
    assert record.plan_id == 1
    assert record.created_at == NOW
    assert record.expires_at == NOW + 30 * 86_400
    assert record.duration_seconds == 2_592_000
