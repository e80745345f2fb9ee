"""Plan Creation Rules — ordered validation and instantiation of a Plan record.

Invariants:
    - Checks run in a fixed order and the FIRST failure wins:
      price > 0, price <= MAX_PLAN_PRICE, duration > 0, duration <= 365,
      trimmed name non-empty, raw name <= 200 bytes, creator balance >= plan rent
    - Name emptiness uses the trimmed string; name length uses the UNtrimmed bytes
    - build_plan_record stores the name exactly as supplied (no trimming)
    - Pure: balance, rent and time are inputs, never looked up here

Design Decisions:
    - validate_plan_terms separated from check_plan_funding: terms are checkable
      without touching the ledger, funding needs a balance read
"""

from submarket.core.domain_types import (
    Identity, Lamports, PlanId, UnixTimestamp,
    MAX_DURATION_DAYS, MAX_PLAN_NAME_BYTES, MAX_PLAN_PRICE,
)
from submarket.core.errors import (
    DurationTooLongError,
    EmptyPlanNameError,
    InsufficientFundsToCreatePlanError,
    InvalidDurationError,
    InvalidPriceError,
    PlanNameTooLongError,
    PriceTooHighError,
)
from submarket.core.record_address import derive_plan_address
from submarket.core.records import PlanRecord


def validate_plan_terms(name: str, price: int, duration_days: int) -> None:
    """Checks 1-6. Raises the first violated PlanValidationError."""
    if price <= 0:
        raise InvalidPriceError()
    if price > MAX_PLAN_PRICE:
        raise PriceTooHighError()
    if duration_days <= 0:
        raise InvalidDurationError()
    if duration_days > MAX_DURATION_DAYS:
        raise DurationTooLongError()
    if not name.strip():
        raise EmptyPlanNameError()
    if len(name.encode("utf-8")) > MAX_PLAN_NAME_BYTES:
        raise PlanNameTooLongError()


def check_plan_funding(creator_balance: int, required_rent: int) -> None:
    """Check 7: creator must hold at least the plan record's minimum balance."""
    if creator_balance < required_rent:
        raise InsufficientFundsToCreatePlanError(creator_balance, required_rent)


def build_plan_record(
    creator: Identity,
    plan_id: PlanId,
    name: str,
    price: Lamports,
    duration_days: int,
    now: UnixTimestamp,
) -> PlanRecord:
    return PlanRecord(
        address=derive_plan_address(creator, plan_id),
        creator=creator,
        plan_id=plan_id,
        name=name,
        price=price,
        duration_days=duration_days,
        created_at=now,
    )
