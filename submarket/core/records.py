"""Record Schemas — the two persistent entity shapes and their fixed layouts.

Invariants:
    - PlanRecord and SubscriptionRecord are immutable once built
    - A SubscriptionRecord references exactly one plan through (creator, plan_id)
    - *_RECORD_SPACE is the allocation size charged for rent: 8-byte type tag + fields

Design Decisions:
    - Frozen dataclasses, not ORM rows: core decides on plain values and the
      shell maps them to rows (models/)
    - Layout sizes mirror a fixed-width encoding (32-byte identities, u64/i64
      words, name as u32 length + 200 bytes) so rent stays constant per record type
"""

from dataclasses import dataclass

from submarket.core.domain_types import (
    Identity, Lamports, PlanId, RecordAddress, UnixTimestamp, MAX_PLAN_NAME_BYTES,
)

RECORD_TAG_BYTES = 8
IDENTITY_BYTES = 32

PLAN_RECORD_SPACE: int = RECORD_TAG_BYTES + (
    IDENTITY_BYTES          # creator
    + 8                     # plan_id
    + 4 + MAX_PLAN_NAME_BYTES  # name
    + 8                     # price
    + 4                     # duration_days
    + 8                     # created_at
)

SUBSCRIPTION_RECORD_SPACE: int = RECORD_TAG_BYTES + (
    IDENTITY_BYTES          # subscriber
    + IDENTITY_BYTES        # creator
    + 8                     # plan_id
    + 8                     # created_at
    + 8                     # expires_at
)


@dataclass(frozen=True)
class PlanRecord:
    """A published subscription plan."""
    address: RecordAddress
    creator: Identity
    plan_id: PlanId
    name: str
    price: Lamports
    duration_days: int
    created_at: UnixTimestamp


@dataclass(frozen=True)
class SubscriptionRecord:
    """A paid, time-bounded subscription. Liveness is derived, never stored."""
    address: RecordAddress
    subscriber: Identity
    creator: Identity
    plan_id: PlanId
    created_at: UnixTimestamp
    expires_at: UnixTimestamp

    @property
    def duration_seconds(self) -> int:
        return self.expires_at - self.created_at
