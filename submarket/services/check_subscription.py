"""Check Subscription — read-only liveness query and the expiry gate.

Invariants:
    - Never writes; no transition boundary needed
    - check_subscription returns a bool, never raises for an expired record
    - require_active_subscription raises SubscriptionExpiredError for an expired record
    - Unknown address raises ResourceNotFoundError in both
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from submarket.core.domain_types import RecordAddress, UnixTimestamp
from submarket.core.errors import ErrorContext, ResourceNotFoundError
from submarket.core.records import SubscriptionRecord
from submarket.core.repository_protocols import Clock
from submarket.core.subscription_status import is_active, require_active
from submarket.infrastructure.ledger import SqlLedger, SqlRecordStore


@dataclass(frozen=True)
class SubscriptionStatus:
    subscription: SubscriptionRecord
    active: bool
    checked_at: UnixTimestamp


async def load_subscription(
    db: AsyncSession, address: RecordAddress,
) -> SubscriptionRecord:
    record = await SqlRecordStore(db, SqlLedger(db)).get_subscription(address)
    if record is None:
        raise ResourceNotFoundError(
            "Subscription", address, ErrorContext(address=address),
        )
    return record


async def check_subscription(
    db: AsyncSession, address: RecordAddress, clock: Clock,
) -> SubscriptionStatus:
    record = await load_subscription(db, address)
    now = clock.now()
    return SubscriptionStatus(record, is_active(record, now), now)


async def require_active_subscription(
    db: AsyncSession, address: RecordAddress, clock: Clock,
) -> SubscriptionRecord:
    record = await load_subscription(db, address)
    require_active(record, clock.now())
    return record
