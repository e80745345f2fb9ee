"""Create Plan — validates plan terms, charges record rent, allocates the Plan.

Invariants:
    - Terms validated (core/enforce_plan) before any ledger read
    - Creator funding checked against the plan record's rent before allocation
    - Clock read once; the value becomes created_at
    - No value moves except the rent the allocator charges the creator
    - A second call with the same (creator, plan_id) raises RecordAlreadyInitializedError
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from submarket.core.domain_types import Lamports, PlanId, VerifiedIdentity
from submarket.core.enforce_plan import (
    build_plan_record, check_plan_funding, validate_plan_terms,
)
from submarket.core.records import PlanRecord
from submarket.core.rent import RentSchedule
from submarket.core.repository_protocols import Clock, Ledger, RecordStore
from submarket.infrastructure.ledger import SqlLedger, SqlRecordStore
from submarket.services.transition import transition

logger = logging.getLogger(__name__)


async def create_plan(
    db: AsyncSession,
    creator: VerifiedIdentity,
    plan_id: int,
    name: str,
    price: int,
    duration_days: int,
    clock: Clock,
    rent: RentSchedule,
) -> PlanRecord:
    ledger: Ledger = SqlLedger(db)
    store: RecordStore = SqlRecordStore(db, ledger)
    async with transition(db, "create_plan"):
        validate_plan_terms(name, price, duration_days)
        required_rent = rent.plan_rent
        check_plan_funding(await ledger.get_balance(creator), required_rent)

        record = build_plan_record(
            creator, PlanId(plan_id), name, Lamports(price), duration_days, clock.now(),
        )
        await store.allocate_plan(record, creator, required_rent)

    logger.info(
        f"Plan created: {record.name!r} price={record.price} days={record.duration_days}",
        extra={"identity": creator, "address": record.address, "plan_id": plan_id},
    )
    return record
