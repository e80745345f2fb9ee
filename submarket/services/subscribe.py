"""Subscribe — eligibility checks, payment to the creator, Subscription allocation.

Invariants:
    - Check order: plan exists, not own plan, payee is plan creator,
      price + rent + fee buffer (checked), subscriber balance covers it
    - Subscriber and creator accounts are locked together, in identity order,
      before the balance is read
    - Effect order: transfer plan.price subscriber -> creator, then allocate the
      record (subscriber pays its rent), populated from ONE clock read
    - Any failure after the transfer rolls the transfer back with the transition
    - The Plan row is only read, never written

Design Decisions:
    - Payment before allocation: a refused transfer never leaves a paid-for-nothing
      record, and a refused allocation undoes the payment through rollback
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from submarket.core.domain_types import Identity, RecordAddress, VerifiedIdentity
from submarket.core.enforce_subscription import (
    build_subscription_record,
    check_subscriber_funds,
    check_subscription_eligibility,
    compute_total_required,
)
from submarket.core.errors import ErrorContext, ResourceNotFoundError
from submarket.core.records import SubscriptionRecord
from submarket.core.rent import RentSchedule
from submarket.core.repository_protocols import Clock, Ledger, RecordStore
from submarket.infrastructure.ledger import SqlLedger, SqlRecordStore
from submarket.services.transition import transition

logger = logging.getLogger(__name__)


async def subscribe(
    db: AsyncSession,
    subscriber: VerifiedIdentity,
    plan_address: RecordAddress,
    creator_account: Identity,
    clock: Clock,
    rent: RentSchedule,
) -> SubscriptionRecord:
    ledger: Ledger = SqlLedger(db)
    store: RecordStore = SqlRecordStore(db, ledger)
    async with transition(db, "subscribe"):
        plan = await store.get_plan(plan_address)
        if plan is None:
            raise ResourceNotFoundError(
                "Plan", plan_address,
                ErrorContext(address=plan_address, operation="subscribe"),
            )
        check_subscription_eligibility(subscriber, plan, creator_account)

        subscription_rent = rent.subscription_rent
        total_required = compute_total_required(plan.price, subscription_rent)
        balances = await ledger.lock_accounts(subscriber, creator_account)
        check_subscriber_funds(balances[subscriber], total_required)

        await ledger.transfer(subscriber, creator_account, plan.price)

        record = build_subscription_record(subscriber, plan, clock.now())
        await store.allocate_subscription(
            record, subscriber, subscription_rent, plan.address,
        )

    logger.info(
        f"Subscription created: paid {plan.price}, expires_at={record.expires_at}",
        extra={
            "identity": subscriber, "address": record.address, "plan_id": plan.plan_id,
        },
    )
    return record
