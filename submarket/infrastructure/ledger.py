"""SQL Ledger — balance query, value transfer and record allocation over one AsyncSession.

Invariants:
    - Every method runs inside the caller's session; nothing here commits
    - Balances never go negative: debits are checked before they are applied
    - Credits are bounded by the signed 64-bit balance column (MathOverflow beyond)
    - Allocation at an occupied address raises RecordAlreadyInitializedError and
      never overwrites the existing row
    - Allocation charges the payer the rent BEFORE inserting the row

Design Decisions:
    - Account rows locked FOR UPDATE on read-modify-write: concurrent transitions on
      the same identity serialize at the database (SQLite ignores the hint, and
      serializes writers anyway)
    - Multi-account transitions lock every row up front in identity order, so two
      transfers crossing the same pair of accounts never wait on each other in a cycle
    - Duplicate detection twice: an explicit lookup for a clean error, and the
      primary-key IntegrityError on flush for the race where two transitions
      allocate the same address concurrently
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from submarket.core.checked_math import checked_add, checked_sub
from submarket.core.domain_types import I64_MAX, Identity, RecordAddress
from submarket.core.errors import (
    ErrorContext, RecordAlreadyInitializedError, TransferFailedError,
)
from submarket.core.records import PlanRecord, SubscriptionRecord
from submarket.core.repository_protocols import Ledger
from submarket.models.account import Account
from submarket.models.plan import Plan
from submarket.models.subscription import Subscription

logger = logging.getLogger(__name__)


class SqlLedger:
    """Native value ledger backed by the accounts table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def _load(self, identity: Identity) -> Account | None:
        result = await self._db.execute(
            select(Account).where(Account.identity == identity).with_for_update(),
        )
        return result.scalar_one_or_none()

    async def get_balance(self, identity: Identity) -> int:
        account = await self._load(identity)
        return account.balance if account else 0

    async def lock_accounts(self, *identities: Identity) -> dict[Identity, int]:
        """Lock the given accounts in identity order and return their balances."""
        result = await self._db.execute(
            select(Account)
            .where(Account.identity.in_(identities))
            .order_by(Account.identity)
            .with_for_update(),
        )
        balances = {account.identity: account.balance for account in result.scalars()}
        return {identity: balances.get(identity, 0) for identity in identities}

    async def credit(self, identity: Identity, amount: int) -> int:
        """Add amount to identity, creating the account on first credit."""
        account = await self._load(identity)
        if account is None:
            account = Account(identity=identity, balance=0)
            self._db.add(account)
        account.balance = checked_add(account.balance, amount, hi=I64_MAX)
        return account.balance

    async def debit(self, identity: Identity, amount: int) -> int:
        account = await self._load(identity)
        balance = account.balance if account else 0
        if amount == 0:
            return balance
        if account is None or balance < amount:
            raise TransferFailedError(
                f"insufficient lamports: balance {balance}, need {amount}",
                ErrorContext(identity=identity, operation="debit"),
            )
        account.balance = checked_sub(account.balance, amount)
        return account.balance

    async def transfer(
        self, source: Identity, destination: Identity, amount: int,
    ) -> None:
        """Move exactly amount from source to destination."""
        await self.debit(source, amount)
        await self.credit(destination, amount)
        logger.debug(
            f"Transferred {amount} lamports",
            extra={"identity": source, "operation": "transfer"},
        )


class SqlRecordStore:
    """Record allocation at deterministic addresses."""

    def __init__(self, db: AsyncSession, ledger: Ledger):
        self._db = db
        self._ledger = ledger

    async def _insert(self, row: Plan | Subscription, record_type: str) -> None:
        self._db.add(row)
        try:
            await self._db.flush()
        except IntegrityError:
            raise RecordAlreadyInitializedError(record_type, row.address)

    async def allocate_plan(
        self, record: PlanRecord, payer: Identity, rent: int,
    ) -> None:
        if await self._db.get(Plan, record.address) is not None:
            raise RecordAlreadyInitializedError("Plan", record.address)
        await self._ledger.debit(payer, rent)
        await self._insert(Plan.from_record(record, rent), "Plan")

    async def allocate_subscription(
        self,
        record: SubscriptionRecord,
        payer: Identity,
        rent: int,
        plan_address: RecordAddress,
    ) -> None:
        if await self._db.get(Subscription, record.address) is not None:
            raise RecordAlreadyInitializedError("Subscription", record.address)
        await self._ledger.debit(payer, rent)
        await self._insert(
            Subscription.from_record(record, plan_address, rent), "Subscription",
        )

    async def get_plan(self, address: RecordAddress) -> PlanRecord | None:
        row = await self._db.get(Plan, address)
        return row.to_record() if row else None

    async def get_subscription(
        self, address: RecordAddress,
    ) -> SubscriptionRecord | None:
        row = await self._db.get(Subscription, address)
        return row.to_record() if row else None
