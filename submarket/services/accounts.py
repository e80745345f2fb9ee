"""Accounts — balance reads, plan lookup and the development faucet.

Invariants:
    - Airdrops only when settings.faucet_enabled; amount in (0, faucet_max_lamports]
    - Airdrop credit is checked against the balance column bound
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from submarket.config import Settings
from submarket.core.domain_types import Identity, RecordAddress
from submarket.core.errors import (
    AirdropTooLargeError, ErrorContext, FaucetDisabledError, ResourceNotFoundError,
)
from submarket.core.records import PlanRecord
from submarket.infrastructure.ledger import SqlLedger, SqlRecordStore
from submarket.services.transition import transition

logger = logging.getLogger(__name__)


async def get_balance(db: AsyncSession, identity: Identity) -> int:
    return await SqlLedger(db).get_balance(identity)


async def load_plan(db: AsyncSession, address: RecordAddress) -> PlanRecord:
    record = await SqlRecordStore(db, SqlLedger(db)).get_plan(address)
    if record is None:
        raise ResourceNotFoundError("Plan", address, ErrorContext(address=address))
    return record


async def airdrop(
    db: AsyncSession, identity: Identity, amount: int, settings: Settings,
) -> int:
    """Mint amount lamports into identity. Returns the new balance."""
    if not settings.faucet_enabled:
        raise FaucetDisabledError(ErrorContext(identity=identity, operation="airdrop"))
    if amount > settings.faucet_max_lamports:
        raise AirdropTooLargeError(amount, settings.faucet_max_lamports)
    ledger = SqlLedger(db)
    async with transition(db, "airdrop"):
        balance = await ledger.credit(identity, amount)
    logger.info(
        f"Airdropped {amount} lamports", extra={"identity": identity, "operation": "airdrop"},
    )
    return balance
