"""Accounts service — balances, faucet gating, credit bounds."""

import pytest

from submarket.config import Settings
from submarket.core.domain_types import I64_MAX
from submarket.core.errors import (
    AirdropTooLargeError, FaucetDisabledError, MathOverflowError, TransferFailedError,
)
from submarket.infrastructure.ledger import SqlLedger
from submarket.services.accounts import airdrop, get_balance


async def test_unknown_identity_has_zero_balance(test_session_factory):
    async with test_session_factory() as db:
        assert await get_balance(db, "stranger") == 0


async def test_airdrop_credits_and_accumulates(test_session_factory, test_settings):
    async with test_session_factory() as db:
        assert await airdrop(db, "alice", 500, test_settings) == 500
    async with test_session_factory() as db:
        assert await airdrop(db, "alice", 250, test_settings) == 750
    async with test_session_factory() as db:
        assert await get_balance(db, "alice") == 750


async def test_airdrop_refused_when_faucet_disabled(test_session_factory):
    settings = Settings(database_url="sqlite+aiosqlite:///:memory:", faucet_enabled=False)
    async with test_session_factory() as db:
        with pytest.raises(FaucetDisabledError):
            await airdrop(db, "alice", 500, settings)


async def test_airdrop_above_cap(test_session_factory, test_settings):
    async with test_session_factory() as db:
        with pytest.raises(AirdropTooLargeError):
            await airdrop(db, "alice", test_settings.faucet_max_lamports + 1, test_settings)


async def test_credit_past_balance_column_bound(test_session_factory, ledger):
    await ledger.fund("whale", I64_MAX)
    async with test_session_factory() as db:
        with pytest.raises(MathOverflowError):
            await SqlLedger(db).credit("whale", 1)


async def test_transfer_refuses_overdraft(test_session_factory, ledger):
    await ledger.fund("alice", 100)
    async with test_session_factory() as db:
        with pytest.raises(TransferFailedError):
            await SqlLedger(db).transfer("alice", "bob", 101)
        await db.rollback()
    assert await ledger.balance("alice") == 100
    assert await ledger.balance("bob") == 0


async def test_transfer_moves_exact_amount(test_session_factory, ledger):
    await ledger.fund("alice", 100)
    async with test_session_factory() as db:
        await SqlLedger(db).transfer("alice", "bob", 40)
        await db.commit()
    assert await ledger.balance("alice") == 60
    assert await ledger.balance("bob") == 40


async def test_zero_debit_needs_no_account(test_session_factory):
    async with test_session_factory() as db:
        assert await SqlLedger(db).debit("newcomer", 0) == 0


async def test_lock_accounts_reports_missing_as_zero(test_session_factory, ledger):
    await ledger.fund("zed", 70)
    await ledger.fund("amy", 30)
    async with test_session_factory() as db:
        balances = await SqlLedger(db).lock_accounts("zed", "nobody", "amy")
    assert balances == {"zed": 70, "nobody": 0, "amy": 30}
