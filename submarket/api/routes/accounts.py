"""Account Routes — balances, development faucet and rent quotes."""

import logging

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from submarket.api.dependencies import get_rent_schedule
from submarket.config import Settings, get_settings
from submarket.core.domain_types import Identity, TRANSACTION_FEE_BUFFER
from submarket.core.records import PLAN_RECORD_SPACE, SUBSCRIPTION_RECORD_SPACE
from submarket.core.rent import RentSchedule
from submarket.infrastructure.database import get_db
from submarket.schemas.account import AccountResponse, AirdropRequest, RentQuoteResponse
from submarket.schemas.common import IDENTITY_PATTERN
from submarket.services.accounts import airdrop, get_balance

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["accounts"])


@router.get("/accounts/{identity}", response_model=AccountResponse)
async def get_account(
    identity: str = Path(pattern=IDENTITY_PATTERN),
    db: AsyncSession = Depends(get_db),
):
    """Spendable balance. Unknown identities report 0."""
    balance = await get_balance(db, Identity(identity))
    return AccountResponse(identity=identity, balance=balance)


@router.post("/accounts/{identity}/airdrop", response_model=AccountResponse)
async def airdrop_account(
    body: AirdropRequest,
    identity: str = Path(pattern=IDENTITY_PATTERN),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    balance = await airdrop(db, Identity(identity), body.amount, settings)
    return AccountResponse(identity=identity, balance=balance)


@router.get("/rent", response_model=RentQuoteResponse)
async def get_rent_quote(rent: RentSchedule = Depends(get_rent_schedule)):
    return RentQuoteResponse(
        plan_record_space=PLAN_RECORD_SPACE,
        plan_rent=rent.plan_rent,
        subscription_record_space=SUBSCRIPTION_RECORD_SPACE,
        subscription_rent=rent.subscription_rent,
        transaction_fee_buffer=TRANSACTION_FEE_BUFFER,
    )
