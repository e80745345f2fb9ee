"""Plan Routes — publish plans, look them up, subscribe by (creator, plan_id).

Invariants:
    - POST routes require a signer (get_signer); the signer IS the creator / subscriber
    - Plan terms are passed to core unvalidated beyond integer width
    - Lookup by (creator, plan_id) derives the same address createPlan wrote to
"""

import logging

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from submarket.api.dependencies import get_clock, get_rent_schedule, get_signer
from submarket.core.domain_types import (
    Identity, PlanId, RecordAddress, U64_MAX, VerifiedIdentity,
)
from submarket.core.record_address import derive_plan_address
from submarket.core.rent import RentSchedule
from submarket.core.repository_protocols import Clock
from submarket.infrastructure.database import get_db
from submarket.schemas.common import ADDRESS_PATTERN, IDENTITY_PATTERN
from submarket.schemas.plan import PlanCreate, PlanResponse
from submarket.schemas.subscription import SubscriptionResponse
from submarket.services.accounts import load_plan
from submarket.services.create_plan import create_plan
from submarket.services.subscribe import subscribe

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/plans", tags=["plans"])


@router.post(
    "", response_model=PlanResponse, status_code=status.HTTP_201_CREATED,
)
async def create_plan_route(
    body: PlanCreate,
    signer: VerifiedIdentity = Depends(get_signer),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
    rent: RentSchedule = Depends(get_rent_schedule),
):
    """Publish a plan owned by the signer."""
    record = await create_plan(
        db, signer, body.plan_id, body.name, body.price, body.duration_days,
        clock, rent,
    )
    return PlanResponse.from_record(record)


@router.get("/by-creator/{creator}/{plan_id}", response_model=PlanResponse)
async def get_plan_by_creator(
    creator: str = Path(pattern=IDENTITY_PATTERN),
    plan_id: int = Path(ge=0, le=U64_MAX),
    db: AsyncSession = Depends(get_db),
):
    address = derive_plan_address(Identity(creator), PlanId(plan_id))
    return PlanResponse.from_record(await load_plan(db, address))


@router.post(
    "/by-creator/{creator}/{plan_id}/subscriptions",
    response_model=SubscriptionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def subscribe_by_plan_id(
    creator: str = Path(pattern=IDENTITY_PATTERN),
    plan_id: int = Path(ge=0, le=U64_MAX),
    signer: VerifiedIdentity = Depends(get_signer),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
    rent: RentSchedule = Depends(get_rent_schedule),
):
    """Subscribe the signer to creator's plan_id, paying creator."""
    address = derive_plan_address(Identity(creator), PlanId(plan_id))
    record = await subscribe(db, signer, address, Identity(creator), clock, rent)
    return SubscriptionResponse.from_record(record)


@router.get("/{address}", response_model=PlanResponse)
async def get_plan(
    address: str = Path(pattern=ADDRESS_PATTERN),
    db: AsyncSession = Depends(get_db),
):
    return PlanResponse.from_record(await load_plan(db, RecordAddress(address)))
