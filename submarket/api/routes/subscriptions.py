"""Subscription Routes — subscribe, fetch, liveness status and gated access.

Invariants:
    - /status never fails for an expired subscription: it reports active=false
    - /access fails with SUBSCRIPTION_EXPIRED (403) once now >= expires_at
    - Read routes need no signer
"""

import logging

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from submarket.api.dependencies import get_clock, get_rent_schedule, get_signer
from submarket.core.domain_types import (
    Identity, PlanId, RecordAddress, U64_MAX, VerifiedIdentity,
)
from submarket.core.record_address import derive_subscription_address
from submarket.core.rent import RentSchedule
from submarket.core.repository_protocols import Clock
from submarket.core.subscription_status import seconds_remaining
from submarket.infrastructure.database import get_db
from submarket.schemas.common import ADDRESS_PATTERN, IDENTITY_PATTERN
from submarket.schemas.subscription import (
    SubscribeRequest, SubscriptionResponse, SubscriptionStatusResponse,
)
from submarket.services.check_subscription import (
    check_subscription, load_subscription, require_active_subscription,
)
from submarket.services.subscribe import subscribe

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/subscriptions", tags=["subscriptions"])


@router.post(
    "", response_model=SubscriptionResponse, status_code=status.HTTP_201_CREATED,
)
async def subscribe_route(
    body: SubscribeRequest,
    signer: VerifiedIdentity = Depends(get_signer),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
    rent: RentSchedule = Depends(get_rent_schedule),
):
    """Subscribe the signer to the plan at plan_address, paying body.creator."""
    record = await subscribe(
        db, signer, RecordAddress(body.plan_address), Identity(body.creator),
        clock, rent,
    )
    return SubscriptionResponse.from_record(record)


@router.get(
    "/by-key/{subscriber}/{creator}/{plan_id}", response_model=SubscriptionResponse,
)
async def get_subscription_by_key(
    subscriber: str = Path(pattern=IDENTITY_PATTERN),
    creator: str = Path(pattern=IDENTITY_PATTERN),
    plan_id: int = Path(ge=0, le=U64_MAX),
    db: AsyncSession = Depends(get_db),
):
    address = derive_subscription_address(
        Identity(subscriber), Identity(creator), PlanId(plan_id),
    )
    return SubscriptionResponse.from_record(await load_subscription(db, address))


@router.get("/{address}", response_model=SubscriptionResponse)
async def get_subscription(
    address: str = Path(pattern=ADDRESS_PATTERN),
    db: AsyncSession = Depends(get_db),
):
    record = await load_subscription(db, RecordAddress(address))
    return SubscriptionResponse.from_record(record)


@router.get("/{address}/status", response_model=SubscriptionStatusResponse)
async def get_subscription_status(
    address: str = Path(pattern=ADDRESS_PATTERN),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Liveness check: active iff now < expires_at."""
    result = await check_subscription(db, RecordAddress(address), clock)
    return SubscriptionStatusResponse(
        address=result.subscription.address,
        active=result.active,
        expires_at=result.subscription.expires_at,
        checked_at=result.checked_at,
        seconds_remaining=seconds_remaining(result.subscription, result.checked_at),
    )


@router.get("/{address}/access", response_model=SubscriptionResponse)
async def check_subscription_access(
    address: str = Path(pattern=ADDRESS_PATTERN),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Gate for subscriber-only content. 403 SUBSCRIPTION_EXPIRED once expired."""
    record = await require_active_subscription(db, RecordAddress(address), clock)
    return SubscriptionResponse.from_record(record)
