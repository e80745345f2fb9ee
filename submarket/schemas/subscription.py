"""Subscription Schemas — subscribe request, record and status responses."""

from pydantic import BaseModel, Field

from submarket.core.records import SubscriptionRecord
from submarket.schemas.common import ADDRESS_PATTERN, IDENTITY_PATTERN


class SubscribeRequest(BaseModel):
    """Subscribe by plan address; creator is the payee account."""
    plan_address: str = Field(pattern=ADDRESS_PATTERN)
    creator: str = Field(pattern=IDENTITY_PATTERN)


class SubscriptionResponse(BaseModel):
    address: str
    subscriber: str
    creator: str
    plan_id: int
    created_at: int
    expires_at: int

    @classmethod
    def from_record(cls, record: SubscriptionRecord) -> "SubscriptionResponse":
        return cls(
            address=record.address,
            subscriber=record.subscriber,
            creator=record.creator,
            plan_id=record.plan_id,
            created_at=record.created_at,
            expires_at=record.expires_at,
        )


class SubscriptionStatusResponse(BaseModel):
    address: str
    active: bool
    expires_at: int
    checked_at: int
    seconds_remaining: int
