"""Plan Schemas — request/response models for plan publication and lookup."""

from pydantic import BaseModel, Field, field_validator

from submarket.core.records import PlanRecord
from submarket.schemas.common import U32, U64


class PlanCreate(BaseModel):
    """Plan creation — integer widths only, marketplace ranges checked by core."""
    plan_id: int = Field(**U64)
    name: str
    price: int = Field(**U64)
    duration_days: int = Field(**U32)

    @field_validator("name")
    @classmethod
    def name_must_encode_as_utf8(cls, v: str) -> str:
        # JSON allows lone surrogate escapes; the byte-length rule needs real UTF-8
        try:
            v.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("Plan name must be valid UTF-8")
        return v


class PlanResponse(BaseModel):
    address: str
    creator: str
    plan_id: int
    name: str
    price: int
    duration_days: int
    created_at: int

    @classmethod
    def from_record(cls, record: PlanRecord) -> "PlanResponse":
        return cls(
            address=record.address,
            creator=record.creator,
            plan_id=record.plan_id,
            name=record.name,
            price=record.price,
            duration_days=record.duration_days,
            created_at=record.created_at,
        )
