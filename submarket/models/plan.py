"""Plan ORM — a published subscription plan at its derived address.

Invariants:
    - address = derive_plan_address(creator, plan_id); primary key, so a second
      insert at the same (creator, plan_id) cannot overwrite the first
    - (creator, plan_id) is also UNIQUE for direct lookups
    - Rows are never updated or deleted by the marketplace
    - rent_lamports records what the creator paid to allocate the row

Design Decisions:
    - created_at stored as integer epoch seconds (ledger clock), not DateTime:
      keeps the stored value identical to the value the core computed with
"""

from sqlalchemy import BigInteger, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from submarket.core.domain_types import Identity, Lamports, PlanId, RecordAddress, UnixTimestamp
from submarket.core.records import PlanRecord
from submarket.db.base import Base
from submarket.db.types import U64


class Plan(Base):
    """Subscription plan record."""
    __tablename__ = "plans"
    __table_args__ = (
        UniqueConstraint("creator", "plan_id", name="uq_plans_creator_plan_id"),
    )

    address: Mapped[str] = mapped_column(String(64), primary_key=True)
    creator: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    plan_id: Mapped[int] = mapped_column(U64, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    duration_days: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    rent_lamports: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    @classmethod
    def from_record(cls, record: PlanRecord, rent: int) -> "Plan":
        return cls(
            address=record.address,
            creator=record.creator,
            plan_id=record.plan_id,
            name=record.name,
            price=record.price,
            duration_days=record.duration_days,
            created_at=record.created_at,
            rent_lamports=rent,
        )

    def to_record(self) -> PlanRecord:
        return PlanRecord(
            address=RecordAddress(self.address),
            creator=Identity(self.creator),
            plan_id=PlanId(self.plan_id),
            name=self.name,
            price=Lamports(self.price),
            duration_days=self.duration_days,
            created_at=UnixTimestamp(self.created_at),
        )
