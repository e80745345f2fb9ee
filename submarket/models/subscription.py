"""Subscription ORM — a paid, time-bounded subscription at its derived address.

Invariants:
    - address = derive_subscription_address(subscriber, creator, plan_id); primary key
    - plan_address points at the Plan the subscription was bought from
    - Rows are never updated; expiry is derived from expires_at at read time
"""

from sqlalchemy import BigInteger, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from submarket.core.domain_types import Identity, PlanId, RecordAddress, UnixTimestamp
from submarket.core.records import SubscriptionRecord
from submarket.db.base import Base
from submarket.db.types import U64


class Subscription(Base):
    """Subscription record."""
    __tablename__ = "subscriptions"

    address: Mapped[str] = mapped_column(String(64), primary_key=True)
    plan_address: Mapped[str] = mapped_column(
        String(64), ForeignKey("plans.address"), nullable=False, index=True,
    )
    subscriber: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    creator: Mapped[str] = mapped_column(String(64), nullable=False)
    plan_id: Mapped[int] = mapped_column(U64, nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    expires_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    rent_lamports: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    @classmethod
    def from_record(
        cls, record: SubscriptionRecord, plan_address: str, rent: int,
    ) -> "Subscription":
        return cls(
            address=record.address,
            plan_address=plan_address,
            subscriber=record.subscriber,
            creator=record.creator,
            plan_id=record.plan_id,
            created_at=record.created_at,
            expires_at=record.expires_at,
            rent_lamports=rent,
        )

    def to_record(self) -> SubscriptionRecord:
        return SubscriptionRecord(
            address=RecordAddress(self.address),
            subscriber=Identity(self.subscriber),
            creator=Identity(self.creator),
            plan_id=PlanId(self.plan_id),
            created_at=UnixTimestamp(self.created_at),
            expires_at=UnixTimestamp(self.expires_at),
        )
