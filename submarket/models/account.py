"""Account ORM — spendable balance per identity.

Invariants:
    - identity is the primary key; one balance row per identity
    - balance >= 0 (CHECK constraint) and fits a signed 64-bit column
    - Rows are created lazily on first credit; a missing row means balance 0
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, CheckConstraint, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from submarket.db.base import Base


class Account(Base):
    """Ledger account holding native value units."""
    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_accounts_balance_non_negative"),
    )

    identity: Mapped[str] = mapped_column(String(64), primary_key=True)
    balance: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
