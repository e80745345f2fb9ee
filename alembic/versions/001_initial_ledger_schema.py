"""Initial ledger schema — accounts, plans, subscriptions.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("identity", sa.String(64), primary_key=True),
        sa.Column("balance", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("balance >= 0", name="ck_accounts_balance_non_negative"),
    )

    op.create_table(
        "plans",
        sa.Column("address", sa.String(64), primary_key=True),
        sa.Column("creator", sa.String(64), nullable=False),
        sa.Column("plan_id", sa.String(20), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("price", sa.BigInteger, nullable=False),
        sa.Column("duration_days", sa.Integer, nullable=False),
        sa.Column("created_at", sa.BigInteger, nullable=False),
        sa.Column("rent_lamports", sa.BigInteger, nullable=False, server_default="0"),
        sa.UniqueConstraint("creator", "plan_id", name="uq_plans_creator_plan_id"),
    )
    op.create_index("ix_plans_creator", "plans", ["creator"])

    op.create_table(
        "subscriptions",
        sa.Column("address", sa.String(64), primary_key=True),
        sa.Column("plan_address", sa.String(64), sa.ForeignKey("plans.address"), nullable=False),
        sa.Column("subscriber", sa.String(64), nullable=False),
        sa.Column("creator", sa.String(64), nullable=False),
        sa.Column("plan_id", sa.String(20), nullable=False),
        sa.Column("created_at", sa.BigInteger, nullable=False),
        sa.Column("expires_at", sa.BigInteger, nullable=False),
        sa.Column("rent_lamports", sa.BigInteger, nullable=False, server_default="0"),
    )
    op.create_index("ix_subscriptions_plan_address", "subscriptions", ["plan_address"])
    op.create_index("ix_subscriptions_subscriber", "subscriptions", ["subscriber"])


def downgrade() -> None:
    op.drop_index("ix_subscriptions_subscriber", table_name="subscriptions")
    op.drop_index("ix_subscriptions_plan_address", table_name="subscriptions")
    op.drop_table("subscriptions")
    op.drop_index("ix_plans_creator", table_name="plans")
    op.drop_table("plans")
    op.drop_table("accounts")
