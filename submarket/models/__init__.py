"""ORM Models — SQLAlchemy declarative models for ledger accounts and records.

Invariants:
    - All models inherit from Base (db/base.py)
    - Plan and Subscription rows are keyed by their derived record address

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata holds every table before
      create_all or alembic autogenerate runs
"""

from submarket.models.account import Account  # noqa: F401
from submarket.models.plan import Plan  # noqa: F401
from submarket.models.subscription import Subscription  # noqa: F401
