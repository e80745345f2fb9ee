"""Boundary Protocols — contracts between core and shell for the external collaborators.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Record allocation, value transfer, balance query and clock are accessed
      through Protocol types; implementations provided by infrastructure/

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core functions that consume their results are never async themselves —
      the shell orchestrates the async calls around the pure logic
"""

from typing import Protocol

from submarket.core.domain_types import Identity, RecordAddress, UnixTimestamp
from submarket.core.records import PlanRecord, SubscriptionRecord


class Clock(Protocol):
    """Current time as integer seconds since epoch."""
    def now(self) -> UnixTimestamp: ...


class Ledger(Protocol):
    """Balance query and native value transfer."""
    async def get_balance(self, identity: Identity) -> int: ...
    async def lock_accounts(self, *identities: Identity) -> dict[Identity, int]: ...
    async def transfer(
        self, source: Identity, destination: Identity, amount: int,
    ) -> None: ...
    async def credit(self, identity: Identity, amount: int) -> int: ...
    async def debit(self, identity: Identity, amount: int) -> int: ...


class RecordStore(Protocol):
    """Record allocation at deterministic addresses, payer charged the rent."""
    async def allocate_plan(
        self, record: PlanRecord, payer: Identity, rent: int,
    ) -> None: ...
    async def allocate_subscription(
        self,
        record: SubscriptionRecord,
        payer: Identity,
        rent: int,
        plan_address: RecordAddress,
    ) -> None: ...
    async def get_plan(self, address: RecordAddress) -> PlanRecord | None: ...
    async def get_subscription(
        self, address: RecordAddress,
    ) -> SubscriptionRecord | None: ...
