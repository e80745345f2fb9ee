"""Domain Types — rich types and protocol constants shared across the marketplace.

Invariants:
    - Identity, RecordAddress wrap str — never use a bare str for an account key in core logic
    - Lamports, PlanId are unsigned 64-bit; UnixTimestamp is signed 64-bit seconds
    - MAX_PLAN_PRICE, MAX_DURATION_DAYS, MAX_PLAN_NAME_BYTES, TRANSACTION_FEE_BUFFER
      are the single source of truth for plan and subscription limits

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum for namespaces: the enum value IS the seed tag fed to address derivation
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

Identity = NewType("Identity", str)
VerifiedIdentity = NewType("VerifiedIdentity", str)   # produced by the signer dependency only
RecordAddress = NewType("RecordAddress", str)         # 64 hex chars


# ─── Value Types ─────────────────────────────────────────────────

PlanId = NewType("PlanId", int)                 # u64
Lamports = NewType("Lamports", int)             # u64 value units
UnixTimestamp = NewType("UnixTimestamp", int)   # i64 seconds since epoch


# ─── Integer Bounds ──────────────────────────────────────────────

U32_MAX: int = 2**32 - 1
U64_MAX: int = 2**64 - 1
I64_MIN: int = -(2**63)
I64_MAX: int = 2**63 - 1


# ─── Marketplace Limits ──────────────────────────────────────────

MAX_PLAN_PRICE: int = 1_000_000_000_000
MAX_DURATION_DAYS: int = 365
MAX_PLAN_NAME_BYTES: int = 200
TRANSACTION_FEE_BUFFER: int = 10_000_000
SECONDS_PER_DAY: int = 86_400


# ─── Enums ───────────────────────────────────────────────────────

class RecordNamespace(str, Enum):
    """Seed tags that keep plan and subscription addresses disjoint."""
    PLAN = "plan"
    SUBSCRIPTION = "subscription"
