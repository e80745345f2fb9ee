"""Shared field constraints for identities, addresses and integer widths.

Invariants:
    - Schemas bound integer WIDTH only (u32/u64); marketplace ranges
      (price > 0, duration <= 365, name length) are enforced in core so callers
      get the marketplace error code, not a generic validation error
"""

from submarket.core.domain_types import U32_MAX, U64_MAX

IDENTITY_PATTERN = r"^[A-Za-z0-9_-]{1,64}$"
ADDRESS_PATTERN = r"^[0-9a-f]{64}$"

U32 = {"ge": 0, "le": U32_MAX}
U64 = {"ge": 0, "le": U64_MAX}
