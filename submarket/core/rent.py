"""Rent Schedule — minimum balance a payer must fund to allocate a record.

Invariants:
    - minimum_balance is monotone in data_len and computed with checked arithmetic
    - Defaults match the reference ledger: 3480 lamports/byte-year, 2-year exemption,
      128 bytes of per-record storage overhead
"""

from dataclasses import dataclass

from submarket.core.checked_math import checked_add, checked_mul
from submarket.core.records import PLAN_RECORD_SPACE, SUBSCRIPTION_RECORD_SPACE

DEFAULT_LAMPORTS_PER_BYTE_YEAR = 3480
DEFAULT_EXEMPTION_THRESHOLD_YEARS = 2
STORAGE_OVERHEAD_BYTES = 128


@dataclass(frozen=True)
class RentSchedule:
    lamports_per_byte_year: int = DEFAULT_LAMPORTS_PER_BYTE_YEAR
    exemption_threshold_years: int = DEFAULT_EXEMPTION_THRESHOLD_YEARS
    storage_overhead_bytes: int = STORAGE_OVERHEAD_BYTES

    def minimum_balance(self, data_len: int) -> int:
        """Rent-exempt minimum for a record of data_len bytes."""
        total_bytes = checked_add(self.storage_overhead_bytes, data_len)
        per_year = checked_mul(total_bytes, self.lamports_per_byte_year)
        return checked_mul(per_year, self.exemption_threshold_years)

    @property
    def plan_rent(self) -> int:
        return self.minimum_balance(PLAN_RECORD_SPACE)

    @property
    def subscription_rent(self) -> int:
        return self.minimum_balance(SUBSCRIPTION_RECORD_SPACE)
