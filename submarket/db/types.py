"""Column Types — exact storage for unsigned 64-bit integers.

Invariants:
    - U64 round-trips every value in [0, 2**64 - 1] exactly, on SQLite and PostgreSQL

Design Decisions:
    - Zero-padded decimal text over BIGINT: BIGINT is signed and tops out at 2**63 - 1,
      plan ids use the full u64 range; padding keeps lexical order == numeric order
"""

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

U64_DIGITS = 20


class U64(TypeDecorator):
    impl = String(U64_DIGITS)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(int(value)).zfill(U64_DIGITS)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return int(value)
