"""Checked Arithmetic — overflow-checked integer primitives for balances and time.

Invariants:
    - Every result is range-checked against an explicit [lo, hi] bound
    - Out-of-range results raise MathOverflowError; nothing wraps, nothing clamps
    - Default bounds are unsigned 64-bit (balances, prices); timestamps pass I64 bounds

Design Decisions:
    - Python ints never overflow natively, so the bound IS the contract: callers
      name the width they persist to instead of trusting the language
    - Raise instead of returning Optional: the enclosing transition aborts on
      the first overflow and the shell rolls back
"""

from submarket.core.domain_types import I64_MAX, I64_MIN, U64_MAX
from submarket.core.errors import MathOverflowError


def _bounded(result: int, op: str, lo: int, hi: int) -> int:
    if result < lo or result > hi:
        raise MathOverflowError(op)
    return result


def checked_add(a: int, b: int, *, lo: int = 0, hi: int = U64_MAX) -> int:
    """a + b, or MathOverflowError outside [lo, hi]."""
    return _bounded(a + b, "add", lo, hi)


def checked_sub(a: int, b: int, *, lo: int = 0, hi: int = U64_MAX) -> int:
    """a - b, or MathOverflowError outside [lo, hi] (u64 underflow included)."""
    return _bounded(a - b, "sub", lo, hi)


def checked_mul(a: int, b: int, *, lo: int = 0, hi: int = U64_MAX) -> int:
    """a * b, or MathOverflowError outside [lo, hi]."""
    return _bounded(a * b, "mul", lo, hi)


def checked_add_i64(a: int, b: int) -> int:
    """Signed 64-bit addition, used for timestamp arithmetic."""
    return checked_add(a, b, lo=I64_MIN, hi=I64_MAX)


def checked_mul_i64(a: int, b: int) -> int:
    """Signed 64-bit multiplication, used for duration arithmetic."""
    return checked_mul(a, b, lo=I64_MIN, hi=I64_MAX)
