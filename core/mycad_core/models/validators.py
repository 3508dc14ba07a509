"""Module for reusable Pydantic validators."""

from decimal import Decimal, InvalidOperation
from typing import Any


def to_decimal(v: Any) -> Decimal:
    """Lenient number coercion for values stored by the frontend.

    Mirrors `parseFloat(v) || 0`: missing, empty, non-numeric and
    non-finite values become 0.
    """
    if v is None or isinstance(v, bool):
        return Decimal(0)
    try:
        d = Decimal(str(v).strip())
    except (InvalidOperation, ValueError):
        return Decimal(0)
    if not d.is_finite():
        return Decimal(0)
    return d


def to_nonnegative_int(v: Any) -> int:
    """Coerces a stored quantity to a non-negative integer (invalid -> 0)."""
    d = to_decimal(v)
    return max(int(d), 0)
