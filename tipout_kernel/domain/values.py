"""
Values -- Decimal helpers shared by every tipout computation.

Responsibility:
    Convert boundary numerics (str, int, float, Decimal, None) into
    ``Decimal`` and apply the final money rounding. All engine arithmetic
    runs on ``Decimal`` at full precision; rounding happens once, in the
    final pass of the payroll aggregation.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    No outward dependencies.

Invariants enforced:
    - Floats are converted through ``str()`` so ``0.1`` becomes
      ``Decimal("0.1")`` rather than its binary expansion.
    - ``None`` converts to zero (absent numerics degrade gracefully).
    - Rounding is ROUND_HALF_UP to a fixed number of places.

Failure modes:
    - ValueError when a string or object cannot be read as a number.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")
HUNDRED = Decimal("100")
MONEY_PLACES = 2


def to_decimal(value: Any) -> Decimal:
    """Convert a boundary numeric to Decimal.

    Preconditions:
        ``value`` is None, a bool-free number, a Decimal, or a numeric string.
    Postconditions:
        Returns a finite Decimal; None maps to ``Decimal("0")``.
    Raises:
        ValueError: if the value is not numeric or not finite.
    """
    if value is None:
        return ZERO
    if isinstance(value, bool):
        raise ValueError(f"Cannot convert boolean {value!r} to Decimal")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as exc:
            raise ValueError(f"Cannot convert {value!r} to Decimal") from exc
    else:
        raise ValueError(f"Cannot convert {type(value).__name__} to Decimal")

    if not result.is_finite():
        raise ValueError(f"Non-finite amount: {value!r}")
    return result


def round_money(amount: Decimal, places: int = MONEY_PLACES) -> Decimal:
    """Round an amount to ``places`` decimals using ROUND_HALF_UP."""
    quantum = Decimal(10) ** -places
    return amount.quantize(quantum, rounding=ROUND_HALF_UP)


def per_hour(amount: Decimal, hours: Decimal) -> Decimal:
    """Amount per hour, or zero when no hours were worked."""
    if hours > ZERO:
        return amount / hours
    return ZERO


def percent_of(base: Decimal, rate: Decimal) -> Decimal:
    """``rate`` percent of ``base``."""
    return base * (rate / HUNDRED)
