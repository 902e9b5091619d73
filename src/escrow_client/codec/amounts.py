"""Conversions between human-readable amounts and token base units.

On-chain amounts are unsigned integers scaled by ``10**decimals``. Converting
to base units truncates toward zero, the same way the contract's integer
division does, so fee totals computed here match what the contract charges.
"""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, localcontext

# uint256 has 78 decimal digits
_PRECISION = 100


def to_base_units(amount: Decimal | int | str, decimals: int) -> int:
    """Convert a human amount to base units, truncating extra precision.

    Raises:
        ValueError: If the amount is negative or not a number.
    """
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    if not value.is_finite() or value < 0:
        raise ValueError(f"amount must be a non-negative number, got {amount}")
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return int(value.scaleb(decimals).to_integral_value(rounding=ROUND_DOWN))


def from_base_units(value: int, decimals: int) -> Decimal:
    """Convert base units back to a human amount."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return Decimal(int(value)).scaleb(-decimals)
