"""
Conversion between lamports and SOL.

1 SOL = 1_000_000_000 lamports. Conversions use Decimal so display values
are exact; SOL to lamports truncates (floors) any fractional lamport.
"""

from decimal import Decimal, InvalidOperation, ROUND_FLOOR, localcontext
from typing import Union

LAMPORTS_PER_SOL = 1_000_000_000
MAX_LAMPORTS = 2 ** 64 - 1

SolAmount = Union[Decimal, float, int, str]


def to_decimal(amount: SolAmount) -> Decimal:
    """Parse a SOL amount, floats go through their shortest repr"""
    if isinstance(amount, bool):
        raise ValueError(f"Invalid SOL amount: {amount!r}")
    if isinstance(amount, float):
        amount = repr(amount)
    try:
        value = Decimal(amount.strip() if isinstance(amount, str) else amount)
    except (InvalidOperation, TypeError):
        raise ValueError(f"Invalid SOL amount: {amount!r}") from None
    if not value.is_finite():
        raise ValueError(f"Invalid SOL amount: {amount!r}")
    return value


def sol_to_lamports(amount: SolAmount) -> int:
    """
    Convert SOL to lamports, flooring fractional lamports

    Args:
        amount: Amount of SOL

    Returns:
        int: Whole lamports

    Raises:
        ValueError: If the amount is not a finite non-negative number or
            does not fit in an unsigned 64-bit integer
    """
    value = to_decimal(amount)
    if value < 0:
        raise ValueError(f"SOL amount must not be negative: {value}")
    if value.adjusted() > 20:
        raise ValueError(f"SOL amount too large: {value}")
    with localcontext() as ctx:
        ctx.prec = _exact_precision(value)
        lamports = int((value * LAMPORTS_PER_SOL).to_integral_value(rounding=ROUND_FLOOR))
    if lamports > MAX_LAMPORTS:
        raise ValueError(f"SOL amount too large: {value}")
    return lamports


def lamports_to_sol(lamports: int) -> Decimal:
    """Convert lamports to SOL exactly"""
    return Decimal(lamports) / LAMPORTS_PER_SOL


def format_sol(value: Union[int, Decimal], from_lamports: bool = True) -> str:
    """Format a SOL value without trailing zeros (2_500_000_000 -> '2.5')"""
    sol = lamports_to_sol(value) if from_lamports else to_decimal(value)
    with localcontext() as ctx:
        ctx.prec = _exact_precision(sol)
        return f"{sol.normalize():f}"


def _exact_precision(value: Decimal) -> int:
    # enough digits that scaling by LAMPORTS_PER_SOL never rounds
    return max(28, len(value.as_tuple().digits) + 10)
