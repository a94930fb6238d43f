from decimal import Decimal, localcontext
from typing import Sequence, TypeVar

T = TypeVar("T")

# Enough digits for a full uint256 without rounding.
UINT256_PRECISION = 80


def chunk(items: Sequence[T], size: int) -> list[list[T]]:
    if size <= 0:
        raise ValueError(f"Chunk size must be positive, got {size}")

    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def format_units(value: int, decimals: int) -> str:
    with localcontext() as ctx:
        ctx.prec = UINT256_PRECISION
        amount = Decimal(value).scaleb(-decimals)
        formatted = f"{amount:f}"

    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")

    return formatted
