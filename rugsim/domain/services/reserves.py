from __future__ import annotations

from decimal import Decimal
from typing import Literal

from rugsim.domain.entities.pool import Pool


Direction = Literal["token_to_base", "base_to_token"]

DIRECTIONS: tuple[str, ...] = ("token_to_base", "base_to_token")

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def price_from_reserves(*, token_reserve: Decimal, base_reserve: Decimal) -> Decimal:
    if token_reserve <= 0 or base_reserve <= 0:
        return ZERO
    return base_reserve / token_reserve


def spot_price(pool: Pool) -> Decimal:
    """Price of one token unit in base currency; 0 once either side is empty."""
    return price_from_reserves(token_reserve=pool.token_reserve, base_reserve=pool.base_reserve)


def inverse_price(pool: Pool) -> Decimal:
    if pool.token_reserve <= 0 or pool.base_reserve <= 0:
        return ZERO
    return pool.token_reserve / pool.base_reserve


def total_value_locked(pool: Pool) -> Decimal:
    return pool.total_liquidity


def input_output_reserves(pool: Pool, direction: Direction) -> tuple[Decimal, Decimal]:
    if direction == "token_to_base":
        return pool.token_reserve, pool.base_reserve
    if direction == "base_to_token":
        return pool.base_reserve, pool.token_reserve
    raise ValueError(f"Unknown swap direction: {direction}")


def percent_change(*, old: Decimal, new: Decimal) -> Decimal:
    if old == 0:
        return ZERO
    return (new - old) / old * HUNDRED
