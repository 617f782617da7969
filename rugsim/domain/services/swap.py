from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from rugsim.domain.entities.pool import Pool
from rugsim.domain.exceptions import InvalidInputError, PoolInactiveError
from rugsim.domain.services.reserves import (
    DIRECTIONS,
    HUNDRED,
    ZERO,
    Direction,
    input_output_reserves,
    inverse_price,
    percent_change,
    price_from_reserves,
    spot_price,
)


SWAP_FEE_RATE = Decimal("0.003")


@dataclass(frozen=True)
class SwapResult:
    direction: Direction
    amount_in: Decimal
    amount_out: Decimal
    fee_paid: Decimal
    new_token_reserve: Decimal
    new_base_reserve: Decimal
    price_before: Decimal
    price_after: Decimal
    price_impact_pct: Decimal
    slippage_pct: Decimal
    execution_price: Decimal


def constant_product_output(
    *,
    reserve_in: Decimal,
    reserve_out: Decimal,
    amount_in: Decimal,
    fee_rate: Decimal = SWAP_FEE_RATE,
) -> Decimal:
    """Output of ``amount_in`` against ``x * y = k`` after the proportional fee.

    Floored at zero so rounding can never report a negative amount.
    """
    effective_in = amount_in * (Decimal("1") - fee_rate)
    amount_out = reserve_out - (reserve_in * reserve_out) / (reserve_in + effective_in)
    return amount_out if amount_out > 0 else ZERO


def ensure_tradable(pool: Pool) -> None:
    if pool.is_rugged:
        raise PoolInactiveError(f"Pool {pool.id} was rug pulled and no longer trades.")
    if not pool.is_active:
        raise PoolInactiveError(f"Pool {pool.id} is not active.")


def _validate_direction(direction: str) -> None:
    if direction not in DIRECTIONS:
        raise InvalidInputError(f"direction must be one of {', '.join(DIRECTIONS)}.")


def compute_swap(pool: Pool, amount_in: Decimal, direction: Direction) -> SwapResult:
    _validate_direction(direction)
    ensure_tradable(pool)
    if amount_in <= 0:
        raise InvalidInputError("amount_in must be positive.")
    if pool.token_reserve <= 0 or pool.base_reserve <= 0:
        raise InvalidInputError("Pool reserves must be positive to swap.")

    reserve_in, reserve_out = input_output_reserves(pool, direction)
    amount_out = constant_product_output(
        reserve_in=reserve_in,
        reserve_out=reserve_out,
        amount_in=amount_in,
    )
    if amount_out >= reserve_out:
        raise InvalidInputError("amount_in is too large; the swap would drain the pool.")

    if direction == "token_to_base":
        new_token_reserve = pool.token_reserve + amount_in
        new_base_reserve = pool.base_reserve - amount_out
        # token units paid per base unit received
        expected_price = inverse_price(pool)
    else:
        new_token_reserve = pool.token_reserve - amount_out
        new_base_reserve = pool.base_reserve + amount_in
        expected_price = spot_price(pool)

    price_before = spot_price(pool)
    price_after = price_from_reserves(
        token_reserve=new_token_reserve,
        base_reserve=new_base_reserve,
    )

    if amount_out > 0:
        execution_price = amount_in / amount_out
        slippage_pct = abs((execution_price - expected_price) / expected_price) * HUNDRED
    else:
        execution_price = ZERO
        slippage_pct = HUNDRED

    return SwapResult(
        direction=direction,
        amount_in=amount_in,
        amount_out=amount_out,
        fee_paid=amount_in * SWAP_FEE_RATE,
        new_token_reserve=new_token_reserve,
        new_base_reserve=new_base_reserve,
        price_before=price_before,
        price_after=price_after,
        price_impact_pct=percent_change(old=price_before, new=price_after),
        slippage_pct=slippage_pct,
        execution_price=execution_price,
    )


def quote_swap(pool: Pool, amount_in: Decimal, direction: Direction) -> SwapResult:
    """Preview a swap; an empty or negative amount quotes to zero instead of failing."""
    _validate_direction(direction)
    ensure_tradable(pool)
    if amount_in > 0:
        return compute_swap(pool, amount_in, direction)

    price = spot_price(pool)
    return SwapResult(
        direction=direction,
        amount_in=ZERO,
        amount_out=ZERO,
        fee_paid=ZERO,
        new_token_reserve=pool.token_reserve,
        new_base_reserve=pool.base_reserve,
        price_before=price,
        price_after=price,
        price_impact_pct=ZERO,
        slippage_pct=ZERO,
        execution_price=ZERO,
    )
