from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal, getcontext

from rugsim.domain.entities.pool import Pool
from rugsim.domain.entities.token import Token
from rugsim.domain.exceptions import InvalidInputError
from rugsim.domain.services.reserves import ZERO
from rugsim.domain.services.swap import ensure_tradable


@dataclass(frozen=True)
class LiquidityChange:
    pool: Pool
    token_amount: Decimal
    base_amount: Decimal
    liquidity_delta: Decimal


def geometric_liquidity(*, token_reserve: Decimal, base_reserve: Decimal) -> Decimal:
    if token_reserve <= 0 or base_reserve <= 0:
        return ZERO
    return (token_reserve * base_reserve).sqrt(getcontext())


def create_pool(
    *,
    token: Token,
    token_reserve: Decimal,
    base_reserve: Decimal,
    pool_id: str,
    creator: str,
    now: datetime,
    base_symbol: str = "SOL",
) -> Pool:
    if token_reserve <= 0 or base_reserve <= 0:
        raise InvalidInputError("token_reserve and base_reserve must be positive.")

    return Pool(
        id=pool_id,
        name=f"{token.symbol}/{base_symbol} Pool",
        token_id=token.id,
        token_symbol=token.symbol,
        token_reserve=token_reserve,
        base_reserve=base_reserve,
        total_liquidity=geometric_liquidity(
            token_reserve=token_reserve,
            base_reserve=base_reserve,
        ),
        creator=creator,
        created_at=now,
        is_active=True,
        is_rugged=False,
        rug_date=None,
    )


def add_liquidity(pool: Pool, *, token_amount: Decimal, base_amount: Decimal) -> LiquidityChange:
    ensure_tradable(pool)
    if token_amount <= 0 or base_amount <= 0:
        raise InvalidInputError("token_amount and base_amount must be positive.")

    token_reserve = pool.token_reserve + token_amount
    base_reserve = pool.base_reserve + base_amount
    total_liquidity = geometric_liquidity(token_reserve=token_reserve, base_reserve=base_reserve)
    updated = replace(
        pool,
        token_reserve=token_reserve,
        base_reserve=base_reserve,
        total_liquidity=total_liquidity,
    )
    return LiquidityChange(
        pool=updated,
        token_amount=token_amount,
        base_amount=base_amount,
        liquidity_delta=total_liquidity - pool.total_liquidity,
    )


def remove_liquidity(pool: Pool, *, fraction: Decimal) -> LiquidityChange:
    ensure_tradable(pool)
    if fraction <= 0 or fraction >= 1:
        raise InvalidInputError("fraction must be between 0 and 1 (exclusive).")

    token_amount = pool.token_reserve * fraction
    base_amount = pool.base_reserve * fraction
    token_reserve = pool.token_reserve - token_amount
    base_reserve = pool.base_reserve - base_amount
    total_liquidity = geometric_liquidity(token_reserve=token_reserve, base_reserve=base_reserve)
    updated = replace(
        pool,
        token_reserve=token_reserve,
        base_reserve=base_reserve,
        total_liquidity=total_liquidity,
    )
    return LiquidityChange(
        pool=updated,
        token_amount=token_amount,
        base_amount=base_amount,
        liquidity_delta=total_liquidity - pool.total_liquidity,
    )
