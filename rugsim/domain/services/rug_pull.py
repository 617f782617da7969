from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Literal

from rugsim.domain.entities.pool import Pool
from rugsim.domain.exceptions import (
    AlreadyRuggedError,
    InvalidInputError,
    NotPoolCreatorError,
    PoolInactiveError,
)
from rugsim.domain.services.liquidity import geometric_liquidity
from rugsim.domain.services.reserves import HUNDRED, ZERO, price_from_reserves, spot_price


DrainMode = Literal["base_only", "proportional"]

DRAIN_MODES: tuple[str, ...] = ("base_only", "proportional")
DEFAULT_RETAIN_FRACTION = Decimal("0.05")
DEFAULT_DRAIN_MODE: DrainMode = "base_only"


@dataclass(frozen=True)
class RugPullImpact:
    """Preview of a drain; nothing about the pool changes until it is applied."""

    retain_fraction: Decimal
    drain_mode: DrainMode
    new_token_reserve: Decimal
    new_base_reserve: Decimal
    new_total_liquidity: Decimal
    drained_token_amount: Decimal
    drained_base_amount: Decimal
    stolen_amount: Decimal
    old_price: Decimal
    new_price: Decimal
    price_drop_pct: Decimal


@dataclass(frozen=True)
class RugPullResult:
    pool: Pool
    impact: RugPullImpact


def ensure_ruggable(pool: Pool) -> None:
    if pool.is_rugged:
        raise AlreadyRuggedError(f"Pool {pool.id} was already rug pulled.")
    if not pool.is_active:
        raise PoolInactiveError(f"Pool {pool.id} is not active.")


def ensure_creator(pool: Pool, *, requested_by: str | None) -> None:
    """Anonymous requests pass; a named caller must be the pool's creator."""
    if requested_by is not None and requested_by != pool.creator:
        raise NotPoolCreatorError(f"Only {pool.creator} can rug pull pool {pool.id}.")


def calculate_rug_impact(
    pool: Pool,
    *,
    retain_fraction: Decimal = DEFAULT_RETAIN_FRACTION,
    drain_mode: DrainMode = DEFAULT_DRAIN_MODE,
) -> RugPullImpact:
    """Reserves and price collapse left behind by draining the pool.

    ``base_only`` pulls the valuable side and leaves the holders' tokens in
    the pool, so the spot price falls by the drained fraction.
    ``proportional`` withdraws both sides by the same fraction, which keeps
    the spot price where it was.
    """
    if retain_fraction < 0 or retain_fraction >= 1:
        raise InvalidInputError("retain_fraction must be in [0, 1).")
    if drain_mode not in DRAIN_MODES:
        raise InvalidInputError(f"drain_mode must be one of {', '.join(DRAIN_MODES)}.")

    new_base_reserve = pool.base_reserve * retain_fraction
    if drain_mode == "proportional":
        new_token_reserve = pool.token_reserve * retain_fraction
    else:
        new_token_reserve = pool.token_reserve

    old_price = spot_price(pool)
    new_price = price_from_reserves(
        token_reserve=new_token_reserve,
        base_reserve=new_base_reserve,
    )
    price_drop_pct = (old_price - new_price) / old_price * HUNDRED if old_price > 0 else ZERO

    return RugPullImpact(
        retain_fraction=retain_fraction,
        drain_mode=drain_mode,
        new_token_reserve=new_token_reserve,
        new_base_reserve=new_base_reserve,
        new_total_liquidity=geometric_liquidity(
            token_reserve=new_token_reserve,
            base_reserve=new_base_reserve,
        ),
        drained_token_amount=pool.token_reserve - new_token_reserve,
        drained_base_amount=pool.base_reserve - new_base_reserve,
        stolen_amount=pool.total_liquidity * (Decimal("1") - retain_fraction),
        old_price=old_price,
        new_price=new_price,
        price_drop_pct=price_drop_pct,
    )


def execute_rug_pull(
    pool: Pool,
    *,
    now: datetime,
    retain_fraction: Decimal = DEFAULT_RETAIN_FRACTION,
    drain_mode: DrainMode = DEFAULT_DRAIN_MODE,
) -> RugPullResult:
    ensure_ruggable(pool)
    impact = calculate_rug_impact(pool, retain_fraction=retain_fraction, drain_mode=drain_mode)
    rugged = replace(
        pool,
        token_reserve=impact.new_token_reserve,
        base_reserve=impact.new_base_reserve,
        total_liquidity=impact.new_total_liquidity,
        is_active=False,
        is_rugged=True,
        rug_date=now,
    )
    return RugPullResult(pool=rugged, impact=impact)
