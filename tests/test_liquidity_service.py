from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from rugsim.domain.entities.token import Token
from rugsim.domain.exceptions import InvalidInputError, PoolInactiveError
from rugsim.domain.services.liquidity import (
    add_liquidity,
    create_pool,
    geometric_liquidity,
    remove_liquidity,
)

NOW = datetime(2024, 5, 1, tzinfo=timezone.utc)


def _token() -> Token:
    return Token(
        id="token-1",
        name="Rug Coin",
        symbol="RUG",
        total_supply=Decimal("1000000"),
        decimals=18,
        description="",
        creator="tester",
        created_at=NOW,
    )


def _pool(**overrides):
    pool = create_pool(
        token=_token(),
        token_reserve=Decimal("100000"),
        base_reserve=Decimal("10"),
        pool_id="pool-1",
        creator="tester",
        now=NOW,
    )
    if overrides:
        pool = replace(pool, **overrides)
    return pool


def test_create_pool_uses_geometric_mean_liquidity():
    pool = _pool()

    assert pool.total_liquidity == Decimal("1000")
    assert pool.name == "RUG/SOL Pool"
    assert pool.is_active is True
    assert pool.is_rugged is False
    assert pool.rug_date is None


def test_create_pool_names_pair_after_base_symbol():
    pool = create_pool(
        token=_token(),
        token_reserve=Decimal("1"),
        base_reserve=Decimal("1"),
        pool_id="pool-2",
        creator="tester",
        now=NOW,
        base_symbol="ETH",
    )
    assert pool.name == "RUG/ETH Pool"


@pytest.mark.parametrize(
    "token_reserve,base_reserve",
    [(Decimal("0"), Decimal("10")), (Decimal("10"), Decimal("0")), (Decimal("-1"), Decimal("10"))],
)
def test_create_pool_rejects_non_positive_reserves(token_reserve, base_reserve):
    with pytest.raises(InvalidInputError):
        create_pool(
            token=_token(),
            token_reserve=token_reserve,
            base_reserve=base_reserve,
            pool_id="pool-1",
            creator="tester",
            now=NOW,
        )


def test_geometric_liquidity_is_zero_for_empty_side():
    assert geometric_liquidity(token_reserve=Decimal("0"), base_reserve=Decimal("5")) == Decimal("0")


def test_add_liquidity_grows_reserves_and_liquidity():
    change = add_liquidity(_pool(), token_amount=Decimal("100000"), base_amount=Decimal("10"))

    assert change.pool.token_reserve == Decimal("200000")
    assert change.pool.base_reserve == Decimal("20")
    assert change.pool.total_liquidity == Decimal("2000")
    assert change.liquidity_delta == Decimal("1000")


def test_add_liquidity_rejects_empty_amounts():
    with pytest.raises(InvalidInputError):
        add_liquidity(_pool(), token_amount=Decimal("0"), base_amount=Decimal("1"))


def test_remove_liquidity_withdraws_both_sides_by_fraction():
    change = remove_liquidity(_pool(), fraction=Decimal("0.5"))

    assert change.token_amount == Decimal("50000")
    assert change.base_amount == Decimal("5")
    assert change.pool.total_liquidity == Decimal("500")
    assert change.liquidity_delta == Decimal("-500")
    # withdrawing both sides evenly keeps the price
    assert change.pool.base_reserve / change.pool.token_reserve == Decimal("10") / Decimal("100000")


@pytest.mark.parametrize("fraction", [Decimal("0"), Decimal("1"), Decimal("1.5"), Decimal("-0.1")])
def test_remove_liquidity_rejects_fraction_outside_open_interval(fraction):
    with pytest.raises(InvalidInputError):
        remove_liquidity(_pool(), fraction=fraction)


def test_rugged_pool_rejects_liquidity_changes():
    rugged = _pool(is_rugged=True, is_active=False)

    with pytest.raises(PoolInactiveError):
        add_liquidity(rugged, token_amount=Decimal("1"), base_amount=Decimal("1"))
    with pytest.raises(PoolInactiveError):
        remove_liquidity(rugged, fraction=Decimal("0.1"))
