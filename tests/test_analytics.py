from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from rugsim.domain.entities.pool import Pool, ReserveSnapshot
from rugsim.domain.entities.token import Token
from rugsim.domain.entities.transaction import Transaction
from rugsim.domain.exceptions import InvalidInputError
from rugsim.domain.services.analytics import (
    dashboard_overview,
    filter_by_timeframe,
    summarize,
    token_price_change,
)

NOW = datetime(2024, 5, 10, 12, tzinfo=timezone.utc)


def _token(token_id: str, symbol: str) -> Token:
    return Token(
        id=token_id,
        name=f"{symbol} coin",
        symbol=symbol,
        total_supply=Decimal("1000000"),
        decimals=18,
        description="",
        creator="tester",
        created_at=NOW,
    )


def _pool(pool_id: str, token_id: str, *, rugged: bool = False, liquidity: str = "100") -> Pool:
    return Pool(
        id=pool_id,
        name="pool",
        token_id=token_id,
        token_symbol="X",
        token_reserve=Decimal("1000"),
        base_reserve=Decimal("10"),
        total_liquidity=Decimal(liquidity),
        creator="tester",
        created_at=NOW,
        is_active=not rugged,
        is_rugged=rugged,
    )


def _tx(
    type_: str,
    *,
    token_id: str = "token-a",
    amount_in: str = "10",
    slippage: str = "0",
    price: str = "0.01",
    age: timedelta = timedelta(0),
    reserves: tuple[str, str] | None = None,
) -> Transaction:
    snapshot = None
    if reserves is not None:
        snapshot = ReserveSnapshot(token_reserve=Decimal(reserves[0]), base_reserve=Decimal(reserves[1]))
    return Transaction(
        type=type_,
        pool_id="pool-a",
        token_id=token_id,
        token_symbol="A",
        amount_in=Decimal(amount_in),
        amount_out=Decimal("1"),
        token_in="A",
        token_out="SOL",
        price=Decimal(price),
        price_impact_pct=Decimal("0"),
        slippage_pct=Decimal(slippage),
        reserves_after=snapshot,
        timestamp=NOW - age,
    )


# newest first, the way the ledger hands them out
HISTORY = [
    _tx("swap", amount_in="10", slippage="2", age=timedelta(minutes=10)),
    _tx("rug_pull", amount_in="95", age=timedelta(hours=2)),
    _tx("swap", token_id="token-b", amount_in="4", slippage="4", age=timedelta(hours=5)),
    _tx("create_pool", amount_in="1000", age=timedelta(days=3)),
]


@pytest.mark.parametrize("timeframe,expected", [("1h", 1), ("24h", 3), ("7d", 4), ("all", 4)])
def test_filter_by_timeframe(timeframe, expected):
    assert len(filter_by_timeframe(HISTORY, timeframe=timeframe, now=NOW)) == expected


def test_filter_rejects_unknown_timeframe():
    with pytest.raises(InvalidInputError):
        filter_by_timeframe(HISTORY, timeframe="30d", now=NOW)


def test_summarize_empty_inputs():
    summary = summarize([], [], [], "all", now=NOW)

    assert summary.total_transactions == 0
    assert summary.total_volume == Decimal("0")
    assert summary.transaction_types == {}
    assert summary.rug_pulls == 0
    assert summary.total_rugged_value == Decimal("0")
    assert summary.average_slippage == Decimal("0")
    assert summary.token_performance == []


def test_summarize_counts_volume_and_rug_pulls():
    tokens = [_token("token-a", "A"), _token("token-b", "B")]
    pools = [_pool("pool-a", "token-a", rugged=True), _pool("pool-b", "token-b")]

    summary = summarize(HISTORY, pools, tokens, "24h", now=NOW)

    assert summary.timeframe == "24h"
    assert summary.total_transactions == 3
    assert summary.total_volume == Decimal("109")
    assert summary.transaction_types == {"swap": 2, "rug_pull": 1}
    assert summary.rug_pulls == 1
    assert summary.total_rugged_value == Decimal("95")
    assert summary.average_slippage == Decimal("3")


def test_summarize_ranks_tokens_by_volume():
    tokens = [_token("token-b", "B"), _token("token-a", "A")]
    pools = [_pool("pool-a", "token-a", rugged=True), _pool("pool-b", "token-b")]

    summary = summarize(HISTORY, pools, tokens, "all", now=NOW)

    assert [row.symbol for row in summary.token_performance] == ["A", "B"]
    top = summary.token_performance[0]
    assert top.transaction_count == 3
    assert top.total_volume == Decimal("1105")
    assert top.is_rugged is True
    assert top.pool_count == 1
    assert summary.token_performance[1].is_rugged is False


def test_token_price_change_uses_two_latest_reserve_snapshots():
    history = [
        _tx("swap", reserves=("500", "20")),
        _tx("swap", reserves=("1000", "20")),
        _tx("create_pool", reserves=("1000", "10")),
        _tx("mint_token"),
    ]

    assert token_price_change(history, token_id="token-a") == Decimal("100")
    assert token_price_change(history[1:], token_id="token-a") == Decimal("100")
    assert token_price_change(history[2:], token_id="token-a") == Decimal("0")
    assert token_price_change(history, token_id="missing") == Decimal("0")


def test_token_price_change_ignores_recorded_trade_price_units():
    # a sell records a token-denominated amount_in; the move is read from reserves
    history = [
        _tx("swap", amount_in="10", price="1.0101", reserves=("1010", "9.901970")),
        _tx("create_pool", amount_in="1000", price="0.01", reserves=("1000", "10")),
    ]

    change = token_price_change(history, token_id="token-a")

    assert Decimal("-2") < change < Decimal("-1.9")


def test_token_price_change_after_rug_pull_reports_the_crash():
    history = [
        _tx("rug_pull", reserves=("1000", "0.5")),
        _tx("create_pool", reserves=("1000", "10")),
    ]

    assert token_price_change(history, token_id="token-a") == Decimal("-95")


def test_dashboard_overview():
    tokens = [_token("token-a", "A"), _token("token-b", "B")]
    pools = [_pool("pool-a", "token-a", rugged=True, liquidity="22"), _pool("pool-b", "token-b", liquidity="100")]
    history = [_tx("swap", amount_in=str(i)) for i in range(7)]

    overview = dashboard_overview(history, pools, tokens)

    assert overview.total_tokens == 2
    assert overview.total_pools == 2
    assert overview.total_transactions == 7
    assert overview.total_value_locked == Decimal("122")
    assert overview.rugged_pools == 1
    assert [tx.amount_in for tx in overview.recent_transactions] == [Decimal(i) for i in range(5)]
    assert [row.symbol for row in overview.token_price_changes] == ["A", "B"]
