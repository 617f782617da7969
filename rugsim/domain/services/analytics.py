from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta
from decimal import Decimal

from rugsim.domain.entities.analytics import (
    TIMEFRAME_HOURS,
    AnalyticsSummary,
    DashboardOverview,
    Timeframe,
    TokenPerformance,
    TokenPriceChange,
)
from rugsim.domain.entities.pool import Pool
from rugsim.domain.entities.token import Token
from rugsim.domain.entities.transaction import Transaction
from rugsim.domain.exceptions import InvalidInputError
from rugsim.domain.services.reserves import (
    ZERO,
    percent_change,
    price_from_reserves,
    total_value_locked,
)


RECENT_TRANSACTIONS_LIMIT = 5


def filter_by_timeframe(
    transactions: Iterable[Transaction],
    *,
    timeframe: Timeframe,
    now: datetime,
) -> list[Transaction]:
    if timeframe not in TIMEFRAME_HOURS:
        raise InvalidInputError(f"timeframe must be one of {', '.join(TIMEFRAME_HOURS)}.")
    hours = TIMEFRAME_HOURS[timeframe]
    if hours is None:
        return list(transactions)
    cutoff = now - timedelta(hours=hours)
    return [tx for tx in transactions if tx.timestamp is not None and tx.timestamp >= cutoff]


def _sum_amount_in(transactions: Iterable[Transaction]) -> Decimal:
    return sum((tx.amount_in for tx in transactions), ZERO)


def summarize(
    transactions: Iterable[Transaction],
    pools: Iterable[Pool],
    tokens: Iterable[Token],
    timeframe: Timeframe,
    *,
    now: datetime,
) -> AnalyticsSummary:
    filtered = filter_by_timeframe(transactions, timeframe=timeframe, now=now)
    pools = list(pools)

    rug_pulls = [tx for tx in filtered if tx.is_rug_pull]
    swaps = [tx for tx in filtered if tx.type == "swap"]
    average_slippage = ZERO
    if swaps:
        average_slippage = sum((tx.slippage_pct for tx in swaps), ZERO) / Decimal(len(swaps))

    performance: list[TokenPerformance] = []
    for token in tokens:
        token_transactions = [tx for tx in filtered if tx.token_id == token.id]
        token_pools = [pool for pool in pools if pool.token_id == token.id]
        performance.append(
            TokenPerformance(
                token_id=token.id,
                name=token.name,
                symbol=token.symbol,
                transaction_count=len(token_transactions),
                total_volume=_sum_amount_in(token_transactions),
                is_rugged=any(pool.is_rugged for pool in token_pools),
                pool_count=len(token_pools),
            )
        )
    performance.sort(key=lambda row: row.total_volume, reverse=True)

    return AnalyticsSummary(
        timeframe=timeframe,
        total_transactions=len(filtered),
        total_volume=_sum_amount_in(filtered),
        transaction_types=dict(Counter(tx.type for tx in filtered)),
        rug_pulls=len(rug_pulls),
        total_rugged_value=_sum_amount_in(rug_pulls),
        average_slippage=average_slippage,
        token_performance=performance,
    )


def _snapshot_price(tx: Transaction) -> Decimal:
    return price_from_reserves(
        token_reserve=tx.reserves_after.token_reserve,
        base_reserve=tx.reserves_after.base_reserve,
    )


def token_price_change(transactions: Sequence[Transaction], *, token_id: str) -> Decimal:
    """Spot price move between the two most recent reserve snapshots of ``token_id``.

    ``transactions`` is newest first. Records without reserves (mints) are skipped.
    """
    priced = [tx for tx in transactions if tx.token_id == token_id and tx.reserves_after is not None]
    if len(priced) < 2:
        return ZERO
    latest, previous = priced[0], priced[1]
    return percent_change(old=_snapshot_price(previous), new=_snapshot_price(latest))


def dashboard_overview(
    transactions: Sequence[Transaction],
    pools: Iterable[Pool],
    tokens: Iterable[Token],
) -> DashboardOverview:
    pools = list(pools)
    tokens = list(tokens)
    return DashboardOverview(
        total_tokens=len(tokens),
        total_pools=len(pools),
        total_transactions=len(transactions),
        total_value_locked=sum((total_value_locked(pool) for pool in pools), ZERO),
        rugged_pools=sum(1 for pool in pools if pool.is_rugged),
        recent_transactions=list(transactions[:RECENT_TRANSACTIONS_LIMIT]),
        token_price_changes=[
            TokenPriceChange(
                token_id=token.id,
                symbol=token.symbol,
                change_pct=token_price_change(transactions, token_id=token.id),
            )
            for token in tokens
        ],
    )
