from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal

from rugsim.domain.entities.transaction import Transaction


Timeframe = Literal["1h", "24h", "7d", "all"]

TIMEFRAME_HOURS: dict[str, int | None] = {
    "1h": 1,
    "24h": 24,
    "7d": 168,
    "all": None,
}


@dataclass(frozen=True)
class TokenPerformance:
    token_id: str
    name: str
    symbol: str
    transaction_count: int
    total_volume: Decimal
    is_rugged: bool
    pool_count: int


@dataclass(frozen=True)
class AnalyticsSummary:
    timeframe: Timeframe
    total_transactions: int
    total_volume: Decimal
    transaction_types: dict[str, int]
    rug_pulls: int
    total_rugged_value: Decimal
    average_slippage: Decimal
    token_performance: list[TokenPerformance] = field(default_factory=list)


@dataclass(frozen=True)
class TokenPriceChange:
    token_id: str
    symbol: str
    change_pct: Decimal


@dataclass(frozen=True)
class DashboardOverview:
    total_tokens: int
    total_pools: int
    total_transactions: int
    total_value_locked: Decimal
    rugged_pools: int
    recent_transactions: list[Transaction] = field(default_factory=list)
    token_price_changes: list[TokenPriceChange] = field(default_factory=list)
