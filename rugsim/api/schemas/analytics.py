from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel

from rugsim.api.schemas.transactions import TransactionResponse


class TokenPerformanceResponse(BaseModel):
    token_id: str
    name: str
    symbol: str
    transaction_count: int
    total_volume: Decimal
    is_rugged: bool
    pool_count: int


class AnalyticsResponse(BaseModel):
    timeframe: str
    total_transactions: int
    total_volume: Decimal
    transaction_types: dict[str, int]
    rug_pulls: int
    total_rugged_value: Decimal
    average_slippage: Decimal
    token_performance: list[TokenPerformanceResponse]


class TokenPriceChangeResponse(BaseModel):
    token_id: str
    symbol: str
    change_pct: Decimal


class DashboardResponse(BaseModel):
    total_tokens: int
    total_pools: int
    total_transactions: int
    total_value_locked: Decimal
    rugged_pools: int
    recent_transactions: list[TransactionResponse]
    token_price_changes: list[TokenPriceChangeResponse]
