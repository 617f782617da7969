from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from rugsim.api.deps import get_analytics_use_case, get_dashboard_use_case
from rugsim.api.schemas.analytics import (
    AnalyticsResponse,
    DashboardResponse,
    TokenPerformanceResponse,
    TokenPriceChangeResponse,
)
from rugsim.api.schemas.transactions import TransactionResponse
from rugsim.application.dto.analytics import GetAnalyticsInput
from rugsim.application.use_cases.get_analytics import GetAnalyticsUseCase, GetDashboardUseCase
from rugsim.domain.exceptions import InvalidInputError

router = APIRouter()


@router.get("/v1/analytics", response_model=AnalyticsResponse)
def get_analytics(
    timeframe: str = "all",
    use_case: GetAnalyticsUseCase = Depends(get_analytics_use_case),
):
    try:
        summary = use_case.execute(GetAnalyticsInput(timeframe=timeframe))
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return AnalyticsResponse(
        timeframe=summary.timeframe,
        total_transactions=summary.total_transactions,
        total_volume=summary.total_volume,
        transaction_types=summary.transaction_types,
        rug_pulls=summary.rug_pulls,
        total_rugged_value=summary.total_rugged_value,
        average_slippage=summary.average_slippage,
        token_performance=[
            TokenPerformanceResponse(
                token_id=row.token_id,
                name=row.name,
                symbol=row.symbol,
                transaction_count=row.transaction_count,
                total_volume=row.total_volume,
                is_rugged=row.is_rugged,
                pool_count=row.pool_count,
            )
            for row in summary.token_performance
        ],
    )


@router.get("/v1/dashboard", response_model=DashboardResponse)
def get_dashboard(use_case: GetDashboardUseCase = Depends(get_dashboard_use_case)):
    overview = use_case.execute()
    return DashboardResponse(
        total_tokens=overview.total_tokens,
        total_pools=overview.total_pools,
        total_transactions=overview.total_transactions,
        total_value_locked=overview.total_value_locked,
        rugged_pools=overview.rugged_pools,
        recent_transactions=[TransactionResponse.from_entity(row) for row in overview.recent_transactions],
        token_price_changes=[
            TokenPriceChangeResponse(token_id=row.token_id, symbol=row.symbol, change_pct=row.change_pct)
            for row in overview.token_price_changes
        ],
    )
