from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from rugsim.api.deps import get_execute_swap_use_case, get_quote_swap_use_case
from rugsim.api.schemas.pools import PoolResponse, SwapQuoteResponse, SwapRequest, SwapResponse
from rugsim.api.schemas.transactions import TransactionResponse
from rugsim.application.dto.swap import ExecuteSwapInput, QuoteSwapInput
from rugsim.application.use_cases.execute_swap import ExecuteSwapUseCase
from rugsim.application.use_cases.quote_swap import QuoteSwapUseCase
from rugsim.domain.exceptions import (
    InvalidInputError,
    PersistenceError,
    PoolInactiveError,
    PoolNotFoundError,
)
from rugsim.domain.services.swap import SwapResult

router = APIRouter()


def _quote_response(result: SwapResult) -> SwapQuoteResponse:
    return SwapQuoteResponse(
        direction=result.direction,
        amount_in=result.amount_in,
        amount_out=result.amount_out,
        fee_paid=result.fee_paid,
        new_token_reserve=result.new_token_reserve,
        new_base_reserve=result.new_base_reserve,
        price_before=result.price_before,
        price_after=result.price_after,
        price_impact_pct=result.price_impact_pct,
        slippage_pct=result.slippage_pct,
        execution_price=result.execution_price,
    )


@router.post("/v1/pools/{pool_id}/quote", response_model=SwapQuoteResponse)
def quote_swap(
    pool_id: str,
    req: SwapRequest,
    use_case: QuoteSwapUseCase = Depends(get_quote_swap_use_case),
):
    try:
        result = use_case.execute(
            QuoteSwapInput(pool_id=pool_id, amount_in=req.amount_in, direction=req.direction)
        )
    except PoolNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PoolInactiveError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc

    return _quote_response(result)


@router.post("/v1/pools/{pool_id}/swaps", response_model=SwapResponse)
def execute_swap(
    pool_id: str,
    req: SwapRequest,
    use_case: ExecuteSwapUseCase = Depends(get_execute_swap_use_case),
):
    try:
        output = use_case.execute(
            ExecuteSwapInput(
                pool_id=pool_id,
                amount_in=req.amount_in,
                direction=req.direction,
                user=req.user,
            )
        )
    except PoolNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PoolInactiveError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    return SwapResponse(
        pool=PoolResponse.from_entity(output.pool),
        quote=_quote_response(output.result),
        transaction=TransactionResponse.from_entity(output.transaction),
    )
