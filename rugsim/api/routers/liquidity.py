from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from rugsim.api.deps import get_add_liquidity_use_case, get_remove_liquidity_use_case
from rugsim.api.schemas.pools import (
    AddLiquidityRequest,
    LiquidityResponse,
    PoolResponse,
    RemoveLiquidityRequest,
)
from rugsim.api.schemas.transactions import TransactionResponse
from rugsim.application.dto.liquidity import AddLiquidityInput, LiquidityOutput, RemoveLiquidityInput
from rugsim.application.use_cases.manage_liquidity import AddLiquidityUseCase, RemoveLiquidityUseCase
from rugsim.domain.exceptions import (
    InvalidInputError,
    PersistenceError,
    PoolInactiveError,
    PoolNotFoundError,
)

router = APIRouter()


def _liquidity_response(output: LiquidityOutput) -> LiquidityResponse:
    return LiquidityResponse(
        pool=PoolResponse.from_entity(output.pool),
        token_amount=output.token_amount,
        base_amount=output.base_amount,
        liquidity_delta=output.liquidity_delta,
        transaction=TransactionResponse.from_entity(output.transaction),
    )


@router.post("/v1/pools/{pool_id}/liquidity/add", response_model=LiquidityResponse)
def add_liquidity(
    pool_id: str,
    req: AddLiquidityRequest,
    use_case: AddLiquidityUseCase = Depends(get_add_liquidity_use_case),
):
    try:
        output = use_case.execute(
            AddLiquidityInput(
                pool_id=pool_id,
                token_amount=req.token_amount,
                base_amount=req.base_amount,
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

    return _liquidity_response(output)


@router.post("/v1/pools/{pool_id}/liquidity/remove", response_model=LiquidityResponse)
def remove_liquidity(
    pool_id: str,
    req: RemoveLiquidityRequest,
    use_case: RemoveLiquidityUseCase = Depends(get_remove_liquidity_use_case),
):
    try:
        output = use_case.execute(
            RemoveLiquidityInput(pool_id=pool_id, fraction=req.fraction, user=req.user)
        )
    except PoolNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PoolInactiveError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    return _liquidity_response(output)
