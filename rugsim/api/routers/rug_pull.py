from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from rugsim.api.deps import get_execute_rug_pull_use_case, get_preview_rug_pull_use_case
from rugsim.api.schemas.pools import PoolResponse, RugPullImpactResponse, RugPullRequest, RugPullResponse
from rugsim.api.schemas.transactions import TransactionResponse
from rugsim.application.dto.rug_pull import ExecuteRugPullInput, PreviewRugPullInput
from rugsim.application.use_cases.execute_rug_pull import ExecuteRugPullUseCase, PreviewRugPullUseCase
from rugsim.domain.exceptions import (
    InvalidInputError,
    NotPoolCreatorError,
    PersistenceError,
    PoolInactiveError,
    PoolNotFoundError,
)
from rugsim.domain.services.rug_pull import RugPullImpact

router = APIRouter()


def _impact_response(impact: RugPullImpact) -> RugPullImpactResponse:
    return RugPullImpactResponse(
        retain_fraction=impact.retain_fraction,
        drain_mode=impact.drain_mode,
        new_token_reserve=impact.new_token_reserve,
        new_base_reserve=impact.new_base_reserve,
        new_total_liquidity=impact.new_total_liquidity,
        drained_token_amount=impact.drained_token_amount,
        drained_base_amount=impact.drained_base_amount,
        stolen_amount=impact.stolen_amount,
        old_price=impact.old_price,
        new_price=impact.new_price,
        price_drop_pct=impact.price_drop_pct,
    )


@router.post("/v1/pools/{pool_id}/rug-pull/preview", response_model=RugPullImpactResponse)
def preview_rug_pull(
    pool_id: str,
    use_case: PreviewRugPullUseCase = Depends(get_preview_rug_pull_use_case),
):
    try:
        impact = use_case.execute(PreviewRugPullInput(pool_id=pool_id))
    except PoolNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PoolInactiveError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc

    return _impact_response(impact)


@router.post("/v1/pools/{pool_id}/rug-pull", response_model=RugPullResponse)
def rug_pull(
    pool_id: str,
    req: RugPullRequest | None = None,
    use_case: ExecuteRugPullUseCase = Depends(get_execute_rug_pull_use_case),
):
    requested_by = req.user if req is not None else None
    try:
        output = use_case.execute(ExecuteRugPullInput(pool_id=pool_id, requested_by=requested_by))
    except PoolNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except NotPoolCreatorError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    except PoolInactiveError as exc:
        # AlreadyRuggedError lands here too.
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    return RugPullResponse(
        pool=PoolResponse.from_entity(output.pool),
        impact=_impact_response(output.impact),
        transaction=TransactionResponse.from_entity(output.transaction),
    )
