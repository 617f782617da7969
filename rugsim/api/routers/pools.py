from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from rugsim.api.deps import get_create_pool_use_case, get_list_pools_use_case, get_pool_use_case
from rugsim.api.schemas.pools import CreatePoolRequest, PoolResponse
from rugsim.application.dto.create_pool import CreatePoolInput
from rugsim.application.use_cases.create_pool import CreatePoolUseCase
from rugsim.application.use_cases.list_records import GetPoolUseCase, ListPoolsUseCase
from rugsim.domain.exceptions import (
    InvalidInputError,
    PersistenceError,
    PoolNotFoundError,
    TokenNotFoundError,
)

router = APIRouter()


@router.post("/v1/pools", response_model=PoolResponse, status_code=201)
def create_pool(
    req: CreatePoolRequest,
    use_case: CreatePoolUseCase = Depends(get_create_pool_use_case),
):
    try:
        pool = use_case.execute(
            CreatePoolInput(
                token_id=req.token_id,
                token_reserve=req.token_reserve,
                base_reserve=req.base_reserve,
                creator=req.creator,
            )
        )
    except TokenNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    return PoolResponse.from_entity(pool)


@router.get("/v1/pools", response_model=list[PoolResponse])
def list_pools(use_case: ListPoolsUseCase = Depends(get_list_pools_use_case)):
    return [PoolResponse.from_entity(pool) for pool in use_case.execute()]


@router.get("/v1/pools/{pool_id}", response_model=PoolResponse)
def get_pool(
    pool_id: str,
    use_case: GetPoolUseCase = Depends(get_pool_use_case),
):
    try:
        pool = use_case.execute(pool_id=pool_id)
    except PoolNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    return PoolResponse.from_entity(pool)
