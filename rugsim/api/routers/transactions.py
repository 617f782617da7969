from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from rugsim.api.deps import get_list_transactions_use_case
from rugsim.api.schemas.transactions import TransactionResponse
from rugsim.application.dto.transactions import ListTransactionsInput
from rugsim.application.use_cases.list_records import ListTransactionsUseCase
from rugsim.domain.exceptions import InvalidInputError

router = APIRouter()


@router.get("/v1/transactions", response_model=list[TransactionResponse])
def list_transactions(
    pool_id: str | None = None,
    limit: int = Query(100, description="Most recent first."),
    use_case: ListTransactionsUseCase = Depends(get_list_transactions_use_case),
):
    try:
        rows = use_case.execute(ListTransactionsInput(pool_id=pool_id, limit=limit))
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return [TransactionResponse.from_entity(row) for row in rows]
