from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from rugsim.api.deps import get_list_tokens_use_case, get_mint_token_use_case
from rugsim.api.schemas.tokens import MintTokenRequest, TokenResponse
from rugsim.application.dto.mint_token import MintTokenInput
from rugsim.application.use_cases.list_records import ListTokensUseCase
from rugsim.application.use_cases.mint_token import MintTokenUseCase
from rugsim.domain.exceptions import InvalidInputError, PersistenceError

router = APIRouter()


@router.post("/v1/tokens", response_model=TokenResponse, status_code=201)
def mint_token(
    req: MintTokenRequest,
    use_case: MintTokenUseCase = Depends(get_mint_token_use_case),
):
    try:
        token = use_case.execute(
            MintTokenInput(
                name=req.name,
                symbol=req.symbol,
                total_supply=req.total_supply,
                decimals=req.decimals,
                description=req.description,
                creator=req.creator,
            )
        )
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    return TokenResponse.from_entity(token)


@router.get("/v1/tokens", response_model=list[TokenResponse])
def list_tokens(use_case: ListTokensUseCase = Depends(get_list_tokens_use_case)):
    return [TokenResponse.from_entity(token) for token in use_case.execute()]
