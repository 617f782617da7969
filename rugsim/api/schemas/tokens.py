from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from rugsim.domain.entities.token import DEFAULT_DECIMALS, DEFAULT_TOTAL_SUPPLY, Token


class MintTokenRequest(BaseModel):
    name: str = Field(..., description="Token display name.")
    symbol: str = Field(..., description="Ticker, stored upper-case.")
    total_supply: Decimal = Field(DEFAULT_TOTAL_SUPPLY, description="Total minted supply.")
    decimals: int = Field(DEFAULT_DECIMALS, description="Display decimals (0-18).")
    description: str = ""
    creator: str = "Simulator User"


class TokenResponse(BaseModel):
    id: str
    name: str
    symbol: str
    total_supply: Decimal
    decimals: int
    description: str
    creator: str
    created_at: datetime

    @classmethod
    def from_entity(cls, token: Token) -> "TokenResponse":
        return cls(
            id=token.id,
            name=token.name,
            symbol=token.symbol,
            total_supply=token.total_supply,
            decimals=token.decimals,
            description=token.description,
            creator=token.creator,
            created_at=token.created_at,
        )
