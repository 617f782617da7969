from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

from rugsim.domain.entities.pool import Pool
from rugsim.domain.services.reserves import spot_price
from rugsim.api.schemas.transactions import TransactionResponse


class CreatePoolRequest(BaseModel):
    token_id: str = Field(..., description="Token minted beforehand.")
    token_reserve: Decimal = Field(..., description="Initial token side of the pool.")
    base_reserve: Decimal = Field(..., description="Initial SOL side of the pool.")
    creator: str = "Simulator User"


class PoolResponse(BaseModel):
    id: str
    name: str
    token_id: str
    token_symbol: str
    token_reserve: Decimal
    base_reserve: Decimal
    total_liquidity: Decimal
    price: Decimal
    creator: str
    created_at: datetime
    is_active: bool
    is_rugged: bool
    rug_date: datetime | None

    @classmethod
    def from_entity(cls, pool: Pool) -> "PoolResponse":
        return cls(
            id=pool.id,
            name=pool.name,
            token_id=pool.token_id,
            token_symbol=pool.token_symbol,
            token_reserve=pool.token_reserve,
            base_reserve=pool.base_reserve,
            total_liquidity=pool.total_liquidity,
            price=spot_price(pool),
            creator=pool.creator,
            created_at=pool.created_at,
            is_active=pool.is_active,
            is_rugged=pool.is_rugged,
            rug_date=pool.rug_date,
        )


class SwapRequest(BaseModel):
    amount_in: Decimal = Field(..., description="Amount paid in, fee included.")
    direction: Literal["token_to_base", "base_to_token"] = Field(
        ...,
        description="token_to_base sells the token, base_to_token buys it.",
    )
    user: str = "Simulator User"


class SwapQuoteResponse(BaseModel):
    direction: str
    amount_in: Decimal
    amount_out: Decimal
    fee_paid: Decimal
    new_token_reserve: Decimal
    new_base_reserve: Decimal
    price_before: Decimal
    price_after: Decimal
    price_impact_pct: Decimal
    slippage_pct: Decimal
    execution_price: Decimal


class SwapResponse(BaseModel):
    pool: PoolResponse
    quote: SwapQuoteResponse
    transaction: TransactionResponse


class AddLiquidityRequest(BaseModel):
    token_amount: Decimal
    base_amount: Decimal
    user: str = "Simulator User"


class RemoveLiquidityRequest(BaseModel):
    fraction: Decimal = Field(..., description="Share of both reserves to withdraw, 0 < fraction < 1.")
    user: str = "Simulator User"


class LiquidityResponse(BaseModel):
    pool: PoolResponse
    token_amount: Decimal
    base_amount: Decimal
    liquidity_delta: Decimal
    transaction: TransactionResponse


class RugPullRequest(BaseModel):
    user: str | None = Field(
        default=None,
        description="When set, must match the pool creator.",
    )


class RugPullImpactResponse(BaseModel):
    retain_fraction: Decimal
    drain_mode: str
    new_token_reserve: Decimal
    new_base_reserve: Decimal
    new_total_liquidity: Decimal
    drained_token_amount: Decimal
    drained_base_amount: Decimal
    stolen_amount: Decimal
    old_price: Decimal
    new_price: Decimal
    price_drop_pct: Decimal


class RugPullResponse(BaseModel):
    pool: PoolResponse
    impact: RugPullImpactResponse
    transaction: TransactionResponse
