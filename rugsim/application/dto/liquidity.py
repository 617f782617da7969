from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from rugsim.domain.entities.pool import Pool
from rugsim.domain.entities.transaction import Transaction


@dataclass(frozen=True)
class AddLiquidityInput:
    pool_id: str
    token_amount: Decimal
    base_amount: Decimal
    user: str = "Simulator User"


@dataclass(frozen=True)
class RemoveLiquidityInput:
    pool_id: str
    fraction: Decimal
    user: str = "Simulator User"


@dataclass(frozen=True)
class LiquidityOutput:
    pool: Pool
    transaction: Transaction
    token_amount: Decimal
    base_amount: Decimal
    liquidity_delta: Decimal
