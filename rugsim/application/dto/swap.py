from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from rugsim.domain.entities.pool import Pool
from rugsim.domain.entities.transaction import Transaction
from rugsim.domain.services.reserves import Direction
from rugsim.domain.services.swap import SwapResult


@dataclass(frozen=True)
class QuoteSwapInput:
    pool_id: str
    amount_in: Decimal
    direction: Direction


@dataclass(frozen=True)
class ExecuteSwapInput:
    pool_id: str
    amount_in: Decimal
    direction: Direction
    user: str = "Simulator User"


@dataclass(frozen=True)
class SwapOutput:
    pool: Pool
    result: SwapResult
    transaction: Transaction
