from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from rugsim.domain.entities.token import DEFAULT_DECIMALS, DEFAULT_TOTAL_SUPPLY


@dataclass(frozen=True)
class MintTokenInput:
    name: str
    symbol: str
    total_supply: Decimal = DEFAULT_TOTAL_SUPPLY
    decimals: int = DEFAULT_DECIMALS
    description: str = ""
    creator: str = "Simulator User"
