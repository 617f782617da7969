from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


TOKEN_SCHEMA_VERSION = 1
DEFAULT_TOTAL_SUPPLY = Decimal("1000000")
DEFAULT_DECIMALS = 18


@dataclass(frozen=True)
class Token:
    id: str
    name: str
    symbol: str
    total_supply: Decimal
    decimals: int
    description: str
    creator: str
    created_at: datetime
    schema_version: int = TOKEN_SCHEMA_VERSION
