from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


POOL_SCHEMA_VERSION = 1


@dataclass(frozen=True)
class Pool:
    id: str
    name: str
    token_id: str
    token_symbol: str
    token_reserve: Decimal
    base_reserve: Decimal
    total_liquidity: Decimal
    creator: str
    created_at: datetime
    is_active: bool = True
    is_rugged: bool = False
    rug_date: datetime | None = None
    schema_version: int = POOL_SCHEMA_VERSION


@dataclass(frozen=True)
class ReserveSnapshot:
    token_reserve: Decimal
    base_reserve: Decimal

    @classmethod
    def of(cls, pool: Pool) -> "ReserveSnapshot":
        return cls(token_reserve=pool.token_reserve, base_reserve=pool.base_reserve)
