from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Literal

from rugsim.domain.entities.pool import ReserveSnapshot


TRANSACTION_SCHEMA_VERSION = 1

TransactionType = Literal[
    "swap",
    "add_liquidity",
    "remove_liquidity",
    "rug_pull",
    "create_pool",
    "mint_token",
]

TRANSACTION_TYPES: tuple[str, ...] = (
    "swap",
    "add_liquidity",
    "remove_liquidity",
    "rug_pull",
    "create_pool",
    "mint_token",
)

TRANSACTION_TYPE_LABELS = {
    "swap": "Token Swap",
    "add_liquidity": "Add Liquidity",
    "remove_liquidity": "Remove Liquidity",
    "rug_pull": "Rug Pull",
    "mint_token": "Mint Token",
    "create_pool": "Create Pool",
}


@dataclass(frozen=True)
class Transaction:
    type: TransactionType
    pool_id: str
    token_id: str
    token_symbol: str
    amount_in: Decimal
    amount_out: Decimal
    token_in: str
    token_out: str
    price: Decimal
    price_impact_pct: Decimal
    slippage_pct: Decimal
    reserves_after: ReserveSnapshot | None
    user: str = "Anonymous"
    status: str = "completed"
    id: str | None = None
    hash: str | None = None
    timestamp: datetime | None = None
    schema_version: int = TRANSACTION_SCHEMA_VERSION

    @property
    def type_label(self) -> str:
        return TRANSACTION_TYPE_LABELS.get(self.type, self.type)

    @property
    def is_rug_pull(self) -> bool:
        return self.type == "rug_pull"
