from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from rugsim.domain.entities.transaction import Transaction


class ReserveSnapshotResponse(BaseModel):
    token_reserve: Decimal
    base_reserve: Decimal


class TransactionResponse(BaseModel):
    id: str
    type: str
    type_label: str
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
    reserves_after: ReserveSnapshotResponse | None
    user: str
    status: str
    hash: str
    timestamp: datetime

    @classmethod
    def from_entity(cls, transaction: Transaction) -> "TransactionResponse":
        reserves = transaction.reserves_after
        return cls(
            id=transaction.id,
            type=transaction.type,
            type_label=transaction.type_label,
            pool_id=transaction.pool_id,
            token_id=transaction.token_id,
            token_symbol=transaction.token_symbol,
            amount_in=transaction.amount_in,
            amount_out=transaction.amount_out,
            token_in=transaction.token_in,
            token_out=transaction.token_out,
            price=transaction.price,
            price_impact_pct=transaction.price_impact_pct,
            slippage_pct=transaction.slippage_pct,
            reserves_after=(
                ReserveSnapshotResponse(
                    token_reserve=reserves.token_reserve,
                    base_reserve=reserves.base_reserve,
                )
                if reserves is not None
                else None
            ),
            user=transaction.user,
            status=transaction.status,
            hash=transaction.hash,
            timestamp=transaction.timestamp,
        )
