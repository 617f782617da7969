from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from rugsim.domain.entities.pool import Pool, ReserveSnapshot
from rugsim.domain.entities.token import Token
from rugsim.domain.entities.transaction import Transaction


def dump_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def parse_timestamp(value: Any) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _dec(value: Any) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


def map_row_to_token(row: Mapping[str, Any]) -> Token:
    return Token(
        id=str(row["id"]),
        name=row["name"],
        symbol=row["symbol"],
        total_supply=_dec(row["total_supply"]),
        decimals=int(row["decimals"]),
        description=row["description"] or "",
        creator=row["creator"],
        created_at=parse_timestamp(row["created_at"]),
        schema_version=int(row["schema_version"]),
    )


def token_to_params(token: Token) -> dict[str, Any]:
    return {
        "id": token.id,
        "name": token.name,
        "symbol": token.symbol,
        "total_supply": str(token.total_supply),
        "decimals": token.decimals,
        "description": token.description,
        "creator": token.creator,
        "created_at": dump_timestamp(token.created_at),
        "schema_version": token.schema_version,
    }


def map_row_to_pool(row: Mapping[str, Any]) -> Pool:
    return Pool(
        id=str(row["id"]),
        name=row["name"],
        token_id=row["token_id"],
        token_symbol=row["token_symbol"],
        token_reserve=_dec(row["token_reserve"]),
        base_reserve=_dec(row["base_reserve"]),
        total_liquidity=_dec(row["total_liquidity"]),
        creator=row["creator"],
        created_at=parse_timestamp(row["created_at"]),
        is_active=bool(row["is_active"]),
        is_rugged=bool(row["is_rugged"]),
        rug_date=parse_timestamp(row["rug_date"]),
        schema_version=int(row["schema_version"]),
    )


def pool_to_params(pool: Pool) -> dict[str, Any]:
    return {
        "id": pool.id,
        "name": pool.name,
        "token_id": pool.token_id,
        "token_symbol": pool.token_symbol,
        "token_reserve": str(pool.token_reserve),
        "base_reserve": str(pool.base_reserve),
        "total_liquidity": str(pool.total_liquidity),
        "creator": pool.creator,
        "created_at": dump_timestamp(pool.created_at),
        "is_active": pool.is_active,
        "is_rugged": pool.is_rugged,
        "rug_date": dump_timestamp(pool.rug_date),
        "schema_version": pool.schema_version,
    }


def map_row_to_transaction(row: Mapping[str, Any]) -> Transaction:
    reserves_after = None
    if row["token_reserve_after"] is not None and row["base_reserve_after"] is not None:
        reserves_after = ReserveSnapshot(
            token_reserve=_dec(row["token_reserve_after"]),
            base_reserve=_dec(row["base_reserve_after"]),
        )
    return Transaction(
        id=str(row["id"]),
        type=row["type"],
        pool_id=row["pool_id"],
        token_id=row["token_id"],
        token_symbol=row["token_symbol"],
        amount_in=_dec(row["amount_in"]),
        amount_out=_dec(row["amount_out"]),
        token_in=row["token_in"],
        token_out=row["token_out"],
        price=_dec(row["price"]),
        price_impact_pct=_dec(row["price_impact_pct"]),
        slippage_pct=_dec(row["slippage_pct"]),
        reserves_after=reserves_after,
        user=row["user_name"],
        status=row["status"],
        hash=row["hash"],
        timestamp=parse_timestamp(row["timestamp"]),
        schema_version=int(row["schema_version"]),
    )


def transaction_to_params(transaction: Transaction) -> dict[str, Any]:
    reserves = transaction.reserves_after
    return {
        "id": transaction.id,
        "type": transaction.type,
        "pool_id": transaction.pool_id,
        "token_id": transaction.token_id,
        "token_symbol": transaction.token_symbol,
        "amount_in": str(transaction.amount_in),
        "amount_out": str(transaction.amount_out),
        "token_in": transaction.token_in,
        "token_out": transaction.token_out,
        "price": str(transaction.price),
        "price_impact_pct": str(transaction.price_impact_pct),
        "slippage_pct": str(transaction.slippage_pct),
        "token_reserve_after": str(reserves.token_reserve) if reserves is not None else None,
        "base_reserve_after": str(reserves.base_reserve) if reserves is not None else None,
        "user_name": transaction.user,
        "status": transaction.status,
        "hash": transaction.hash,
        "timestamp": dump_timestamp(transaction.timestamp),
        "schema_version": transaction.schema_version,
    }
