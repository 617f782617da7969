from __future__ import annotations

from sqlalchemy import Boolean, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from rugsim.infrastructure.db.engine import Base


# Decimals and timestamps are kept as text (str(Decimal) / ISO-8601 UTC) so
# values round-trip exactly on every backend, SQLite included.


class TokenModel(Base):
    __tablename__ = "tokens"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    symbol: Mapped[str] = mapped_column(Text, nullable=False)
    total_supply: Mapped[str] = mapped_column(Text, nullable=False)
    decimals: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    creator: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[str] = mapped_column(Text, nullable=False)
    schema_version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)


class PoolModel(Base):
    __tablename__ = "pools"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    token_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    token_symbol: Mapped[str] = mapped_column(Text, nullable=False)
    token_reserve: Mapped[str] = mapped_column(Text, nullable=False)
    base_reserve: Mapped[str] = mapped_column(Text, nullable=False)
    total_liquidity: Mapped[str] = mapped_column(Text, nullable=False)
    creator: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[str] = mapped_column(Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_rugged: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    rug_date: Mapped[str | None] = mapped_column(Text, nullable=True)
    schema_version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)


class TransactionModel(Base):
    __tablename__ = "transactions"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    type: Mapped[str] = mapped_column(Text, nullable=False)
    pool_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    token_id: Mapped[str] = mapped_column(Text, nullable=False)
    token_symbol: Mapped[str] = mapped_column(Text, nullable=False)
    amount_in: Mapped[str] = mapped_column(Text, nullable=False)
    amount_out: Mapped[str] = mapped_column(Text, nullable=False)
    token_in: Mapped[str] = mapped_column(Text, nullable=False)
    token_out: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[str] = mapped_column(Text, nullable=False)
    price_impact_pct: Mapped[str] = mapped_column(Text, nullable=False)
    slippage_pct: Mapped[str] = mapped_column(Text, nullable=False)
    token_reserve_after: Mapped[str | None] = mapped_column(Text, nullable=True)
    base_reserve_after: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_name: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False)
    hash: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[str] = mapped_column(Text, nullable=False)
    schema_version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
