from __future__ import annotations

import logging

from sqlalchemy import text

from rugsim.application.ports.transaction_store_port import TransactionStorePort
from rugsim.domain.entities.transaction import Transaction
from rugsim.infrastructure.db.errors import persistence_errors
from rugsim.infrastructure.db.mappers.simulator_mapper import (
    map_row_to_transaction,
    transaction_to_params,
)


logger = logging.getLogger(__name__)

_TRANSACTION_COLUMNS = """
    id, type, pool_id, token_id, token_symbol, amount_in, amount_out, token_in, token_out,
    price, price_impact_pct, slippage_pct, token_reserve_after, base_reserve_after,
    user_name, status, hash, timestamp, schema_version
"""


class SqlTransactionRepository(TransactionStorePort):
    """Insert-only store; ``seq`` preserves append order between equal timestamps."""

    def __init__(self, engine):
        self._engine = engine

    def insert(self, transaction: Transaction) -> Transaction:
        sql = f"""
            INSERT INTO transactions ({_TRANSACTION_COLUMNS})
            VALUES (
                :id, :type, :pool_id, :token_id, :token_symbol, :amount_in, :amount_out, :token_in, :token_out,
                :price, :price_impact_pct, :slippage_pct, :token_reserve_after, :base_reserve_after,
                :user_name, :status, :hash, :timestamp, :schema_version
            )
        """
        with persistence_errors("append_transaction"):
            with self._engine.begin() as conn:
                conn.execute(text(sql), transaction_to_params(transaction))
        return transaction

    def get(self, *, transaction_id: str) -> Transaction | None:
        sql = f"""
            SELECT {_TRANSACTION_COLUMNS}
            FROM transactions
            WHERE id = :transaction_id
            LIMIT 1
        """
        with persistence_errors("load_transaction"):
            with self._engine.connect() as conn:
                row = conn.execute(text(sql), {"transaction_id": transaction_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_transaction(row)

    def latest(self, *, pool_id: str | None = None) -> Transaction | None:
        rows = self.list_recent(pool_id=pool_id, limit=1)
        return rows[0] if rows else None

    def list_recent(self, *, pool_id: str | None = None, limit: int | None = None) -> list[Transaction]:
        clauses = []
        params: dict = {}
        if pool_id is not None:
            clauses.append("pool_id = :pool_id")
            params["pool_id"] = pool_id
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        limit_sql = ""
        if limit is not None:
            limit_sql = "LIMIT :limit"
            params["limit"] = limit

        sql = f"""
            SELECT {_TRANSACTION_COLUMNS}
            FROM transactions
            {where}
            ORDER BY seq DESC
            {limit_sql}
        """
        with persistence_errors("load_transactions"):
            with self._engine.connect() as conn:
                rows = conn.execute(text(sql), params).mappings().all()
        return [map_row_to_transaction(row) for row in rows]

    def prune(self, *, keep: int) -> int:
        sql = """
            DELETE FROM transactions
            WHERE seq NOT IN (
                SELECT seq FROM (
                    SELECT seq FROM transactions ORDER BY seq DESC LIMIT :keep
                ) AS kept
            )
        """
        with persistence_errors("prune_transactions"):
            with self._engine.begin() as conn:
                result = conn.execute(text(sql), {"keep": keep})
        dropped = max(result.rowcount or 0, 0)
        if dropped:
            logger.info("transaction_repo: pruned rows=%s keep=%s", dropped, keep)
        return dropped
