from __future__ import annotations

from threading import Lock

from rugsim.application.ports.pool_port import PoolPort
from rugsim.application.ports.token_port import TokenPort
from rugsim.application.ports.transaction_store_port import TransactionStorePort
from rugsim.domain.entities.pool import Pool
from rugsim.domain.entities.token import Token
from rugsim.domain.entities.transaction import Transaction


class InMemoryTokenRepository(TokenPort):
    def __init__(self):
        self._lock = Lock()
        self._tokens: dict[str, Token] = {}

    def get(self, *, token_id: str) -> Token | None:
        with self._lock:
            return self._tokens.get(token_id)

    def list_all(self) -> list[Token]:
        with self._lock:
            return list(self._tokens.values())

    def save(self, token: Token) -> Token:
        with self._lock:
            self._tokens[token.id] = token
        return token

    def discard(self, *, token_id: str) -> None:
        with self._lock:
            self._tokens.pop(token_id, None)


class InMemoryPoolRepository(PoolPort):
    def __init__(self):
        self._lock = Lock()
        self._pools: dict[str, Pool] = {}

    def get(self, *, pool_id: str) -> Pool | None:
        with self._lock:
            return self._pools.get(pool_id)

    def list_all(self) -> list[Pool]:
        with self._lock:
            return list(self._pools.values())

    def save(self, pool: Pool) -> Pool:
        with self._lock:
            self._pools[pool.id] = pool
        return pool

    def discard(self, *, pool_id: str) -> None:
        with self._lock:
            self._pools.pop(pool_id, None)


class InMemoryTransactionRepository(TransactionStorePort):
    """Newest record at index 0."""

    def __init__(self):
        self._lock = Lock()
        self._rows: list[Transaction] = []

    def insert(self, transaction: Transaction) -> Transaction:
        with self._lock:
            self._rows.insert(0, transaction)
        return transaction

    def get(self, *, transaction_id: str) -> Transaction | None:
        with self._lock:
            return next((row for row in self._rows if row.id == transaction_id), None)

    def latest(self, *, pool_id: str | None = None) -> Transaction | None:
        rows = self.list_recent(pool_id=pool_id, limit=1)
        return rows[0] if rows else None

    def list_recent(self, *, pool_id: str | None = None, limit: int | None = None) -> list[Transaction]:
        with self._lock:
            rows = [row for row in self._rows if pool_id is None or row.pool_id == pool_id]
        if limit is not None:
            rows = rows[:limit]
        return rows

    def prune(self, *, keep: int) -> int:
        with self._lock:
            dropped = max(len(self._rows) - keep, 0)
            if dropped:
                del self._rows[keep:]
        return dropped
