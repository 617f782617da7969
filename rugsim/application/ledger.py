from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import replace
from datetime import datetime, timezone
import logging
from uuid import uuid4

from rugsim.application.ports.transaction_store_port import TransactionStorePort
from rugsim.domain.entities.transaction import TRANSACTION_TYPES, Transaction
from rugsim.domain.exceptions import InvalidInputError, PersistenceError


logger = logging.getLogger(__name__)


DEFAULT_RETENTION_CAP = 1000


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LedgerView:
    """Most-recent-first view over the store.

    Nothing is read until iteration, and every iteration reads the store
    again, so the same view can be walked repeatedly.
    """

    def __init__(self, store: TransactionStorePort, *, pool_id: str | None, limit: int | None):
        self._store = store
        self._pool_id = pool_id
        self._limit = limit

    def __iter__(self) -> Iterator[Transaction]:
        yield from self._store.list_recent(pool_id=self._pool_id, limit=self._limit)


class TransactionLedger:
    def __init__(
        self,
        store: TransactionStorePort,
        *,
        retention_cap: int = DEFAULT_RETENTION_CAP,
        clock: Callable[[], datetime] = utcnow,
    ):
        if retention_cap <= 0:
            raise ValueError("retention_cap must be positive.")
        self._store = store
        self._retention_cap = retention_cap
        self._clock = clock

    @property
    def retention_cap(self) -> int:
        return self._retention_cap

    def append(self, transaction: Transaction) -> Transaction:
        if transaction.type not in TRANSACTION_TYPES:
            raise InvalidInputError(f"Unknown transaction type: {transaction.type}")
        head = self._store.latest()
        timestamp = transaction.timestamp or self._clock()
        if head is not None and head.timestamp is not None and timestamp < head.timestamp:
            timestamp = head.timestamp

        record = replace(
            transaction,
            id=transaction.id or uuid4().hex,
            hash=transaction.hash or uuid4().hex,
            timestamp=timestamp,
        )
        stored = self._store.insert(record)
        try:
            dropped = self._store.prune(keep=self._retention_cap)
        except PersistenceError as exc:
            # the record is committed; the next append prunes again
            logger.warning("ledger: prune_failed id=%s error=%s", stored.id, exc)
            dropped = 0
        logger.info(
            "ledger: appended id=%s type=%s pool=%s dropped=%s",
            stored.id,
            stored.type,
            stored.pool_id or "-",
            dropped,
        )
        return stored

    def list(self, *, pool_id: str | None = None, limit: int | None = None) -> LedgerView:
        if limit is not None and limit <= 0:
            raise InvalidInputError("limit must be a positive integer when provided.")
        return LedgerView(self._store, pool_id=pool_id, limit=limit)

    def get(self, transaction_id: str) -> Transaction | None:
        return self._store.get(transaction_id=transaction_id)

    def latest(self, *, pool_id: str | None = None) -> Transaction | None:
        return self._store.latest(pool_id=pool_id)
