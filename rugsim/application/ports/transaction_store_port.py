from __future__ import annotations

from typing import Protocol

from rugsim.domain.entities.transaction import Transaction


class TransactionStorePort(Protocol):
    def insert(self, transaction: Transaction) -> Transaction:
        ...

    def get(self, *, transaction_id: str) -> Transaction | None:
        ...

    def latest(self, *, pool_id: str | None = None) -> Transaction | None:
        ...

    def list_recent(self, *, pool_id: str | None = None, limit: int | None = None) -> list[Transaction]:
        """Most recent first."""
        ...

    def prune(self, *, keep: int) -> int:
        """Drop everything but the ``keep`` most recent records; returns how many went."""
        ...
