from __future__ import annotations

from typing import Protocol

from rugsim.domain.entities.pool import Pool


class PoolPort(Protocol):
    def get(self, *, pool_id: str) -> Pool | None:
        ...

    def list_all(self) -> list[Pool]:
        ...

    def save(self, pool: Pool) -> Pool:
        ...

    def discard(self, *, pool_id: str) -> None:
        """Undo a creation whose ledger entry could not be written."""
        ...
