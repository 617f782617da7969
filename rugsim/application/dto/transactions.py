from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ListTransactionsInput:
    pool_id: str | None = None
    limit: int | None = 100
