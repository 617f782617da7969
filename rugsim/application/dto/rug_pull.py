from __future__ import annotations

from dataclasses import dataclass

from rugsim.domain.entities.pool import Pool
from rugsim.domain.entities.transaction import Transaction
from rugsim.domain.services.rug_pull import RugPullImpact


@dataclass(frozen=True)
class ExecuteRugPullInput:
    pool_id: str
    requested_by: str | None = None


@dataclass(frozen=True)
class PreviewRugPullInput:
    pool_id: str


@dataclass(frozen=True)
class RugPullOutput:
    pool: Pool
    impact: RugPullImpact
    transaction: Transaction
