from __future__ import annotations

from decimal import Decimal
import logging

from rugsim.application.dto.rug_pull import ExecuteRugPullInput, PreviewRugPullInput, RugPullOutput
from rugsim.application.ledger import TransactionLedger, utcnow
from rugsim.application.pool_locks import PoolLocks
from rugsim.application.ports.pool_port import PoolPort
from rugsim.domain.entities.pool import ReserveSnapshot
from rugsim.domain.entities.transaction import Transaction
from rugsim.domain.exceptions import NotPoolCreatorError, PoolInactiveError
from rugsim.domain.services.rug_pull import (
    DEFAULT_DRAIN_MODE,
    DEFAULT_RETAIN_FRACTION,
    DrainMode,
    RugPullImpact,
    calculate_rug_impact,
    ensure_creator,
    ensure_ruggable,
    execute_rug_pull,
)
from rugsim.domain.services.reserves import ZERO

from .pool_common import commit_pool_operation, load_pool


logger = logging.getLogger(__name__)


class ExecuteRugPullUseCase:
    def __init__(
        self,
        *,
        pool_port: PoolPort,
        ledger: TransactionLedger,
        locks: PoolLocks,
        retain_fraction: Decimal = DEFAULT_RETAIN_FRACTION,
        drain_mode: DrainMode = DEFAULT_DRAIN_MODE,
    ):
        self._pool_port = pool_port
        self._ledger = ledger
        self._locks = locks
        self._retain_fraction = retain_fraction
        self._drain_mode = drain_mode

    def execute(self, command: ExecuteRugPullInput) -> RugPullOutput:
        with self._locks.for_pool(command.pool_id):
            pool = load_pool(self._pool_port, command.pool_id)
            try:
                ensure_creator(pool, requested_by=command.requested_by)
                rug = execute_rug_pull(
                    pool,
                    now=utcnow(),
                    retain_fraction=self._retain_fraction,
                    drain_mode=self._drain_mode,
                )
            except (NotPoolCreatorError, PoolInactiveError) as exc:
                logger.warning("execute_rug_pull: rejected pool=%s reason=%s", pool.id, exc)
                raise

            impact = rug.impact
            transaction = commit_pool_operation(
                pool_port=self._pool_port,
                ledger=self._ledger,
                previous=pool,
                updated=rug.pool,
                transaction=Transaction(
                    type="rug_pull",
                    pool_id=pool.id,
                    token_id=pool.token_id,
                    token_symbol=pool.token_symbol,
                    amount_in=impact.stolen_amount,
                    amount_out=impact.stolen_amount,
                    token_in="Liquidity",
                    token_out="Stolen Funds",
                    price=Decimal("1"),
                    price_impact_pct=-impact.price_drop_pct if impact.price_drop_pct else ZERO,
                    slippage_pct=ZERO,
                    reserves_after=ReserveSnapshot.of(rug.pool),
                    user="Malicious Creator",
                ),
                result=rug,
            )

        logger.info(
            "execute_rug_pull: drained pool=%s mode=%s stolen=%s price_drop_pct=%s",
            pool.id,
            impact.drain_mode,
            impact.stolen_amount,
            impact.price_drop_pct,
        )
        return RugPullOutput(pool=rug.pool, impact=impact, transaction=transaction)


class PreviewRugPullUseCase:
    """Impact of a rug pull on the pool as it stands now; nothing is committed."""

    def __init__(
        self,
        *,
        pool_port: PoolPort,
        retain_fraction: Decimal = DEFAULT_RETAIN_FRACTION,
        drain_mode: DrainMode = DEFAULT_DRAIN_MODE,
    ):
        self._pool_port = pool_port
        self._retain_fraction = retain_fraction
        self._drain_mode = drain_mode

    def execute(self, command: PreviewRugPullInput) -> RugPullImpact:
        pool = load_pool(self._pool_port, command.pool_id)
        ensure_ruggable(pool)
        return calculate_rug_impact(
            pool,
            retain_fraction=self._retain_fraction,
            drain_mode=self._drain_mode,
        )
