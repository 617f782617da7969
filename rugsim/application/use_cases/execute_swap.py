from __future__ import annotations

from dataclasses import replace
import logging

from rugsim.application.dto.swap import ExecuteSwapInput, SwapOutput
from rugsim.application.ledger import TransactionLedger
from rugsim.application.pool_locks import PoolLocks
from rugsim.application.ports.pool_port import PoolPort
from rugsim.domain.entities.pool import ReserveSnapshot
from rugsim.domain.entities.transaction import Transaction
from rugsim.domain.exceptions import InvalidInputError, PoolInactiveError
from rugsim.domain.services.swap import compute_swap

from .pool_common import commit_pool_operation, load_pool


logger = logging.getLogger(__name__)


class ExecuteSwapUseCase:
    def __init__(
        self,
        *,
        pool_port: PoolPort,
        ledger: TransactionLedger,
        locks: PoolLocks,
        base_symbol: str = "SOL",
    ):
        self._pool_port = pool_port
        self._ledger = ledger
        self._locks = locks
        self._base_symbol = base_symbol

    def execute(self, command: ExecuteSwapInput) -> SwapOutput:
        with self._locks.for_pool(command.pool_id):
            pool = load_pool(self._pool_port, command.pool_id)
            try:
                result = compute_swap(pool, command.amount_in, command.direction)
            except (InvalidInputError, PoolInactiveError) as exc:
                logger.warning("execute_swap: rejected pool=%s reason=%s", pool.id, exc)
                raise

            updated = replace(
                pool,
                token_reserve=result.new_token_reserve,
                base_reserve=result.new_base_reserve,
            )
            if command.direction == "token_to_base":
                token_in, token_out = pool.token_symbol, self._base_symbol
            else:
                token_in, token_out = self._base_symbol, pool.token_symbol

            transaction = commit_pool_operation(
                pool_port=self._pool_port,
                ledger=self._ledger,
                previous=pool,
                updated=updated,
                transaction=Transaction(
                    type="swap",
                    pool_id=pool.id,
                    token_id=pool.token_id,
                    token_symbol=pool.token_symbol,
                    amount_in=result.amount_in,
                    amount_out=result.amount_out,
                    token_in=token_in,
                    token_out=token_out,
                    price=result.execution_price,
                    price_impact_pct=result.price_impact_pct,
                    slippage_pct=result.slippage_pct,
                    reserves_after=ReserveSnapshot.of(updated),
                    user=command.user,
                ),
                result=result,
            )

        logger.info(
            "execute_swap: committed pool=%s direction=%s amount_in=%s amount_out=%s impact_pct=%s",
            pool.id,
            command.direction,
            result.amount_in,
            result.amount_out,
            result.price_impact_pct,
        )
        return SwapOutput(pool=updated, result=result, transaction=transaction)
