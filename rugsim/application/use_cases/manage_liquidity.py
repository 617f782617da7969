from __future__ import annotations

import logging

from rugsim.application.dto.liquidity import AddLiquidityInput, LiquidityOutput, RemoveLiquidityInput
from rugsim.application.ledger import TransactionLedger
from rugsim.application.pool_locks import PoolLocks
from rugsim.application.ports.pool_port import PoolPort
from rugsim.domain.entities.pool import Pool, ReserveSnapshot
from rugsim.domain.entities.transaction import Transaction
from rugsim.domain.services.liquidity import LiquidityChange, add_liquidity, remove_liquidity
from rugsim.domain.services.reserves import ZERO, spot_price

from .pool_common import commit_pool_operation, load_pool


logger = logging.getLogger(__name__)


def _liquidity_transaction(
    *,
    type_: str,
    pool: Pool,
    change: LiquidityChange,
    amount_in,
    amount_out,
    token_in: str,
    token_out: str,
    user: str,
) -> Transaction:
    return Transaction(
        type=type_,
        pool_id=pool.id,
        token_id=pool.token_id,
        token_symbol=pool.token_symbol,
        amount_in=amount_in,
        amount_out=amount_out,
        token_in=token_in,
        token_out=token_out,
        price=spot_price(change.pool),
        price_impact_pct=ZERO,
        slippage_pct=ZERO,
        reserves_after=ReserveSnapshot.of(change.pool),
        user=user,
    )


class AddLiquidityUseCase:
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

    def execute(self, command: AddLiquidityInput) -> LiquidityOutput:
        with self._locks.for_pool(command.pool_id):
            pool = load_pool(self._pool_port, command.pool_id)
            change = add_liquidity(
                pool,
                token_amount=command.token_amount,
                base_amount=command.base_amount,
            )
            transaction = commit_pool_operation(
                pool_port=self._pool_port,
                ledger=self._ledger,
                previous=pool,
                updated=change.pool,
                transaction=_liquidity_transaction(
                    type_="add_liquidity",
                    pool=pool,
                    change=change,
                    amount_in=change.token_amount,
                    amount_out=ZERO,
                    token_in=pool.token_symbol,
                    token_out=self._base_symbol,
                    user=command.user,
                ),
                result=change,
            )

        logger.info(
            "add_liquidity: committed pool=%s liquidity_delta=%s",
            pool.id,
            change.liquidity_delta,
        )
        return LiquidityOutput(
            pool=change.pool,
            transaction=transaction,
            token_amount=change.token_amount,
            base_amount=change.base_amount,
            liquidity_delta=change.liquidity_delta,
        )


class RemoveLiquidityUseCase:
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

    def execute(self, command: RemoveLiquidityInput) -> LiquidityOutput:
        with self._locks.for_pool(command.pool_id):
            pool = load_pool(self._pool_port, command.pool_id)
            change = remove_liquidity(pool, fraction=command.fraction)
            transaction = commit_pool_operation(
                pool_port=self._pool_port,
                ledger=self._ledger,
                previous=pool,
                updated=change.pool,
                transaction=_liquidity_transaction(
                    type_="remove_liquidity",
                    pool=pool,
                    change=change,
                    amount_in=ZERO,
                    amount_out=change.token_amount,
                    token_in=self._base_symbol,
                    token_out=pool.token_symbol,
                    user=command.user,
                ),
                result=change,
            )

        logger.info(
            "remove_liquidity: committed pool=%s liquidity_delta=%s",
            pool.id,
            change.liquidity_delta,
        )
        return LiquidityOutput(
            pool=change.pool,
            transaction=transaction,
            token_amount=change.token_amount,
            base_amount=change.base_amount,
            liquidity_delta=change.liquidity_delta,
        )
