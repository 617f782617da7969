from __future__ import annotations

import logging
from uuid import uuid4

from rugsim.application.dto.create_pool import CreatePoolInput
from rugsim.application.ledger import TransactionLedger, utcnow
from rugsim.application.pool_locks import PoolLocks
from rugsim.application.ports.pool_port import PoolPort
from rugsim.application.ports.token_port import TokenPort
from rugsim.domain.entities.pool import Pool, ReserveSnapshot
from rugsim.domain.entities.transaction import Transaction
from rugsim.domain.exceptions import TokenNotFoundError
from rugsim.domain.services.liquidity import create_pool
from rugsim.domain.services.reserves import ZERO, spot_price

from .pool_common import commit_pool_operation


logger = logging.getLogger(__name__)


class CreatePoolUseCase:
    def __init__(
        self,
        *,
        pool_port: PoolPort,
        token_port: TokenPort,
        ledger: TransactionLedger,
        locks: PoolLocks,
        base_symbol: str = "SOL",
    ):
        self._pool_port = pool_port
        self._token_port = token_port
        self._ledger = ledger
        self._locks = locks
        self._base_symbol = base_symbol

    def execute(self, command: CreatePoolInput) -> Pool:
        token = self._token_port.get(token_id=command.token_id)
        if token is None:
            raise TokenNotFoundError(f"Token {command.token_id} not found.")

        pool = create_pool(
            token=token,
            token_reserve=command.token_reserve,
            base_reserve=command.base_reserve,
            pool_id=uuid4().hex,
            creator=command.creator,
            now=utcnow(),
            base_symbol=self._base_symbol,
        )

        with self._locks.for_pool(pool.id):
            commit_pool_operation(
                pool_port=self._pool_port,
                ledger=self._ledger,
                previous=None,
                updated=pool,
                transaction=Transaction(
                    type="create_pool",
                    pool_id=pool.id,
                    token_id=token.id,
                    token_symbol=token.symbol,
                    amount_in=pool.token_reserve,
                    amount_out=ZERO,
                    token_in=token.symbol,
                    token_out=self._base_symbol,
                    price=spot_price(pool),
                    price_impact_pct=ZERO,
                    slippage_pct=ZERO,
                    reserves_after=ReserveSnapshot.of(pool),
                    user=command.creator,
                ),
                result=pool,
            )

        logger.info(
            "create_pool: created pool=%s token=%s liquidity=%s",
            pool.id,
            token.symbol,
            pool.total_liquidity,
        )
        return pool
