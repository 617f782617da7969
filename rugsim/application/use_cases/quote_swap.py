from __future__ import annotations

from rugsim.application.dto.swap import QuoteSwapInput
from rugsim.application.ports.pool_port import PoolPort
from rugsim.domain.services.swap import SwapResult, quote_swap

from .pool_common import load_pool


class QuoteSwapUseCase:
    def __init__(self, *, pool_port: PoolPort):
        self._pool_port = pool_port

    def execute(self, command: QuoteSwapInput) -> SwapResult:
        pool = load_pool(self._pool_port, command.pool_id)
        return quote_swap(pool, command.amount_in, command.direction)
