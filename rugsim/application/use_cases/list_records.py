from __future__ import annotations

from rugsim.application.dto.transactions import ListTransactionsInput
from rugsim.application.ledger import TransactionLedger
from rugsim.application.ports.pool_port import PoolPort
from rugsim.application.ports.token_port import TokenPort
from rugsim.domain.entities.pool import Pool
from rugsim.domain.entities.token import Token
from rugsim.domain.entities.transaction import Transaction

from .pool_common import load_pool


class ListTokensUseCase:
    def __init__(self, *, token_port: TokenPort):
        self._token_port = token_port

    def execute(self) -> list[Token]:
        return sorted(self._token_port.list_all(), key=lambda row: row.created_at, reverse=True)


class ListPoolsUseCase:
    def __init__(self, *, pool_port: PoolPort):
        self._pool_port = pool_port

    def execute(self) -> list[Pool]:
        return sorted(self._pool_port.list_all(), key=lambda row: row.created_at, reverse=True)


class GetPoolUseCase:
    def __init__(self, *, pool_port: PoolPort):
        self._pool_port = pool_port

    def execute(self, *, pool_id: str) -> Pool:
        return load_pool(self._pool_port, pool_id)


class ListTransactionsUseCase:
    def __init__(self, *, ledger: TransactionLedger):
        self._ledger = ledger

    def execute(self, command: ListTransactionsInput) -> list[Transaction]:
        return list(self._ledger.list(pool_id=command.pool_id, limit=command.limit))
