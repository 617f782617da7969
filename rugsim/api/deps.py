from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import logging

from rugsim.application.ledger import TransactionLedger
from rugsim.application.pool_locks import PoolLocks
from rugsim.application.ports.pool_port import PoolPort
from rugsim.application.ports.token_port import TokenPort
from rugsim.application.ports.transaction_store_port import TransactionStorePort
from rugsim.application.use_cases.create_pool import CreatePoolUseCase
from rugsim.application.use_cases.execute_rug_pull import ExecuteRugPullUseCase, PreviewRugPullUseCase
from rugsim.application.use_cases.execute_swap import ExecuteSwapUseCase
from rugsim.application.use_cases.get_analytics import GetAnalyticsUseCase, GetDashboardUseCase
from rugsim.application.use_cases.list_records import (
    GetPoolUseCase,
    ListPoolsUseCase,
    ListTokensUseCase,
    ListTransactionsUseCase,
)
from rugsim.application.use_cases.manage_liquidity import AddLiquidityUseCase, RemoveLiquidityUseCase
from rugsim.application.use_cases.mint_token import MintTokenUseCase
from rugsim.application.use_cases.quote_swap import QuoteSwapUseCase
from rugsim.infrastructure.db.engine import get_engine, init_schema
from rugsim.infrastructure.db.repositories.pool_repository import SqlPoolRepository
from rugsim.infrastructure.db.repositories.token_repository import SqlTokenRepository
from rugsim.infrastructure.db.repositories.transaction_repository import SqlTransactionRepository
from rugsim.infrastructure.memory.repositories import (
    InMemoryPoolRepository,
    InMemoryTokenRepository,
    InMemoryTransactionRepository,
)
from rugsim.shared.config import get_settings


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Storage:
    pools: PoolPort
    tokens: TokenPort
    transactions: TransactionStorePort


@lru_cache(maxsize=1)
def _get_storage() -> Storage:
    settings = get_settings()
    if not settings.simulator_dsn:
        logger.info("deps: storage=memory")
        return Storage(
            pools=InMemoryPoolRepository(),
            tokens=InMemoryTokenRepository(),
            transactions=InMemoryTransactionRepository(),
        )

    engine = get_engine(settings.simulator_dsn)
    init_schema(engine)
    logger.info("deps: storage=sql dialect=%s", engine.dialect.name)
    return Storage(
        pools=SqlPoolRepository(engine),
        tokens=SqlTokenRepository(engine),
        transactions=SqlTransactionRepository(engine),
    )


@lru_cache(maxsize=1)
def _get_ledger() -> TransactionLedger:
    settings = get_settings()
    return TransactionLedger(
        _get_storage().transactions,
        retention_cap=settings.ledger_retention_cap,
    )


@lru_cache(maxsize=1)
def _get_pool_locks() -> PoolLocks:
    return PoolLocks()


def get_mint_token_use_case() -> MintTokenUseCase:
    return MintTokenUseCase(token_port=_get_storage().tokens, ledger=_get_ledger())


def get_list_tokens_use_case() -> ListTokensUseCase:
    return ListTokensUseCase(token_port=_get_storage().tokens)


def get_create_pool_use_case() -> CreatePoolUseCase:
    storage = _get_storage()
    return CreatePoolUseCase(
        pool_port=storage.pools,
        token_port=storage.tokens,
        ledger=_get_ledger(),
        locks=_get_pool_locks(),
        base_symbol=get_settings().base_symbol,
    )


def get_list_pools_use_case() -> ListPoolsUseCase:
    return ListPoolsUseCase(pool_port=_get_storage().pools)


def get_pool_use_case() -> GetPoolUseCase:
    return GetPoolUseCase(pool_port=_get_storage().pools)


def get_quote_swap_use_case() -> QuoteSwapUseCase:
    return QuoteSwapUseCase(pool_port=_get_storage().pools)


def get_execute_swap_use_case() -> ExecuteSwapUseCase:
    return ExecuteSwapUseCase(
        pool_port=_get_storage().pools,
        ledger=_get_ledger(),
        locks=_get_pool_locks(),
        base_symbol=get_settings().base_symbol,
    )


def get_add_liquidity_use_case() -> AddLiquidityUseCase:
    return AddLiquidityUseCase(
        pool_port=_get_storage().pools,
        ledger=_get_ledger(),
        locks=_get_pool_locks(),
        base_symbol=get_settings().base_symbol,
    )


def get_remove_liquidity_use_case() -> RemoveLiquidityUseCase:
    return RemoveLiquidityUseCase(
        pool_port=_get_storage().pools,
        ledger=_get_ledger(),
        locks=_get_pool_locks(),
        base_symbol=get_settings().base_symbol,
    )


def get_execute_rug_pull_use_case() -> ExecuteRugPullUseCase:
    settings = get_settings()
    return ExecuteRugPullUseCase(
        pool_port=_get_storage().pools,
        ledger=_get_ledger(),
        locks=_get_pool_locks(),
        retain_fraction=settings.rug_pull_retain_fraction,
        drain_mode=settings.rug_pull_drain_mode,
    )


def get_preview_rug_pull_use_case() -> PreviewRugPullUseCase:
    settings = get_settings()
    return PreviewRugPullUseCase(
        pool_port=_get_storage().pools,
        retain_fraction=settings.rug_pull_retain_fraction,
        drain_mode=settings.rug_pull_drain_mode,
    )


def get_list_transactions_use_case() -> ListTransactionsUseCase:
    return ListTransactionsUseCase(ledger=_get_ledger())


def get_analytics_use_case() -> GetAnalyticsUseCase:
    storage = _get_storage()
    return GetAnalyticsUseCase(pool_port=storage.pools, token_port=storage.tokens, ledger=_get_ledger())


def get_dashboard_use_case() -> GetDashboardUseCase:
    storage = _get_storage()
    return GetDashboardUseCase(pool_port=storage.pools, token_port=storage.tokens, ledger=_get_ledger())
