from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from rugsim.application.dto.analytics import GetAnalyticsInput
from rugsim.application.ledger import TransactionLedger, utcnow
from rugsim.application.ports.pool_port import PoolPort
from rugsim.application.ports.token_port import TokenPort
from rugsim.domain.entities.analytics import AnalyticsSummary, DashboardOverview
from rugsim.domain.services.analytics import dashboard_overview, summarize


class GetAnalyticsUseCase:
    def __init__(
        self,
        *,
        pool_port: PoolPort,
        token_port: TokenPort,
        ledger: TransactionLedger,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._pool_port = pool_port
        self._token_port = token_port
        self._ledger = ledger
        self._clock = clock

    def execute(self, command: GetAnalyticsInput) -> AnalyticsSummary:
        return summarize(
            list(self._ledger.list(limit=self._ledger.retention_cap)),
            self._pool_port.list_all(),
            self._token_port.list_all(),
            command.timeframe,
            now=self._clock(),
        )


class GetDashboardUseCase:
    def __init__(self, *, pool_port: PoolPort, token_port: TokenPort, ledger: TransactionLedger):
        self._pool_port = pool_port
        self._token_port = token_port
        self._ledger = ledger

    def execute(self) -> DashboardOverview:
        return dashboard_overview(
            list(self._ledger.list(limit=self._ledger.retention_cap)),
            self._pool_port.list_all(),
            self._token_port.list_all(),
        )
