from __future__ import annotations

from dataclasses import dataclass

from rugsim.domain.entities.analytics import Timeframe


@dataclass(frozen=True)
class GetAnalyticsInput:
    timeframe: Timeframe = "all"
