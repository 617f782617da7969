from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


@dataclass(frozen=True)
class Settings:
    simulator_dsn: str
    rug_pull_retain_fraction: Decimal
    rug_pull_drain_mode: str
    ledger_retention_cap: int
    base_symbol: str
    log_level: str


def get_settings() -> Settings:
    return Settings(
        simulator_dsn=_env("SIMULATOR_DSN", ""),
        rug_pull_retain_fraction=Decimal(_env("RUG_PULL_RETAIN_FRACTION", "0.05")),
        rug_pull_drain_mode=_env("RUG_PULL_DRAIN_MODE", "base_only"),
        ledger_retention_cap=int(_env("LEDGER_RETENTION_CAP", "1000")),
        base_symbol=_env("BASE_SYMBOL", "SOL"),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )
