from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rugsim.api.routers import analytics, health, liquidity, pools, rug_pull, swaps, tokens, transactions
from rugsim.shared.config import get_settings

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

app = FastAPI(title="Rug Pull Simulator API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(tokens.router)
app.include_router(pools.router)
app.include_router(swaps.router)
app.include_router(liquidity.router)
app.include_router(rug_pull.router)
app.include_router(transactions.router)
app.include_router(analytics.router)
