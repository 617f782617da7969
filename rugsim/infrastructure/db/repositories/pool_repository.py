from __future__ import annotations

import logging

from sqlalchemy import text

from rugsim.application.ports.pool_port import PoolPort
from rugsim.domain.entities.pool import Pool
from rugsim.infrastructure.db.errors import persistence_errors
from rugsim.infrastructure.db.mappers.simulator_mapper import map_row_to_pool, pool_to_params


logger = logging.getLogger(__name__)

_POOL_COLUMNS = """
    id, name, token_id, token_symbol, token_reserve, base_reserve, total_liquidity,
    creator, created_at, is_active, is_rugged, rug_date, schema_version
"""


class SqlPoolRepository(PoolPort):
    def __init__(self, engine):
        self._engine = engine

    def get(self, *, pool_id: str) -> Pool | None:
        sql = f"""
            SELECT {_POOL_COLUMNS}
            FROM pools
            WHERE id = :pool_id
            LIMIT 1
        """
        with persistence_errors("load_pool"):
            with self._engine.connect() as conn:
                row = conn.execute(text(sql), {"pool_id": pool_id}).mappings().first()
        if row is None:
            logger.warning("pool_repo: pool_not_found pool=%s", pool_id)
            return None
        return map_row_to_pool(row)

    def list_all(self) -> list[Pool]:
        sql = f"""
            SELECT {_POOL_COLUMNS}
            FROM pools
            ORDER BY created_at DESC
        """
        with persistence_errors("load_pools"):
            with self._engine.connect() as conn:
                rows = conn.execute(text(sql)).mappings().all()
        return [map_row_to_pool(row) for row in rows]

    def save(self, pool: Pool) -> Pool:
        # id, token and creation fields never change once written
        sql = """
            INSERT INTO pools (
                id, name, token_id, token_symbol, token_reserve, base_reserve, total_liquidity,
                creator, created_at, is_active, is_rugged, rug_date, schema_version
            ) VALUES (
                :id, :name, :token_id, :token_symbol, :token_reserve, :base_reserve, :total_liquidity,
                :creator, :created_at, :is_active, :is_rugged, :rug_date, :schema_version
            )
            ON CONFLICT (id)
            DO UPDATE SET
                token_reserve = excluded.token_reserve,
                base_reserve = excluded.base_reserve,
                total_liquidity = excluded.total_liquidity,
                is_active = excluded.is_active,
                is_rugged = excluded.is_rugged,
                rug_date = excluded.rug_date,
                schema_version = excluded.schema_version
        """
        with persistence_errors("save_pool"):
            with self._engine.begin() as conn:
                conn.execute(text(sql), pool_to_params(pool))
        logger.debug("pool_repo: saved pool=%s rugged=%s", pool.id, pool.is_rugged)
        return pool

    def discard(self, *, pool_id: str) -> None:
        with persistence_errors("discard_pool"):
            with self._engine.begin() as conn:
                conn.execute(text("DELETE FROM pools WHERE id = :pool_id"), {"pool_id": pool_id})
