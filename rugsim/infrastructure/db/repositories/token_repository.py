from __future__ import annotations

from sqlalchemy import text

from rugsim.application.ports.token_port import TokenPort
from rugsim.domain.entities.token import Token
from rugsim.infrastructure.db.errors import persistence_errors
from rugsim.infrastructure.db.mappers.simulator_mapper import map_row_to_token, token_to_params


_TOKEN_COLUMNS = """
    id, name, symbol, total_supply, decimals, description, creator, created_at, schema_version
"""


class SqlTokenRepository(TokenPort):
    def __init__(self, engine):
        self._engine = engine

    def get(self, *, token_id: str) -> Token | None:
        sql = f"""
            SELECT {_TOKEN_COLUMNS}
            FROM tokens
            WHERE id = :token_id
            LIMIT 1
        """
        with persistence_errors("load_token"):
            with self._engine.connect() as conn:
                row = conn.execute(text(sql), {"token_id": token_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_token(row)

    def list_all(self) -> list[Token]:
        sql = f"""
            SELECT {_TOKEN_COLUMNS}
            FROM tokens
            ORDER BY created_at DESC
        """
        with persistence_errors("load_tokens"):
            with self._engine.connect() as conn:
                rows = conn.execute(text(sql)).mappings().all()
        return [map_row_to_token(row) for row in rows]

    def save(self, token: Token) -> Token:
        sql = """
            INSERT INTO tokens (
                id, name, symbol, total_supply, decimals, description, creator, created_at, schema_version
            ) VALUES (
                :id, :name, :symbol, :total_supply, :decimals, :description, :creator, :created_at, :schema_version
            )
            ON CONFLICT (id)
            DO UPDATE SET
                name = excluded.name,
                symbol = excluded.symbol,
                total_supply = excluded.total_supply,
                decimals = excluded.decimals,
                description = excluded.description,
                schema_version = excluded.schema_version
        """
        with persistence_errors("save_token"):
            with self._engine.begin() as conn:
                conn.execute(text(sql), token_to_params(token))
        return token

    def discard(self, *, token_id: str) -> None:
        with persistence_errors("discard_token"):
            with self._engine.begin() as conn:
                conn.execute(text("DELETE FROM tokens WHERE id = :token_id"), {"token_id": token_id})
