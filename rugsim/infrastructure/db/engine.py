from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    pass


def _is_sqlite_memory(dsn: str) -> bool:
    return dsn.startswith("sqlite") and (":memory:" in dsn or dsn.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"))


@lru_cache(maxsize=4)
def get_engine(dsn: str):
    if _is_sqlite_memory(dsn):
        # a single shared connection, otherwise every checkout sees an empty database
        return create_engine(
            dsn,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(dsn, future=True, pool_pre_ping=True)


def init_schema(engine) -> None:
    from rugsim.infrastructure.db.models import simulator  # noqa: F401

    Base.metadata.create_all(engine)
