from __future__ import annotations

import logging

from rugsim.application.ledger import TransactionLedger
from rugsim.application.ports.pool_port import PoolPort
from rugsim.domain.entities.pool import Pool
from rugsim.domain.entities.transaction import Transaction
from rugsim.domain.exceptions import PersistenceError, PoolNotFoundError


logger = logging.getLogger(__name__)


def load_pool(pool_port: PoolPort, pool_id: str) -> Pool:
    if not pool_id or not pool_id.strip():
        raise PoolNotFoundError("pool_id is required.")
    pool = pool_port.get(pool_id=pool_id)
    if pool is None:
        raise PoolNotFoundError(f"Pool {pool_id} not found.")
    return pool


def commit_pool_operation(
    *,
    pool_port: PoolPort,
    ledger: TransactionLedger,
    previous: Pool | None,
    updated: Pool,
    transaction: Transaction,
    result=None,
) -> Transaction:
    """Persist the new pool state, then its ledger entry.

    When the ledger write fails the pool is put back the way it was (or the
    fresh pool discarded), so a failed operation leaves both untouched.
    The computed ``result`` rides along on the raised ``PersistenceError``.
    """
    try:
        pool_port.save(updated)
    except PersistenceError as exc:
        logger.warning("pool_commit: save_failed pool=%s error=%s", updated.id, exc)
        raise PersistenceError(str(exc), result=result) from exc

    try:
        return ledger.append(transaction)
    except PersistenceError as exc:
        logger.warning(
            "pool_commit: ledger_append_failed pool=%s type=%s error=%s",
            updated.id,
            transaction.type,
            exc,
        )
        try:
            if previous is None:
                pool_port.discard(pool_id=updated.id)
            else:
                pool_port.save(previous)
        except PersistenceError as rollback_exc:
            logger.error(
                "pool_commit: rollback_failed pool=%s error=%s",
                updated.id,
                rollback_exc,
            )
        raise PersistenceError(str(exc), result=result) from exc
