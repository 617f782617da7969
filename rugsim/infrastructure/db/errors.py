from __future__ import annotations

from contextlib import contextmanager
import logging

from sqlalchemy.exc import SQLAlchemyError

from rugsim.domain.exceptions import PersistenceError


logger = logging.getLogger(__name__)


@contextmanager
def persistence_errors(operation: str):
    try:
        yield
    except SQLAlchemyError as exc:
        logger.warning("db: %s failed error=%s", operation, exc.__class__.__name__)
        raise PersistenceError(f"{operation} failed: {exc.__class__.__name__}") from exc
