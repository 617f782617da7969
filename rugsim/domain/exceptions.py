from __future__ import annotations


class DomainError(Exception):
    """Base for simulator domain errors."""


class InvalidInputError(DomainError):
    """Non-positive amounts, empty reserves or malformed references."""


class PoolNotFoundError(InvalidInputError):
    """Requested pool does not exist."""


class TokenNotFoundError(InvalidInputError):
    """Requested token does not exist."""


class PoolInactiveError(DomainError):
    """Pool cannot accept the requested operation."""


class AlreadyRuggedError(PoolInactiveError):
    """Pool was already drained by a rug pull."""


class PersistenceError(DomainError):
    """Storage collaborator failed to read or write.

    ``result`` keeps the computed engine result, so the commit can be retried
    without recomputing it.
    """

    def __init__(self, message: str, *, result=None):
        super().__init__(message)
        self.result = result


class NotPoolCreatorError(DomainError):
    """Only the pool's creator may drain it."""
