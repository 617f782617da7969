from __future__ import annotations

from typing import Protocol

from rugsim.domain.entities.token import Token


class TokenPort(Protocol):
    def get(self, *, token_id: str) -> Token | None:
        ...

    def list_all(self) -> list[Token]:
        ...

    def save(self, token: Token) -> Token:
        ...

    def discard(self, *, token_id: str) -> None:
        """Undo a mint whose ledger entry could not be written."""
        ...
