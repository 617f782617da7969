from __future__ import annotations

import logging
from uuid import uuid4

from rugsim.application.dto.mint_token import MintTokenInput
from rugsim.application.ledger import TransactionLedger, utcnow
from rugsim.application.ports.token_port import TokenPort
from rugsim.domain.entities.token import Token
from rugsim.domain.entities.transaction import Transaction
from rugsim.domain.exceptions import InvalidInputError, PersistenceError
from rugsim.domain.services.reserves import ZERO


logger = logging.getLogger(__name__)

MAX_DECIMALS = 18


class MintTokenUseCase:
    def __init__(self, *, token_port: TokenPort, ledger: TransactionLedger):
        self._token_port = token_port
        self._ledger = ledger

    def execute(self, command: MintTokenInput) -> Token:
        name = command.name.strip()
        symbol = command.symbol.strip().upper()
        if not name:
            raise InvalidInputError("name is required.")
        if not symbol:
            raise InvalidInputError("symbol is required.")
        if command.total_supply <= 0:
            raise InvalidInputError("total_supply must be positive.")
        if command.decimals < 0 or command.decimals > MAX_DECIMALS:
            raise InvalidInputError(f"decimals must be between 0 and {MAX_DECIMALS}.")

        token = Token(
            id=uuid4().hex,
            name=name,
            symbol=symbol,
            total_supply=command.total_supply,
            decimals=command.decimals,
            description=command.description.strip(),
            creator=command.creator,
            created_at=utcnow(),
        )
        self._token_port.save(token)
        try:
            self._ledger.append(
                Transaction(
                    type="mint_token",
                    pool_id="",
                    token_id=token.id,
                    token_symbol=token.symbol,
                    amount_in=token.total_supply,
                    amount_out=ZERO,
                    token_in="",
                    token_out=token.symbol,
                    price=ZERO,
                    price_impact_pct=ZERO,
                    slippage_pct=ZERO,
                    reserves_after=None,
                    user=command.creator,
                )
            )
        except PersistenceError as exc:
            logger.warning("mint_token: ledger_append_failed token=%s error=%s", token.id, exc)
            self._token_port.discard(token_id=token.id)
            raise PersistenceError(str(exc), result=token) from exc

        logger.info("mint_token: minted token=%s symbol=%s", token.id, token.symbol)
        return token
