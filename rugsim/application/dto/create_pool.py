from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class CreatePoolInput:
    token_id: str
    token_reserve: Decimal
    base_reserve: Decimal
    creator: str = "Simulator User"
