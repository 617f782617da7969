from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal
import unittest

import pytest

from rugsim.application.ledger import TransactionLedger
from rugsim.domain.entities.pool import ReserveSnapshot
from rugsim.domain.entities.transaction import Transaction
from rugsim.domain.exceptions import InvalidInputError, PersistenceError
from rugsim.infrastructure.memory.repositories import InMemoryTransactionRepository

START = datetime(2024, 5, 1, 12, tzinfo=timezone.utc)


class SteppingClock:
    def __init__(self, *times: datetime):
        self._times = list(times)

    def __call__(self) -> datetime:
        return self._times.pop(0) if len(self._times) > 1 else self._times[0]


def _swap(pool_id: str = "pool-1", amount_in: str = "1") -> Transaction:
    return Transaction(
        type="swap",
        pool_id=pool_id,
        token_id="token-1",
        token_symbol="RUG",
        amount_in=Decimal(amount_in),
        amount_out=Decimal("0.5"),
        token_in="SOL",
        token_out="RUG",
        price=Decimal("2"),
        price_impact_pct=Decimal("1"),
        slippage_pct=Decimal("0.3"),
        reserves_after=ReserveSnapshot(token_reserve=Decimal("10"), base_reserve=Decimal("5")),
    )


class PruneFailingStore(InMemoryTransactionRepository):
    def prune(self, *, keep):
        raise PersistenceError("prune_transactions failed: OperationalError")


class TransactionLedgerTests(unittest.TestCase):
    def test_append_assigns_identity_and_timestamp(self):
        ledger = TransactionLedger(InMemoryTransactionRepository(), clock=lambda: START)

        stored = ledger.append(_swap())

        self.assertTrue(stored.id)
        self.assertTrue(stored.hash)
        self.assertNotEqual(stored.id, stored.hash)
        self.assertEqual(stored.timestamp, START)
        self.assertEqual(ledger.get(stored.id), stored)

    def test_list_is_most_recent_first(self):
        ledger = TransactionLedger(InMemoryTransactionRepository(), clock=lambda: START)
        first = ledger.append(_swap(amount_in="1"))
        second = ledger.append(_swap(amount_in="2"))

        rows = list(ledger.list())

        self.assertEqual([row.id for row in rows], [second.id, first.id])
        self.assertEqual(ledger.latest(), second)

    def test_retention_cap_drops_oldest_records(self):
        ledger = TransactionLedger(InMemoryTransactionRepository(), retention_cap=3, clock=lambda: START)
        for amount in ("1", "2", "3", "4", "5"):
            ledger.append(_swap(amount_in=amount))

        rows = list(ledger.list())

        self.assertEqual([row.amount_in for row in rows], [Decimal("5"), Decimal("4"), Decimal("3")])

    def test_failed_prune_still_returns_the_appended_record(self):
        ledger = TransactionLedger(PruneFailingStore(), retention_cap=1, clock=lambda: START)
        first = ledger.append(_swap(amount_in="1"))
        second = ledger.append(_swap(amount_in="2"))

        self.assertEqual([row.id for row in ledger.list()], [second.id, first.id])
        self.assertEqual(ledger.latest(), second)

    def test_timestamps_never_go_backwards(self):
        clock = SteppingClock(START, START - timedelta(minutes=5))
        ledger = TransactionLedger(InMemoryTransactionRepository(), clock=clock)

        first = ledger.append(_swap())
        second = ledger.append(_swap())

        self.assertEqual(second.timestamp, first.timestamp)

    def test_view_reads_lazily_and_can_be_iterated_again(self):
        ledger = TransactionLedger(InMemoryTransactionRepository(), clock=lambda: START)
        view = ledger.list(pool_id="pool-1")

        ledger.append(_swap())
        ledger.append(_swap(pool_id="pool-2"))

        self.assertEqual(len(list(view)), 1)
        self.assertEqual(list(view), list(view))

    def test_limit_and_pool_filter(self):
        ledger = TransactionLedger(InMemoryTransactionRepository(), clock=lambda: START)
        for _ in range(3):
            ledger.append(_swap(pool_id="pool-1"))
        ledger.append(_swap(pool_id="pool-2"))

        self.assertEqual(len(list(ledger.list(limit=2))), 2)
        self.assertEqual(len(list(ledger.list(pool_id="pool-1"))), 3)
        self.assertEqual(ledger.latest(pool_id="pool-1").pool_id, "pool-1")

    def test_rejects_non_positive_limit(self):
        ledger = TransactionLedger(InMemoryTransactionRepository())

        with self.assertRaises(InvalidInputError):
            ledger.list(limit=0)

    def test_rejects_non_positive_retention_cap(self):
        with self.assertRaises(ValueError):
            TransactionLedger(InMemoryTransactionRepository(), retention_cap=0)


def test_append_rejects_unknown_transaction_type():
    ledger = TransactionLedger(InMemoryTransactionRepository())

    with pytest.raises(InvalidInputError):
        ledger.append(replace(_swap(), type="airdrop"))
    assert list(ledger.list()) == []
