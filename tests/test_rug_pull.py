from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
import unittest

import pytest

from rugsim.domain.entities.pool import Pool
from rugsim.domain.exceptions import (
    AlreadyRuggedError,
    InvalidInputError,
    NotPoolCreatorError,
    PoolInactiveError,
)
from rugsim.domain.services.rug_pull import calculate_rug_impact, ensure_creator, execute_rug_pull

NOW = datetime(2024, 5, 1, 12, tzinfo=timezone.utc)


def _pool(**overrides) -> Pool:
    payload = {
        "id": "pool-1",
        "name": "RUG/SOL Pool",
        "token_id": "token-1",
        "token_symbol": "RUG",
        "token_reserve": Decimal("1000"),
        "base_reserve": Decimal("10"),
        "total_liquidity": Decimal("100"),
        "creator": "tester",
        "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
    }
    payload.update(overrides)
    return Pool(**payload)


class RugImpactTests(unittest.TestCase):
    def test_base_only_drain_collapses_price(self):
        impact = calculate_rug_impact(_pool())

        self.assertEqual(impact.drain_mode, "base_only")
        self.assertEqual(impact.new_token_reserve, Decimal("1000"))
        self.assertEqual(impact.new_base_reserve, Decimal("0.50"))
        self.assertEqual(impact.price_drop_pct, Decimal("95"))
        self.assertEqual(impact.drained_base_amount, Decimal("9.50"))
        self.assertEqual(impact.drained_token_amount, Decimal("0"))
        self.assertEqual(impact.stolen_amount, Decimal("95"))

    def test_proportional_drain_keeps_price(self):
        impact = calculate_rug_impact(_pool(), drain_mode="proportional")

        self.assertEqual(impact.new_token_reserve, Decimal("50"))
        self.assertEqual(impact.new_base_reserve, Decimal("0.5"))
        self.assertEqual(impact.new_price, impact.old_price)
        self.assertEqual(impact.price_drop_pct, Decimal("0"))
        self.assertEqual(impact.new_total_liquidity, Decimal("5"))

    def test_impact_preview_leaves_pool_alone(self):
        pool = _pool()
        calculate_rug_impact(pool)

        self.assertEqual(pool.base_reserve, Decimal("10"))
        self.assertFalse(pool.is_rugged)

    def test_rejects_bad_parameters(self):
        with self.assertRaises(InvalidInputError):
            calculate_rug_impact(_pool(), retain_fraction=Decimal("1"))
        with self.assertRaises(InvalidInputError):
            calculate_rug_impact(_pool(), retain_fraction=Decimal("-0.1"))
        with self.assertRaises(InvalidInputError):
            calculate_rug_impact(_pool(), drain_mode="everything")


class ExecuteRugPullTests(unittest.TestCase):
    def test_marks_pool_rugged_and_inactive(self):
        result = execute_rug_pull(_pool(), now=NOW)

        self.assertTrue(result.pool.is_rugged)
        self.assertFalse(result.pool.is_active)
        self.assertEqual(result.pool.rug_date, NOW)
        self.assertEqual(result.pool.base_reserve, Decimal("0.50"))
        self.assertEqual(result.pool.total_liquidity, result.impact.new_total_liquidity)

    def test_second_rug_pull_is_rejected(self):
        rugged = execute_rug_pull(_pool(), now=NOW).pool

        with self.assertRaises(AlreadyRuggedError):
            execute_rug_pull(rugged, now=NOW)
        self.assertEqual(rugged.base_reserve, Decimal("0.50"))

    def test_inactive_pool_is_rejected_without_being_called_rugged(self):
        with self.assertRaises(PoolInactiveError) as ctx:
            execute_rug_pull(_pool(is_active=False), now=NOW)
        self.assertNotIsInstance(ctx.exception, AlreadyRuggedError)


def test_ensure_creator_accepts_anonymous_and_the_creator():
    ensure_creator(_pool(), requested_by=None)
    ensure_creator(_pool(), requested_by="tester")


def test_ensure_creator_rejects_anyone_else():
    with pytest.raises(NotPoolCreatorError):
        ensure_creator(_pool(), requested_by="mallory")
