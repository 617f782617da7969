from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
import unittest

from rugsim.domain.entities.pool import Pool
from rugsim.domain.exceptions import InvalidInputError, PoolInactiveError
from rugsim.domain.services.swap import (
    SWAP_FEE_RATE,
    compute_swap,
    constant_product_output,
    quote_swap,
)


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


class ComputeSwapTests(unittest.TestCase):
    def test_selling_tokens_matches_constant_product_after_fee(self):
        result = compute_swap(_pool(), Decimal("100"), "token_to_base")

        self.assertAlmostEqual(result.amount_out, Decimal("0.90661"), places=5)
        self.assertEqual(result.new_token_reserve, Decimal("1100"))
        self.assertEqual(result.new_base_reserve, Decimal("10") - result.amount_out)
        self.assertEqual(result.fee_paid, Decimal("100") * SWAP_FEE_RATE)

    def test_fee_keeps_product_from_shrinking(self):
        pool = _pool()
        for direction, amount in (("token_to_base", Decimal("250")), ("base_to_token", Decimal("3"))):
            result = compute_swap(pool, amount, direction)
            self.assertGreaterEqual(
                result.new_token_reserve * result.new_base_reserve,
                pool.token_reserve * pool.base_reserve,
            )

    def test_price_impact_sign_follows_direction(self):
        sell = compute_swap(_pool(), Decimal("100"), "token_to_base")
        buy = compute_swap(_pool(), Decimal("1"), "base_to_token")

        self.assertLess(sell.price_impact_pct, 0)
        self.assertLess(sell.price_after, sell.price_before)
        self.assertGreater(buy.price_impact_pct, 0)
        self.assertGreater(buy.price_after, buy.price_before)

    def test_bigger_trades_get_more_out_and_move_price_further(self):
        small = compute_swap(_pool(), Decimal("10"), "token_to_base")
        large = compute_swap(_pool(), Decimal("500"), "token_to_base")

        self.assertGreater(large.amount_out, small.amount_out)
        self.assertGreater(abs(large.price_impact_pct), abs(small.price_impact_pct))
        self.assertGreater(large.slippage_pct, small.slippage_pct)

    def test_slippage_compares_execution_price_to_spot(self):
        result = compute_swap(_pool(), Decimal("100"), "token_to_base")

        self.assertEqual(result.execution_price, Decimal("100") / result.amount_out)
        expected = abs(result.execution_price - Decimal("100")) / Decimal("100") * Decimal("100")
        self.assertEqual(result.slippage_pct, expected)

    def test_dust_trade_that_rounds_to_nothing_reports_full_slippage(self):
        result = compute_swap(_pool(), Decimal("1E-30"), "token_to_base")

        self.assertEqual(result.amount_out, Decimal("0"))
        self.assertEqual(result.execution_price, Decimal("0"))
        self.assertEqual(result.slippage_pct, Decimal("100"))

    def test_huge_trade_never_empties_output_side(self):
        result = compute_swap(_pool(), Decimal("1000000"), "base_to_token")

        self.assertLess(result.amount_out, Decimal("1000"))
        self.assertGreater(result.new_token_reserve, 0)

    def test_trade_that_would_drain_output_reserve_is_rejected(self):
        pool = _pool()
        with self.assertRaises(InvalidInputError):
            compute_swap(pool, Decimal("1E40"), "token_to_base")
        with self.assertRaises(InvalidInputError):
            quote_swap(pool, Decimal("1E40"), "token_to_base")

    def test_rejects_non_positive_amount(self):
        for amount in (Decimal("0"), Decimal("-5")):
            with self.assertRaises(InvalidInputError):
                compute_swap(_pool(), amount, "token_to_base")

    def test_rejects_unknown_direction(self):
        with self.assertRaises(InvalidInputError):
            compute_swap(_pool(), Decimal("1"), "sideways")

    def test_rejects_empty_reserves(self):
        with self.assertRaises(InvalidInputError):
            compute_swap(_pool(base_reserve=Decimal("0")), Decimal("1"), "token_to_base")

    def test_rugged_pool_does_not_trade(self):
        with self.assertRaises(PoolInactiveError):
            compute_swap(_pool(is_rugged=True, is_active=False), Decimal("1"), "base_to_token")

    def test_inactive_pool_does_not_trade(self):
        with self.assertRaises(PoolInactiveError):
            compute_swap(_pool(is_active=False), Decimal("1"), "base_to_token")


class QuoteSwapTests(unittest.TestCase):
    def test_zero_amount_quotes_to_nothing(self):
        result = quote_swap(_pool(), Decimal("0"), "base_to_token")

        self.assertEqual(result.amount_out, Decimal("0"))
        self.assertEqual(result.price_impact_pct, Decimal("0"))
        self.assertEqual(result.new_token_reserve, Decimal("1000"))
        self.assertEqual(result.price_before, result.price_after)

    def test_positive_amount_matches_execution(self):
        pool = _pool()
        self.assertEqual(
            quote_swap(pool, Decimal("2"), "base_to_token"),
            compute_swap(pool, Decimal("2"), "base_to_token"),
        )

    def test_quote_on_rugged_pool_is_rejected(self):
        with self.assertRaises(PoolInactiveError):
            quote_swap(_pool(is_rugged=True, is_active=False), Decimal("1"), "base_to_token")


def test_constant_product_output_floors_at_zero():
    assert constant_product_output(
        reserve_in=Decimal("10"),
        reserve_out=Decimal("0"),
        amount_in=Decimal("5"),
    ) == Decimal("0")


def test_constant_product_output_without_fee():
    out = constant_product_output(
        reserve_in=Decimal("100"),
        reserve_out=Decimal("100"),
        amount_in=Decimal("100"),
        fee_rate=Decimal("0"),
    )
    assert out == Decimal("50")
