"""
Unit Tests for Shortfall Calculator

Tests verify the minimum-guest penalty multiplier.
"""

from decimal import Decimal

import pytest

from payout_engine.calculators.shortfall import ShortfallCalculator
from payout_engine.models import BaseCalculation, PayoutContext, PromoterContract


class TestShortfallPenalty:
    """Test the below-minimum percentage."""

    @pytest.fixture
    def calculator(self):
        return ShortfallCalculator()

    def test_penalty_applies_below_minimum(self, calculator):
        ctx = self._make_context(
            per_head_amount=40, fixed_fee=0, checkins=4, minimum_guests=10, below_minimum_percent=50
        )
        result = calculator.apply(ctx)

        assert result.applied is True
        assert result.percent_applied == Decimal("50")
        assert result.base_before == Decimal("40")
        assert result.base_after == Decimal("20")

    def test_no_penalty_at_minimum(self, calculator):
        ctx = self._make_context(
            per_head_amount=100, fixed_fee=0, checkins=10, minimum_guests=10, below_minimum_percent=50
        )
        result = calculator.apply(ctx)

        assert result.applied is False
        assert result.base_after == Decimal("100")

    def test_no_penalty_without_percent(self, calculator):
        """Penalty is opt-in: no percent configured means full base."""
        ctx = self._make_context(
            per_head_amount=40, fixed_fee=0, checkins=4, minimum_guests=10, below_minimum_percent=None
        )
        result = calculator.apply(ctx)

        assert result.applied is False
        assert result.percent_applied is None
        assert result.base_after == Decimal("40")

    def test_no_penalty_without_minimum(self, calculator):
        ctx = self._make_context(
            per_head_amount=40, fixed_fee=0, checkins=4, minimum_guests=None, below_minimum_percent=50
        )
        result = calculator.apply(ctx)

        assert result.applied is False
        assert result.base_after == Decimal("40")

    def test_penalty_scales_fixed_fee_too(self, calculator):
        """The percentage applies to the whole base, fixed fee included."""
        ctx = self._make_context(
            per_head_amount=30, fixed_fee=200, checkins=3, minimum_guests=10, below_minimum_percent=25
        )
        result = calculator.apply(ctx)

        # (30 + 200) × 25% = 57.5
        assert result.base_after == Decimal("57.5")

    def test_zero_percent_wipes_base(self, calculator):
        ctx = self._make_context(
            per_head_amount=40, fixed_fee=100, checkins=0, minimum_guests=1, below_minimum_percent=0
        )
        result = calculator.apply(ctx)

        assert result.applied is True
        assert result.base_after == Decimal("0")

    def _make_context(self, per_head_amount, fixed_fee, checkins, minimum_guests, below_minimum_percent):
        contract = PromoterContract(
            minimum_guests=minimum_guests,
            below_minimum_percent=Decimal(str(below_minimum_percent)) if below_minimum_percent is not None else None,
        )
        ctx = PayoutContext(contract=contract, checkins_count=checkins)
        ctx.base = BaseCalculation(
            per_head_amount=Decimal(str(per_head_amount)), fixed_fee_amount=Decimal(str(fixed_fee))
        )
        return ctx
