"""
Unit Tests for Payout Calculator

Tests verify totals, the non-negative floor and manual adjustments.
"""

from decimal import Decimal

import pytest

from payout_engine.calculators.payout import PayoutCalculator
from payout_engine.models import BonusCalculation, PayoutContext, PromoterContract, ShortfallPenalty


class TestPayoutTotals:
    """Test calculated and final payout."""

    @pytest.fixture
    def calculator(self):
        return PayoutCalculator()

    def test_base_plus_bonus(self, calculator):
        ctx = self._make_context(base=300, bonus=100)
        result = calculator.calculate(ctx)

        assert result.calculated_payout == Decimal("400")
        assert result.final_payout == Decimal("400")
        assert result.manual_adjustment == Decimal("0")

    def test_negative_total_floored_at_zero(self, calculator):
        ctx = self._make_context(base=-50, bonus=0)
        result = calculator.calculate(ctx)

        assert result.calculated_payout == Decimal("0")

    def test_positive_adjustment(self, calculator):
        ctx = self._make_context(base=100, bonus=0, adjustment="25.50")
        result = calculator.calculate(ctx)

        assert result.calculated_payout == Decimal("100")
        assert result.final_payout == Decimal("125.50")

    def test_negative_adjustment_can_go_below_zero(self, calculator):
        """Clawbacks: final payout is not floored."""
        ctx = self._make_context(base=100, bonus=0, adjustment="-250")
        result = calculator.calculate(ctx)

        assert result.calculated_payout == Decimal("100")
        assert result.final_payout == Decimal("-150")

    def test_adjustment_can_exactly_offset(self, calculator):
        ctx = self._make_context(base=100, bonus=0, adjustment="-100")
        result = calculator.calculate(ctx)

        assert result.final_payout == Decimal("0")

    def test_adjustment_applied_after_floor(self, calculator):
        ctx = self._make_context(base=-80, bonus=0, adjustment="30")
        result = calculator.calculate(ctx)

        assert result.calculated_payout == Decimal("0")
        assert result.final_payout == Decimal("30")

    def _make_context(self, base, bonus, adjustment=None):
        contract = PromoterContract(
            manual_adjustment_amount=Decimal(adjustment) if adjustment is not None else None
        )
        ctx = PayoutContext(contract=contract, checkins_count=0)
        ctx.shortfall = ShortfallPenalty(base_before=Decimal(str(base)), base_after=Decimal(str(base)))
        ctx.bonus = BonusCalculation(amount=Decimal(str(bonus)))
        return ctx
