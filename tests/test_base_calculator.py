"""
Unit Tests for Base Calculator

Tests verify fixed fee and per-head amounts, including min/max clamping.
"""

from decimal import Decimal

import pytest

from payout_engine.calculators.base import BaseCalculator
from payout_engine.models import PayoutContext, PromoterContract


class TestPerHeadClamping:
    """Test per-head guest clamping."""

    @pytest.fixture
    def calculator(self):
        return BaseCalculator()

    @pytest.fixture
    def contract(self):
        return PromoterContract(per_head_rate=Decimal("10"), per_head_min=5, per_head_max=20)

    def test_below_min_is_paid_as_min(self, calculator, contract):
        """Floor guarantee: 2 check-ins are paid as 5."""
        result = calculator.calculate(PayoutContext(contract=contract, checkins_count=2))

        assert result.per_head_counted == 5
        assert result.per_head_amount == Decimal("50")

    def test_above_max_is_capped(self, calculator, contract):
        result = calculator.calculate(PayoutContext(contract=contract, checkins_count=30))

        assert result.per_head_counted == 20
        assert result.per_head_amount == Decimal("200")

    def test_within_bounds_uses_actual_count(self, calculator, contract):
        result = calculator.calculate(PayoutContext(contract=contract, checkins_count=12))

        assert result.per_head_counted == 12
        assert result.per_head_amount == Decimal("120")

    def test_no_bounds_scales_linearly(self, calculator):
        contract = PromoterContract(per_head_rate=Decimal("2.5"))
        result = calculator.calculate(PayoutContext(contract=contract, checkins_count=1_000_000))

        assert result.per_head_amount == Decimal("2500000.0")

    def test_zero_rate_still_clamps(self, calculator):
        """A rate of 0 is not the same as no rate: guests are still counted."""
        contract = PromoterContract(per_head_rate=Decimal("0"), per_head_min=5)
        result = calculator.calculate(PayoutContext(contract=contract, checkins_count=1))

        assert result.per_head_counted == 5
        assert result.per_head_amount == Decimal("0")

    def test_no_rate_skips_per_head(self, calculator):
        contract = PromoterContract(per_head_min=5, per_head_max=20)
        result = calculator.calculate(PayoutContext(contract=contract, checkins_count=10))

        assert result.per_head_counted == 0
        assert result.per_head_amount == Decimal("0")


class TestFixedFee:
    """Test fixed fee handling."""

    @pytest.fixture
    def calculator(self):
        return BaseCalculator()

    @pytest.mark.parametrize("checkins", [0, 1, 50, 10_000])
    def test_fixed_fee_independent_of_attendance(self, calculator, checkins):
        contract = PromoterContract(fixed_fee=Decimal("100"))
        result = calculator.calculate(PayoutContext(contract=contract, checkins_count=checkins))

        assert result.fixed_fee_amount == Decimal("100")
        assert result.total == Decimal("100")

    def test_fixed_fee_and_per_head_both_apply(self, calculator):
        contract = PromoterContract(fixed_fee=Decimal("100"), per_head_rate=Decimal("5"))
        result = calculator.calculate(PayoutContext(contract=contract, checkins_count=10))

        assert result.fixed_fee_amount == Decimal("100")
        assert result.per_head_amount == Decimal("50")
        assert result.total == Decimal("150")

    def test_empty_contract_has_zero_base(self, calculator):
        result = calculator.calculate(PayoutContext(contract=PromoterContract(), checkins_count=10))

        assert result.total == Decimal("0")
