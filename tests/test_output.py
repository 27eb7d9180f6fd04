"""
Unit Tests for Output Builder and breakdown formatting
"""

from decimal import Decimal

import pytest

from payout_engine import PayoutProcessor, PromoterContract
from payout_engine.models import BonusTier
from payout_engine.output import OutputBuilder, format_currency, format_payout_breakdown, to_money


class TestMoneyFormatting:

    def test_to_money_rounds_half_up(self):
        assert to_money(Decimal("10.005")) == 10.01
        assert to_money(Decimal("-2.345")) == -2.35

    @pytest.mark.parametrize(
        "value, currency, expected",
        [
            (Decimal("120"), "USD", "$120"),
            (Decimal("1234.5"), "USD", "$1,234.50"),
            (Decimal("-20"), "EUR", "-€20"),
            (Decimal("15"), "CHF", "CHF 15"),
        ],
    )
    def test_format_currency(self, value, currency, expected):
        assert format_currency(value, currency) == expected


class TestBreakdownText:

    @pytest.fixture
    def processor(self):
        return PayoutProcessor()

    def test_full_breakdown(self, processor):
        contract = PromoterContract(
            per_head_rate=Decimal("10"),
            fixed_fee=Decimal("100"),
            bonus_tiers=[BonusTier(threshold=10, amount=Decimal("50"), label="Ten club")],
            manual_adjustment_amount=Decimal("-20"),
        )
        text = format_payout_breakdown(processor.calculate(contract, 12), "USD")

        assert text == (
            "12 check-ins × $10 = $120 + Fixed fee: $100"
            " + Bonus: $50 (10+ guests) - Ten club + Manual adjustment: -$20"
        )

    def test_shortfall_shown(self, processor):
        contract = PromoterContract(
            fixed_fee=Decimal("200"), minimum_guests=10, below_minimum_percent=Decimal("50")
        )
        text = format_payout_breakdown(processor.calculate(contract, 3), "USD")

        assert text == "(Fixed fee: $200) × 50% below minimum = $100"

    def test_shortfall_wraps_base_before_bonus(self, processor):
        contract = PromoterContract(
            per_head_rate=Decimal("10"),
            fixed_fee=Decimal("100"),
            minimum_guests=10,
            below_minimum_percent=Decimal("50"),
            bonus_threshold=3,
            bonus_amount=Decimal("25"),
        )
        text = format_payout_breakdown(processor.calculate(contract, 3), "USD")

        # The bonus is outside the parentheses, so it is not reduced by the percentage
        assert text == (
            "(3 check-ins × $10 = $30 + Fixed fee: $100) × 50% below minimum = $65"
            " + Bonus: $25 (3+ guests)"
        )

    def test_positive_adjustment_has_plus_sign(self, processor):
        contract = PromoterContract(manual_adjustment_amount=Decimal("15"))
        text = format_payout_breakdown(processor.calculate(contract, 0), "USD")

        assert text == "Manual adjustment: +$15"

    def test_empty_breakdown(self, processor):
        assert format_payout_breakdown(processor.calculate(PromoterContract(), 0), "USD") == ""


class TestOutputBuilder:

    def test_build_has_all_fields(self):
        contract = PromoterContract(per_head_rate=Decimal("2.5"))
        breakdown = PayoutProcessor().calculate(contract, 3)
        result = OutputBuilder().build(breakdown, currency="USD")

        calcs = result["calculations"]
        for key in (
            "per_head_amount",
            "fixed_fee_amount",
            "base_amount",
            "bonus_amount",
            "calculated_payout",
            "manual_adjustment",
            "final_payout",
        ):
            assert "value" in calcs[key]
            assert "description" in calcs[key]

        assert calcs["per_head_amount"]["value"] == 7.5
        assert calcs["fixed_fee_amount"]["description"] == "No fixed fee in contract"
