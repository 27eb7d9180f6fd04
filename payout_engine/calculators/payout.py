"""
Payout Calculator

Totals the pipeline steps into the calculated and final payout.
"""

from decimal import Decimal

from ..models import PayoutBreakdown, PayoutContext


class PayoutCalculator:
    """Calculates calculated and final payout for a promoter."""

    def calculate(self, ctx: PayoutContext) -> PayoutBreakdown:
        """
        Calculate the payout totals.

        Calculated Payout = max(0, Base after shortfall + Bonus)
        Final Payout      = Calculated Payout + Manual Adjustment

        Final payout is not floored: a negative manual adjustment
        (e.g. a clawback) may take it below zero.
        """
        contract = ctx.contract
        base = ctx.shortfall.base_after

        calculated = max(Decimal("0"), base + ctx.bonus.amount)

        adjustment = contract.manual_adjustment_amount
        if adjustment is None:
            adjustment = Decimal("0")

        return PayoutBreakdown(
            checkins_count=ctx.checkins_count,
            calculated_payout=calculated,
            final_payout=calculated + adjustment,
            manual_adjustment=adjustment,
            per_head_rate=contract.per_head_rate,
            per_head_counted=ctx.base.per_head_counted,
            per_head_amount=ctx.base.per_head_amount,
            fixed_fee_full=contract.fixed_fee,
            fixed_fee_amount=ctx.base.fixed_fee_amount,
            base_amount=base,
            below_minimum_percent_applied=ctx.shortfall.percent_applied,
            bonus_amount=ctx.bonus.amount,
            bonus_details=list(ctx.bonus.details),
        )
