"""
Base Calculator

Computes the attendance-driven part of a promoter payout: the fixed fee
plus the per-head component.
"""

from decimal import Decimal

from ..models import BaseCalculation, PayoutContext, PromoterContract


class BaseCalculator:
    """Calculates fixed fee and per-head amounts."""

    def calculate(self, ctx: PayoutContext) -> BaseCalculation:
        """
        Calculate the base payout.

        Base = Fixed Fee (if set)
             + Effective Guests × Per-Head Rate (if rate set)

        Both components apply independently when both are configured.
        """
        contract = ctx.contract

        fixed_fee_amount = contract.fixed_fee if contract.fixed_fee is not None else Decimal("0")

        if contract.per_head_rate is None:
            return BaseCalculation(per_head_counted=0, per_head_amount=Decimal("0"), fixed_fee_amount=fixed_fee_amount)

        counted = self.effective_guests(contract, ctx.checkins_count)
        return BaseCalculation(
            per_head_counted=counted,
            per_head_amount=counted * contract.per_head_rate,
            fixed_fee_amount=fixed_fee_amount,
        )

    @staticmethod
    def effective_guests(contract: PromoterContract, checkins_count: int) -> int:
        """
        Clamp the check-in count into [per_head_min, per_head_max].

        - Below per_head_min: paid as if per_head_min guests came (floor guarantee)
        - Above per_head_max: capped at per_head_max
        """
        if contract.per_head_min is not None and checkins_count < contract.per_head_min:
            return contract.per_head_min
        if contract.per_head_max is not None and checkins_count > contract.per_head_max:
            return contract.per_head_max
        return checkins_count
