"""
Shortfall Calculator

Applies the minimum-guest penalty to the base payout.
"""

from decimal import Decimal

from ..models import PayoutContext, ShortfallPenalty


class ShortfallCalculator:
    """Scales the base down when attendance misses the contract minimum."""

    PERCENT = Decimal("0.01")

    def apply(self, ctx: PayoutContext) -> ShortfallPenalty:
        """
        Apply the below-minimum percentage to the whole base.

        The penalty is opt-in: it needs minimum_guests AND
        below_minimum_percent. The percentage multiplies fixed fee and
        per-head together, not the per-head part alone.
        """
        contract = ctx.contract
        base = ctx.base.total

        below_minimum = contract.minimum_guests is not None and ctx.checkins_count < contract.minimum_guests

        if not below_minimum or contract.below_minimum_percent is None:
            return ShortfallPenalty(applied=False, percent_applied=None, base_before=base, base_after=base)

        percent = contract.below_minimum_percent
        return ShortfallPenalty(
            applied=True,
            percent_applied=percent,
            base_before=base,
            base_after=base * percent * self.PERCENT,
        )
