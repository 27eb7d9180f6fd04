"""
Bonus Calculator

Handles tiered and legacy single-threshold attendance bonuses.
"""

from decimal import Decimal

from ..models import BonusCalculation, BonusDetail, BonusTier, PayoutContext


class BonusCalculator:
    """Calculates the attendance bonus for a promoter."""

    def calculate(self, ctx: PayoutContext) -> BonusCalculation:
        """
        Calculate the bonus.

        Tiered Bonuses (take precedence when non-empty):
        - Only the best qualifying tier is paid, tiers do not stack
        - Input order is irrelevant

        Legacy Bonus:
        - bonus_amount once check-ins reach bonus_threshold
        """
        contract = ctx.contract

        if contract.bonus_tiers:
            return self._calculate_tiered(contract.bonus_tiers, ctx.checkins_count)

        return self._calculate_legacy(ctx)

    def _calculate_tiered(self, tiers: list[BonusTier], checkins_count: int) -> BonusCalculation:
        best = self.best_tier(tiers, checkins_count)
        if best is None:
            return BonusCalculation(amount=Decimal("0"), details=[])

        return BonusCalculation(
            amount=best.amount,
            details=[BonusDetail(type="tier", threshold=best.threshold, amount=best.amount, label=best.label)],
        )

    def _calculate_legacy(self, ctx: PayoutContext) -> BonusCalculation:
        contract = ctx.contract

        if (
            contract.bonus_threshold is None
            or contract.bonus_amount is None
            or ctx.checkins_count < contract.bonus_threshold
        ):
            return BonusCalculation(amount=Decimal("0"), details=[])

        return BonusCalculation(
            amount=contract.bonus_amount,
            details=[BonusDetail(type="legacy", threshold=contract.bonus_threshold, amount=contract.bonus_amount)],
        )

    @staticmethod
    def best_tier(tiers: list[BonusTier], checkins_count: int) -> BonusTier | None:
        """Return the tier with the highest threshold not above checkins_count."""
        best = None
        for tier in tiers:
            if checkins_count < tier.threshold:
                continue
            if best is None or tier.threshold > best.threshold:
                best = tier
        return best
