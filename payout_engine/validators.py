"""
Input Validation for the Promoter Payout Engine

The calculator itself is lenient and never raises. Callers that persist or
expose payouts validate first; this module raises ValueError with clear
messages for any constraint violations.
"""

from decimal import Decimal

from .models import PromoterContract


class InputValidator:
    """Validates payout input according to business rules."""

    def validate(self, contract: PromoterContract, checkins_count) -> None:
        """
        Run all validations. Raises ValueError if any check fails.
        """
        self.validate_checkins(checkins_count)
        self.validate_contract(contract)

    def validate_checkins(self, checkins_count) -> None:
        if isinstance(checkins_count, bool) or not isinstance(checkins_count, int):
            raise ValueError(f"checkins_count must be an integer, got: {checkins_count!r}")

        if checkins_count < 0:
            raise ValueError(f"checkins_count cannot be negative, got: {checkins_count}")

    def validate_contract(self, contract: PromoterContract) -> None:
        """Validate contract-level constraints."""
        self._validate_amounts(contract)
        self._validate_guest_bounds(contract)

        if contract.below_minimum_percent is not None:
            if not (0 <= contract.below_minimum_percent <= 100):
                raise ValueError(
                    f"below_minimum_percent must be between 0 and 100, got: {contract.below_minimum_percent}"
                )

        for i, tier in enumerate(contract.bonus_tiers or []):
            if tier.threshold < 0:
                raise ValueError(f"Bonus tier {i} threshold cannot be negative, got: {tier.threshold}")
            if tier.amount < 0:
                raise ValueError(f"Bonus tier {i} amount cannot be negative, got: {tier.amount}")

    def _validate_amounts(self, contract: PromoterContract) -> None:
        amounts: dict[str, Decimal | None] = {
            "per_head_rate": contract.per_head_rate,
            "fixed_fee": contract.fixed_fee,
            "bonus_amount": contract.bonus_amount,
        }
        for name, value in amounts.items():
            if value is not None and value < 0:
                raise ValueError(f"{name} cannot be negative, got: {value}")

    def _validate_guest_bounds(self, contract: PromoterContract) -> None:
        bounds = {
            "per_head_min": contract.per_head_min,
            "per_head_max": contract.per_head_max,
            "minimum_guests": contract.minimum_guests,
            "bonus_threshold": contract.bonus_threshold,
        }
        for name, value in bounds.items():
            if value is not None and value < 0:
                raise ValueError(f"{name} cannot be negative, got: {value}")

        if (
            contract.per_head_min is not None
            and contract.per_head_max is not None
            and contract.per_head_min > contract.per_head_max
        ):
            raise ValueError(
                f"per_head_min ({contract.per_head_min}) cannot exceed per_head_max ({contract.per_head_max})"
            )
