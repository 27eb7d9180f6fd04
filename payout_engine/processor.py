"""
Payout Processor - Main Orchestrator

Coordinates the promoter payout pipeline through discrete, testable steps.
"""

from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, localcontext
from typing import Any, Dict

from .calculators import BaseCalculator, BonusCalculator, PayoutCalculator, ShortfallCalculator
from .models import PayoutBreakdown, PayoutContext, PromoterContract
from .output import OutputBuilder
from .validators import InputValidator


class PayoutProcessor:
    """
    Main orchestrator for promoter payouts.

    Implements a clear pipeline pattern:
    1. Build Context
    2. Calculate Base (fixed fee + per-head)
    3. Apply Shortfall Penalty
    4. Calculate Bonus
    5. Calculate Totals
    """

    def __init__(self):
        # Initialize all calculators
        self.validator = InputValidator()
        self.base_calculator = BaseCalculator()
        self.shortfall_calculator = ShortfallCalculator()
        self.bonus_calculator = BonusCalculator()
        self.payout_calculator = PayoutCalculator()
        self.output_builder = OutputBuilder()

    def calculate(self, contract: PromoterContract, checkins_count: int) -> PayoutBreakdown:
        """
        Calculate a promoter payout.

        Pure and lenient: missing contract fields mean the rule does not
        apply, and nothing is validated here.

        Args:
            contract: The promoter's contract terms
            checkins_count: Actual (or manually overridden) check-ins

        Returns:
            PayoutBreakdown with calculated and final payout
        """
        # Every step only adds and multiplies, so an unbounded context keeps results exact
        with localcontext() as dec:
            dec.prec = MAX_PREC
            dec.Emax = MAX_EMAX
            dec.Emin = MIN_EMIN

            # Step 1: Build initial context
            ctx = PayoutContext(contract=contract, checkins_count=checkins_count)

            # Step 2: Fixed fee + per-head
            ctx.base = self.base_calculator.calculate(ctx)

            # Step 3: Minimum-guest shortfall
            ctx.shortfall = self.shortfall_calculator.apply(ctx)

            # Step 4: Bonus
            ctx.bonus = self.bonus_calculator.calculate(ctx)

            # Step 5: Totals
            return self.payout_calculator.calculate(ctx)

    def process_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate and calculate a payout from raw dictionary input.

        Convenience method for API usage. Expects
        {"contract": {...}, "checkins_count": n, "currency": "USD"}.
        """
        contract = PromoterContract.from_dict(data.get("contract") or {})
        checkins_count = data.get("checkins_count")
        self.validator.validate(contract, checkins_count)

        breakdown = self.calculate(contract, checkins_count)
        return self.output_builder.build(breakdown, currency=data.get("currency") or "USD")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

_default_processor = PayoutProcessor()


def calculate_promoter_payout(contract: PromoterContract, checkins_count: int) -> PayoutBreakdown:
    """Calculate a promoter payout with a shared stateless processor."""
    return _default_processor.calculate(contract, checkins_count)


def process_payout_from_dict(input_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Process a payout from Python dict and return Python dict.
    """
    processor = PayoutProcessor()
    return processor.process_from_dict(input_data)


def process_payout_from_json(json_input: str) -> str:
    """
    Process a payout from JSON string input and return JSON string output.
    """
    import json

    try:
        input_data = json.loads(json_input)
        processor = PayoutProcessor()
        result = processor.process_from_dict(input_data)
        return json.dumps(result, indent=2)

    except ValueError as e:
        error_response = {"error": str(e), "status": "validation_failed"}
        return json.dumps(error_response, indent=2)

    except Exception as e:
        error_response = {"error": str(e), "status": "failed"}
        return json.dumps(error_response, indent=2)
