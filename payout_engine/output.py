"""
Output Builder

Constructs API responses and human-readable breakdowns from payout results.
Rounding happens here, never inside the calculators.
"""

from decimal import ROUND_HALF_UP, Decimal

from .models import CloseoutReport, EarningsSummary, EarningsTotals, PayoutBreakdown, PayoutRun

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "IDR": "Rp",
    "THB": "฿",
}


def to_money(value: Decimal) -> float:
    """Convert Decimal to float with 2 decimal places."""
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def format_currency(value, currency: str = "USD") -> str:
    """Format an amount for descriptions: whole amounts without cents."""
    amount = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    amount = abs(amount)
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), f"{currency.upper()} ")
    if amount == amount.to_integral_value():
        return f"{sign}{symbol}{amount:,.0f}"
    return f"{sign}{symbol}{amount:,.2f}"


def format_payout_breakdown(breakdown: PayoutBreakdown, currency: str = "USD") -> str:
    """
    Render a breakdown as a single line, e.g.
    "12 check-ins × $10 = $120 + Fixed fee: $100 + Bonus: $50 (10+ guests)"

    Below the guest minimum the base is shown scaled, e.g.
    "(3 check-ins × $10 = $30 + Fixed fee: $100) × 50% below minimum = $65"
    """

    def fmt(value) -> str:
        return format_currency(value, currency)

    parts = []

    if breakdown.per_head_amount > 0:
        parts.append(
            f"{breakdown.per_head_counted} check-ins × {fmt(breakdown.per_head_rate or 0)}"
            f" = {fmt(breakdown.per_head_amount)}"
        )

    if breakdown.fixed_fee_amount > 0:
        parts.append(f"Fixed fee: {fmt(breakdown.fixed_fee_amount)}")

    # The shortfall multiplies the whole base, so it wraps the base parts
    percent = breakdown.below_minimum_percent_applied
    if percent is not None and parts:
        base_text = " + ".join(parts)
        parts = [f"({base_text}) × {percent.normalize():f}% below minimum = {fmt(breakdown.base_amount)}"]

    for bonus in breakdown.bonus_details:
        label = f" - {bonus.label}" if bonus.label else ""
        parts.append(f"Bonus: {fmt(bonus.amount)} ({bonus.threshold}+ guests){label}")

    if breakdown.manual_adjustment != 0:
        sign = "+" if breakdown.manual_adjustment > 0 else ""
        parts.append(f"Manual adjustment: {sign}{fmt(breakdown.manual_adjustment)}")

    return " + ".join(parts)


class OutputBuilder:
    """Builds the final output responses."""

    def build(self, breakdown: PayoutBreakdown, currency: str = "USD") -> dict:
        """Construct the complete payout response."""
        return {
            "checkins_count": breakdown.checkins_count,
            "currency": currency,
            "calculations": self._build_calculations(breakdown, currency),
            "bonus_details": [
                {
                    "type": bonus.type,
                    "threshold": bonus.threshold,
                    "amount": to_money(bonus.amount),
                    "label": bonus.label,
                }
                for bonus in breakdown.bonus_details
            ],
            "summary": format_payout_breakdown(breakdown, currency),
        }

    def _build_calculations(self, breakdown: PayoutBreakdown, currency: str) -> dict:
        """Build calculations section with value and dynamic description for each field."""

        def fmt(value) -> str:
            return format_currency(value, currency)

        rate = breakdown.per_head_rate
        percent = breakdown.below_minimum_percent_applied
        raw_base = breakdown.per_head_amount + breakdown.fixed_fee_amount

        return {
            "per_head_amount": {
                "value": to_money(breakdown.per_head_amount),
                "description": (
                    f"{breakdown.per_head_counted} counted guests × {fmt(rate)} = {fmt(breakdown.per_head_amount)}"
                    if rate is not None
                    else "No per-head rate in contract"
                ),
            },
            "fixed_fee_amount": {
                "value": to_money(breakdown.fixed_fee_amount),
                "description": (
                    f"Flat fee of {fmt(breakdown.fixed_fee_full)} independent of attendance"
                    if breakdown.fixed_fee_full is not None
                    else "No fixed fee in contract"
                ),
            },
            "base_amount": {
                "value": to_money(breakdown.base_amount),
                "description": (
                    f"Below minimum guests: {fmt(raw_base)} × {percent.normalize():f}% = {fmt(breakdown.base_amount)}"
                    if percent is not None
                    else f"per_head ({fmt(breakdown.per_head_amount)}) + fixed_fee "
                    f"({fmt(breakdown.fixed_fee_amount)}) = {fmt(breakdown.base_amount)}"
                ),
            },
            "bonus_amount": {
                "value": to_money(breakdown.bonus_amount),
                "description": (
                    f"Bonus for reaching {breakdown.bonus_details[0].threshold} guests"
                    if breakdown.bonus_details
                    else "No bonus threshold reached"
                ),
            },
            "calculated_payout": {
                "value": to_money(breakdown.calculated_payout),
                "description": (
                    f"base ({fmt(breakdown.base_amount)}) + bonus ({fmt(breakdown.bonus_amount)}),"
                    f" never below zero = {fmt(breakdown.calculated_payout)}"
                ),
            },
            "manual_adjustment": {
                "value": to_money(breakdown.manual_adjustment),
                "description": (
                    f"Manual correction of {fmt(breakdown.manual_adjustment)}"
                    if breakdown.manual_adjustment != 0
                    else "No manual adjustment"
                ),
            },
            "final_payout": {
                "value": to_money(breakdown.final_payout),
                "description": (
                    f"calculated ({fmt(breakdown.calculated_payout)}) + adjustment "
                    f"({fmt(breakdown.manual_adjustment)}) = {fmt(breakdown.final_payout)}"
                ),
            },
        }

    def build_closeout_report(self, report: CloseoutReport) -> dict:
        """Build the closeout report response."""
        return {
            "event": {
                "id": report.event.event_id,
                "name": report.event.name,
                "status": report.event.status,
            },
            "currency": report.currency,
            "promoters": [
                {
                    "promoter_id": line.promoter_id,
                    "promoter_name": line.promoter_name,
                    "checkins_count": line.checkins_count,
                    "checkins_overridden": line.checkins_overridden,
                    "calculated_payout": to_money(line.breakdown.calculated_payout),
                    "manual_adjustment_amount": to_money(line.breakdown.manual_adjustment),
                    "manual_adjustment_reason": line.manual_adjustment_reason,
                    "final_payout": to_money(line.breakdown.final_payout),
                    "breakdown": line.breakdown_text,
                }
                for line in report.lines
            ],
            "summary": {
                "total_checkins": report.total_checkins,
                "total_payout": to_money(report.total_payout),
            },
        }

    def build_payout_run(self, run: PayoutRun) -> dict:
        """Build the payout run response."""
        return {
            "payout_run": {
                "event_id": run.event_id,
                "generated_by": run.generated_by,
                "total_amount": to_money(run.total_amount),
            },
            "payout_lines": [
                {
                    "promoter_id": line.promoter_id,
                    "checkins_count": line.checkins_count,
                    "calculated_payout": to_money(line.calculated_payout),
                    "final_payout": to_money(line.final_payout),
                    "table_commission_amount": to_money(line.table_commission_amount),
                    "tables_count": line.tables_count,
                    "commission_amount": to_money(line.commission_amount),
                    "payment_status": line.payment_status,
                }
                for line in run.lines
            ],
        }

    def build_earnings(self, summary: EarningsSummary) -> dict:
        """Build the promoter earnings response."""
        return {
            "events": [
                {
                    "event_id": e.event_id,
                    "event_name": e.event_name,
                    "event_date": e.event_date,
                    "event_status": e.event_status,
                    "currency": e.currency,
                    "checkins_count": e.checkins_count,
                    "registrations_count": e.registrations_count,
                    "commission_amount": to_money(e.commission_amount),
                    "payment_status": e.payment_status,
                    "paid_at": e.paid_at,
                    "payout_line_id": e.payout_line_id,
                }
                for e in summary.events
            ],
            "summary": {
                **self._totals(summary.totals),
                "by_currency": {
                    currency: self._totals(totals) for currency, totals in summary.by_currency.items()
                },
            },
        }

    @staticmethod
    def _totals(totals: EarningsTotals) -> dict:
        return {
            "confirmed": to_money(totals.confirmed),
            "pending": to_money(totals.pending),
            "estimated": to_money(totals.estimated),
            "total": to_money(totals.total),
        }
