"""
Promoter Earnings

Live estimates for open events and ledger figures for closed ones,
summarized per payment state and per currency.
"""

import logging
from dataclasses import replace
from decimal import Decimal

from .models import EarningsSummary, EarningsTotals, EventEarnings, PromoterAssignment, PromoterContract
from .output import to_money
from .processor import PayoutProcessor

logger = logging.getLogger(__name__)

CONFIRMED_STATUSES = ("paid", "confirmed")


def estimate_payout(
    contract: PromoterContract, checkins_count: int, processor: PayoutProcessor | None = None
) -> Decimal:
    """Estimated earnings: the calculated payout, ignoring any manual adjustment."""
    processor = processor or PayoutProcessor()
    unadjusted = replace(contract, manual_adjustment_amount=None)
    return processor.calculate(unadjusted, checkins_count).calculated_payout


class EarningsAggregator:
    """Builds a promoter's earnings across every event they work."""

    def __init__(self, processor: PayoutProcessor | None = None, default_currency: str = "USD"):
        self.processor = processor or PayoutProcessor()
        self.default_currency = default_currency

    def summarize(self, assignments: list[PromoterAssignment]) -> EarningsSummary:
        """
        Summarize earnings.

        - Closed out (payout line exists): ledger amount, confirmed once paid
        - Still open: estimate from live check-ins
        - Closed without a payout line: skipped
        """
        summary = EarningsSummary()

        for assignment in assignments:
            earnings = self._event_earnings(assignment)
            if earnings is None:
                continue

            summary.events.append(earnings)
            totals = summary.by_currency.setdefault(earnings.currency, EarningsTotals())
            for bucket in (summary.totals, totals):
                if earnings.payment_status == "estimated":
                    bucket.estimated += earnings.commission_amount
                elif earnings.payment_status in CONFIRMED_STATUSES:
                    bucket.confirmed += earnings.commission_amount
                else:
                    bucket.pending += earnings.commission_amount

        # Most recent first; undated events last
        summary.events.sort(key=lambda e: e.event_date or "", reverse=True)
        return summary

    def summarize_from_dict(self, data: dict) -> EarningsSummary:
        assignments = [PromoterAssignment.from_dict(a) for a in data.get("assignments", [])]
        return self.summarize(assignments)

    def _event_earnings(self, assignment: PromoterAssignment) -> EventEarnings | None:
        event = assignment.event
        currency = assignment.promoter.currency or event.currency or self.default_currency
        line = assignment.payout_line

        if line is not None:
            return EventEarnings(
                event_id=event.event_id,
                event_name=event.name,
                event_date=event.start_time,
                event_status="closed",
                currency=currency,
                checkins_count=line.checkins_count,
                registrations_count=assignment.registrations_count,
                commission_amount=line.commission_amount,
                payment_status=line.payment_status,
                paid_at=line.paid_at,
                payout_line_id=line.payout_line_id,
            )

        if event.is_closed:
            logger.warning(f"Event {event.event_id} is closed but has no payout line for promoter")
            return None

        amount = estimate_payout(assignment.promoter.contract, assignment.checkins_count, self.processor)
        return EventEarnings(
            event_id=event.event_id,
            event_name=event.name,
            event_date=event.start_time,
            event_status="active",
            currency=currency,
            checkins_count=assignment.checkins_count,
            registrations_count=assignment.registrations_count,
            commission_amount=amount,
            payment_status="estimated",
        )


def estimate_from_dict(data: dict, processor: PayoutProcessor | None = None) -> dict:
    """
    Estimate earnings from raw dictionary input.

    Convenience method for API usage. Expects {"contract": {...}, "checkins_count": n}.
    """
    processor = processor or PayoutProcessor()
    contract = PromoterContract.from_dict(data.get("contract") or {})
    checkins_count = data.get("checkins_count")
    processor.validator.validate_checkins(checkins_count)

    return {
        "checkins_count": checkins_count,
        "estimated_payout": to_money(estimate_payout(contract, checkins_count, processor)),
        "payment_status": "estimated",
    }
