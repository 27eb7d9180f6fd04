"""
Event Closeout

Turns an event's promoter contracts and check-ins into the closeout report
and, once finalized, the payout run that becomes the payout ledger.
"""

import logging
from collections import Counter
from decimal import Decimal

from .models import (
    Checkin,
    CloseoutLine,
    CloseoutReport,
    Event,
    EventPromoter,
    PayoutLine,
    PayoutRun,
    TableCommission,
)
from .output import format_payout_breakdown
from .processor import PayoutProcessor

logger = logging.getLogger(__name__)


def count_checkins_by_promoter(checkins: list[Checkin]) -> Counter:
    """Tally live check-ins per referring promoter. Undone check-ins don't count."""
    return Counter(
        c.referral_promoter_id for c in checkins if c.referral_promoter_id and not c.undone
    )


def aggregate_table_commissions(table_commissions: list[TableCommission]) -> dict[str, tuple[Decimal, int]]:
    """Sum table booking commissions per promoter as (amount, tables count)."""
    totals: dict[str, tuple[Decimal, int]] = {}
    for tc in table_commissions:
        if not tc.promoter_id:
            continue
        amount, count = totals.get(tc.promoter_id, (Decimal("0"), 0))
        totals[tc.promoter_id] = (amount + tc.amount, count + 1)
    return totals


class CloseoutService:
    """Builds closeout reports and payout runs for an event."""

    def __init__(self, processor: PayoutProcessor | None = None, default_currency: str = "USD"):
        self.processor = processor or PayoutProcessor()
        self.default_currency = default_currency

    def build_report(
        self,
        event: Event,
        event_promoters: list[EventPromoter],
        checkins: list[Checkin],
    ) -> CloseoutReport:
        """
        Calculate every promoter's payout for the closeout report.

        A staff-entered manual_checkins_override replaces the counted
        check-ins. The persisted manual adjustment is included.
        """
        currency = event.currency or self.default_currency
        tally = count_checkins_by_promoter(checkins)
        report = CloseoutReport(event=event, currency=currency)

        for ep in event_promoters:
            overridden = ep.manual_checkins_override is not None
            checkins_count = ep.manual_checkins_override if overridden else tally.get(ep.promoter_id, 0)

            breakdown = self.processor.calculate(ep.contract, checkins_count)
            report.lines.append(
                CloseoutLine(
                    promoter_id=ep.promoter_id,
                    promoter_name=ep.promoter_name,
                    checkins_count=checkins_count,
                    checkins_overridden=overridden,
                    breakdown=breakdown,
                    breakdown_text=format_payout_breakdown(breakdown, currency),
                    manual_adjustment_reason=ep.manual_adjustment_reason,
                )
            )
            report.total_checkins += checkins_count
            report.total_payout += breakdown.final_payout

        return report

    def finalize(
        self,
        event: Event,
        event_promoters: list[EventPromoter],
        checkins: list[Checkin],
        table_commissions: list[TableCommission] | None = None,
        generated_by: str | None = None,
    ) -> PayoutRun:
        """
        Finalize closeout: validate contracts and create the payout run.

        Events without promoters still get an (empty) run for the audit trail.
        Raises ValueError if the event is already closed or a contract is invalid.
        """
        if event.is_closed:
            raise ValueError(f"Event is already closed: {event.event_id}")

        for ep in event_promoters:
            try:
                self.processor.validator.validate_contract(ep.contract)
                if ep.manual_checkins_override is not None:
                    self.processor.validator.validate_checkins(ep.manual_checkins_override)
            except ValueError as e:
                raise ValueError(f"Invalid contract for promoter {ep.promoter_id}: {e}") from e

        report = self.build_report(event, event_promoters, checkins)
        tables = aggregate_table_commissions(table_commissions or [])

        run = PayoutRun(event_id=event.event_id, generated_by=generated_by)
        for line in report.lines:
            table_amount, tables_count = tables.get(line.promoter_id, (Decimal("0"), 0))
            run.lines.append(
                PayoutLine(
                    promoter_id=line.promoter_id,
                    checkins_count=line.checkins_count,
                    calculated_payout=line.breakdown.calculated_payout,
                    final_payout=line.breakdown.final_payout,
                    commission_amount=line.breakdown.final_payout + table_amount,
                    table_commission_amount=table_amount,
                    tables_count=tables_count,
                    payment_status="pending_payment",
                )
            )

        logger.info(
            f"Closeout finalized for event {event.event_id}: "
            f"{len(run.lines)} payout lines, total {run.total_amount}"
        )
        return run

    def report_from_dict(self, data: dict) -> CloseoutReport:
        event, promoters, checkins, _ = self._parse(data)
        return self.build_report(event, promoters, checkins)

    def finalize_from_dict(self, data: dict) -> PayoutRun:
        event, promoters, checkins, tables = self._parse(data)
        return self.finalize(event, promoters, checkins, tables, generated_by=data.get("generated_by"))

    @staticmethod
    def _parse(data: dict):
        event = Event.from_dict(data["event"])
        promoters = [EventPromoter.from_dict(ep) for ep in data.get("event_promoters", [])]
        checkins = [Checkin.from_dict(c) for c in data.get("checkins", [])]
        tables = [TableCommission.from_dict(tc) for tc in data.get("table_commissions", [])]
        return event, promoters, checkins, tables
