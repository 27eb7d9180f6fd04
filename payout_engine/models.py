"""
Domain Models for the Promoter Payout Engine

These dataclasses provide type-safe representations of promoter contracts,
intermediate calculation steps and payout results.
All monetary values use Decimal for precision.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation


def _to_decimal(value, name: str = "value") -> Decimal | None:
    """Convert a raw JSON number to Decimal, keeping None as None."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number, got: {value!r}")
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"{name} must be a number, got: {value!r}") from None
    if not number.is_finite():
        raise ValueError(f"{name} must be a finite number, got: {value!r}")
    return number


def _to_int(value, name: str = "value") -> int | None:
    """Convert a raw JSON number to int. Fractional values are rejected, not truncated."""
    number = _to_decimal(value, name)
    if number is None:
        return None
    if number != number.to_integral_value():
        raise ValueError(f"{name} must be a whole number, got: {value!r}")
    return int(number)


# =============================================================================
# INPUT MODELS
# =============================================================================


@dataclass
class BonusTier:
    """A single threshold/amount step in a tiered bonus structure."""

    threshold: int
    amount: Decimal
    label: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "BonusTier":
        return cls(
            threshold=_to_int(data["threshold"], "bonus tier threshold"),
            amount=_to_decimal(data["amount"], "bonus tier amount"),
            label=data.get("label"),
        )


@dataclass
class PromoterContract:
    """Commission terms of one promoter for one event.

    Every field is optional. None means "this rule does not apply",
    which is not the same as zero.
    """

    per_head_rate: Decimal | None = None
    per_head_min: int | None = None
    per_head_max: int | None = None
    fixed_fee: Decimal | None = None
    minimum_guests: int | None = None
    below_minimum_percent: Decimal | None = None  # 50 = half the base
    bonus_threshold: int | None = None  # Legacy single bonus
    bonus_amount: Decimal | None = None  # Legacy single bonus
    bonus_tiers: list[BonusTier] | None = None
    manual_adjustment_amount: Decimal | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "PromoterContract":
        tiers = data.get("bonus_tiers")
        return cls(
            per_head_rate=_to_decimal(data.get("per_head_rate"), "per_head_rate"),
            per_head_min=_to_int(data.get("per_head_min"), "per_head_min"),
            per_head_max=_to_int(data.get("per_head_max"), "per_head_max"),
            fixed_fee=_to_decimal(data.get("fixed_fee"), "fixed_fee"),
            minimum_guests=_to_int(data.get("minimum_guests"), "minimum_guests"),
            below_minimum_percent=_to_decimal(data.get("below_minimum_percent"), "below_minimum_percent"),
            bonus_threshold=_to_int(data.get("bonus_threshold"), "bonus_threshold"),
            bonus_amount=_to_decimal(data.get("bonus_amount"), "bonus_amount"),
            bonus_tiers=[BonusTier.from_dict(t) for t in tiers] if tiers is not None else None,
            manual_adjustment_amount=_to_decimal(data.get("manual_adjustment_amount"), "manual_adjustment_amount"),
        )


@dataclass
class EventPromoter:
    """A promoter assignment on an event (one `event_promoters` row)."""

    promoter_id: str
    contract: PromoterContract
    promoter_name: str | None = None
    manual_checkins_override: int | None = None
    manual_adjustment_reason: str | None = None
    currency: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "EventPromoter":
        return cls(
            promoter_id=data["promoter_id"],
            contract=PromoterContract.from_dict(data),
            promoter_name=data.get("promoter_name"),
            manual_checkins_override=_to_int(data.get("manual_checkins_override"), "manual_checkins_override"),
            manual_adjustment_reason=data.get("manual_adjustment_reason"),
            currency=data.get("currency"),
        )


@dataclass
class Event:
    """The event being closed out or estimated."""

    event_id: str
    name: str
    currency: str | None = None
    status: str = "active"  # 'active' or 'closed'
    start_time: str | None = None

    @property
    def is_closed(self) -> bool:
        return self.status == "closed"

    @classmethod
    def from_dict(cls, data: dict) -> "Event":
        return cls(
            event_id=data["id"],
            name=data.get("name") or "Unknown Event",
            currency=data.get("currency"),
            status=data.get("status") or "active",
            start_time=data.get("start_time"),
        )


@dataclass
class Checkin:
    """A confirmed physical attendance tied to a registration."""

    registration_id: str
    referral_promoter_id: str | None = None
    undone: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "Checkin":
        return cls(
            registration_id=data["registration_id"],
            referral_promoter_id=data.get("referral_promoter_id"),
            undone=data.get("undo_at") is not None,
        )


@dataclass
class TableCommission:
    """Promoter commission earned on a table booking."""

    promoter_id: str | None
    amount: Decimal

    @classmethod
    def from_dict(cls, data: dict) -> "TableCommission":
        return cls(
            promoter_id=data.get("promoter_id"),
            amount=_to_decimal(data.get("promoter_commission_amount") or 0, "promoter_commission_amount"),
        )


# =============================================================================
# STEP / RESULT MODELS
# =============================================================================


@dataclass
class BaseCalculation:
    """Results of the fixed fee + per-head step."""

    per_head_counted: int = 0
    per_head_amount: Decimal = Decimal("0")
    fixed_fee_amount: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        return self.per_head_amount + self.fixed_fee_amount


@dataclass
class ShortfallPenalty:
    """Results of the minimum-guest shortfall step."""

    applied: bool = False
    percent_applied: Decimal | None = None
    base_before: Decimal = Decimal("0")
    base_after: Decimal = Decimal("0")


@dataclass
class BonusDetail:
    """One awarded bonus, for display in breakdowns."""

    type: str  # 'tier' or 'legacy'
    threshold: int
    amount: Decimal
    label: str | None = None


@dataclass
class BonusCalculation:
    """Results of the bonus step."""

    amount: Decimal = Decimal("0")
    details: list[BonusDetail] = field(default_factory=list)


@dataclass
class PayoutContext:
    """
    Holds all intermediate state during a payout calculation.
    This is the "bag" that flows through the pipeline.
    """

    # Input (immutable during processing)
    contract: PromoterContract
    checkins_count: int

    # Step results (populated as we go)
    base: BaseCalculation = field(default_factory=BaseCalculation)
    shortfall: ShortfallPenalty = field(default_factory=ShortfallPenalty)
    bonus: BonusCalculation = field(default_factory=BonusCalculation)


@dataclass
class PayoutBreakdown:
    """Final output of one payout calculation.

    Values are unrounded; rounding for display happens in the output layer.
    """

    checkins_count: int
    calculated_payout: Decimal
    final_payout: Decimal
    manual_adjustment: Decimal = Decimal("0")
    per_head_rate: Decimal | None = None
    per_head_counted: int = 0
    per_head_amount: Decimal = Decimal("0")
    fixed_fee_full: Decimal | None = None
    fixed_fee_amount: Decimal = Decimal("0")
    base_amount: Decimal = Decimal("0")
    below_minimum_percent_applied: Decimal | None = None
    bonus_amount: Decimal = Decimal("0")
    bonus_details: list[BonusDetail] = field(default_factory=list)


# =============================================================================
# CLOSEOUT / LEDGER MODELS
# =============================================================================


@dataclass
class CloseoutLine:
    """One promoter's row in the closeout report."""

    promoter_id: str
    promoter_name: str | None
    checkins_count: int
    checkins_overridden: bool
    breakdown: PayoutBreakdown
    breakdown_text: str
    manual_adjustment_reason: str | None = None


@dataclass
class CloseoutReport:
    """End-of-event summary for all promoters."""

    event: Event
    currency: str
    lines: list[CloseoutLine] = field(default_factory=list)
    total_checkins: int = 0
    total_payout: Decimal = Decimal("0")


@dataclass
class PayoutLine:
    """Finalized, persisted amount owed to one promoter for one event."""

    promoter_id: str
    checkins_count: int
    calculated_payout: Decimal
    final_payout: Decimal
    commission_amount: Decimal
    table_commission_amount: Decimal = Decimal("0")
    tables_count: int = 0
    payment_status: str = "pending_payment"
    payout_line_id: str | None = None
    paid_at: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "PayoutLine":
        """Load a persisted `payout_lines` row.

        Persisted rows only keep the commission amount, so the calculated
        and final figures are restored from it.
        """
        amount = _to_decimal(data.get("commission_amount") or 0, "commission_amount")
        return cls(
            promoter_id=data.get("promoter_id", ""),
            checkins_count=_to_int(data.get("checkins_count") or 0, "checkins_count"),
            calculated_payout=amount,
            final_payout=amount,
            commission_amount=amount,
            table_commission_amount=_to_decimal(data.get("table_commission_amount") or 0, "table_commission_amount"),
            tables_count=_to_int(data.get("tables_count") or 0, "tables_count"),
            payment_status=data.get("payment_status") or "pending_payment",
            payout_line_id=data.get("id"),
            paid_at=data.get("payment_marked_at"),
        )


@dataclass
class PayoutRun:
    """The set of payout lines created when an event is closed out."""

    event_id: str
    generated_by: str | None
    lines: list[PayoutLine] = field(default_factory=list)

    @property
    def total_amount(self) -> Decimal:
        return sum((line.commission_amount for line in self.lines), Decimal("0"))


# =============================================================================
# EARNINGS MODELS
# =============================================================================


@dataclass
class PromoterAssignment:
    """An event the promoter works, with whatever the ledger knows about it."""

    event: Event
    promoter: EventPromoter
    checkins_count: int = 0
    registrations_count: int = 0
    payout_line: PayoutLine | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "PromoterAssignment":
        line = data.get("payout_line")
        # Contract fields may be nested under "contract" or sit on the row itself
        row = {**data, **(data.get("contract") or {})}
        return cls(
            event=Event.from_dict(data["event"]),
            promoter=EventPromoter.from_dict(row),
            checkins_count=_to_int(data.get("checkins_count") or 0, "checkins_count"),
            registrations_count=_to_int(data.get("registrations_count") or 0, "registrations_count"),
            payout_line=PayoutLine.from_dict(line) if line else None,
        )


@dataclass
class EventEarnings:
    """What one event is worth to the promoter, estimated or final."""

    event_id: str
    event_name: str
    event_date: str | None
    event_status: str  # 'active' or 'closed'
    currency: str
    checkins_count: int
    registrations_count: int
    commission_amount: Decimal
    payment_status: str  # 'estimated', 'pending_payment', 'paid', 'confirmed'
    paid_at: str | None = None
    payout_line_id: str | None = None


@dataclass
class EarningsTotals:
    confirmed: Decimal = Decimal("0")
    pending: Decimal = Decimal("0")
    estimated: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        return self.confirmed + self.pending + self.estimated


@dataclass
class EarningsSummary:
    """Promoter earnings across all events, overall and per currency."""

    events: list[EventEarnings] = field(default_factory=list)
    totals: EarningsTotals = field(default_factory=EarningsTotals)
    by_currency: dict[str, EarningsTotals] = field(default_factory=dict)
