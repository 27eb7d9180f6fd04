"""
PROMOTER PAYOUT ENGINE
Commission calculation, closeout and earnings for event promoters
"""

from .closeout import CloseoutService
from .earnings import EarningsAggregator, estimate_payout
from .models import PayoutBreakdown, PromoterContract
from .processor import PayoutProcessor, calculate_promoter_payout

__all__ = [
    'PayoutProcessor',
    'PromoterContract',
    'PayoutBreakdown',
    'calculate_promoter_payout',
    'CloseoutService',
    'EarningsAggregator',
    'estimate_payout',
]
