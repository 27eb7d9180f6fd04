"""
Calculators Package

Provides all calculation components for promoter payouts.
"""

from .base import BaseCalculator
from .bonus import BonusCalculator
from .payout import PayoutCalculator
from .shortfall import ShortfallCalculator

__all__ = [
    "BaseCalculator",
    "ShortfallCalculator",
    "BonusCalculator",
    "PayoutCalculator",
]
