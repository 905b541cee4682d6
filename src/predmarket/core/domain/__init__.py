"""
Domain models and value objects.

Contains market inputs (MarketConfig, Bet) and engine outputs
(MarketMakingStrategy, MarketRiskProfile).
"""

from predmarket.core.domain.market import Bet, MarketConfig, MarketType
from predmarket.core.domain.results import MarketMakingStrategy, MarketRiskProfile

__all__ = [
    # Inputs
    "Bet",
    "MarketConfig",
    "MarketType",
    # Outputs
    "MarketMakingStrategy",
    "MarketRiskProfile",
]
