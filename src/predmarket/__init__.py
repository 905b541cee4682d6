"""
predmarket — pricing core for multi-outcome prediction markets.

Converts a market configuration and a list of bets into outcome probabilities,
market-maker quotes and market risk metrics using fixed-precision decimals.
"""

from predmarket.core.domain import (
    Bet,
    MarketConfig,
    MarketMakingStrategy,
    MarketRiskProfile,
    MarketType,
)
from predmarket.core.errors import (
    CalculationError,
    InsufficientData,
    InvalidLiquidity,
    InvalidOutcomeIndex,
    MarketError,
)
from predmarket.core.math.odds import FeeConfig
from predmarket.engines import (
    MarketMakerEngine,
    ProbabilityEngine,
    QuoteConfig,
    RiskAssessmentEngine,
)
from predmarket.market_engine import PredictionMarketEngine

__all__ = [
    # Facade
    "PredictionMarketEngine",
    # Engines
    "ProbabilityEngine",
    "MarketMakerEngine",
    "QuoteConfig",
    "RiskAssessmentEngine",
    "FeeConfig",
    # Domain
    "Bet",
    "MarketConfig",
    "MarketType",
    "MarketMakingStrategy",
    "MarketRiskProfile",
    # Errors
    "MarketError",
    "InvalidOutcomeIndex",
    "InvalidLiquidity",
    "CalculationError",
    "InsufficientData",
]
