"""Engines — вычислительные движки рынка.

- ProbabilityEngine: вероятности, цена исхода, стоимость долей
- MarketMakerEngine: котировки bid/ask, спред, рекомендуемая ликвидность
- RiskAssessmentEngine: энтропия, концентрация, волатильность, риск ликвидности

Все движки используют общую calculate_market_probabilities.
"""

from .market_maker import MarketMakerEngine, QuoteConfig
from .probability_engine import ProbabilityEngine
from .risk_assessment import RiskAssessmentEngine

__all__ = [
    "ProbabilityEngine",
    "MarketMakerEngine",
    "QuoteConfig",
    "RiskAssessmentEngine",
]
