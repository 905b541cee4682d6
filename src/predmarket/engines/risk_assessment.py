"""RiskAssessmentEngine — метрики риска рынка

Вычисляет по вероятностям и сырому списку ставок:
- entropy = -Σ p_i ln(p_i), в [0, ln(n)], максимум на равномерном распределении
- concentration = max(p_i), в [1/n, 1]
- expected_volatility = population variance вероятностей
- liquidity_risk = max_bet / total_volume, либо 1 при нулевом объёме
"""

from collections.abc import Sequence

import structlog

from predmarket.core.domain.market import Bet, MarketConfig
from predmarket.core.domain.results import MarketRiskProfile
from predmarket.core.math.normalization import calculate_market_probabilities
from predmarket.core.math.statistics import (
    concentration,
    liquidity_risk,
    population_variance,
    shannon_entropy,
)

log = structlog.get_logger()


class RiskAssessmentEngine:
    """Движок оценки риска рынка."""

    def __init__(self, config: MarketConfig):
        self.config = config

    def assess_risk(self, bets: Sequence[Bet]) -> MarketRiskProfile:
        """Профиль риска для текущего состояния рынка.

        Raises:
            InsufficientData, InvalidOutcomeIndex, InvalidLiquidity, CalculationError
        """
        probabilities = calculate_market_probabilities(self.config, bets)

        profile = MarketRiskProfile(
            probabilities=probabilities,
            entropy=shannon_entropy(probabilities),
            concentration=concentration(probabilities),
            expected_volatility=population_variance(probabilities),
            liquidity_risk=liquidity_risk([bet.amount for bet in bets]),
        )

        log.debug(
            "risk_assessment.assessed",
            num_outcomes=self.config.num_outcomes,
            num_bets=len(bets),
            concentration=str(profile.concentration),
            liquidity_risk=str(profile.liquidity_risk),
        )
        return profile
