"""ProbabilityEngine — вероятности, цены и стоимость долей исходов

Вычисляет:
- probabilities: bounded-exponential нормализация полного списка ставок
- price(i) == probabilities[i] (обязательный инвариант, а не деталь реализации)
- cost(i, share_amount): стоимость покупки share_amount долей исхода i по
  средней цене до и после гипотетической ставки
- odds: десятичные коэффициенты исходов из probabilities

Состояния нет: каждый вызов пересчитывает всё из (config, bets).
"""

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import structlog

from predmarket.core.domain.market import Bet, MarketConfig
from predmarket.core.math.normalization import (
    calculate_market_probabilities,
    validate_num_outcomes,
    validate_outcome_index,
)
from predmarket.core.math.numerical_safeguards import checked_add, checked_divide
from predmarket.core.math.odds import probability_to_odds

log = structlog.get_logger()


class ProbabilityEngine:
    """Движок вероятностей исходов рынка."""

    def __init__(self, config: MarketConfig):
        self.config = config

    def calculate_probabilities(self, bets: Sequence[Bet]) -> list[Decimal]:
        """Вероятности исходов.

        Args:
            bets: полный упорядоченный список ставок рынка

        Returns:
            список Decimal длины num_outcomes, Σ == 1, каждый элемент в (0, 1)

        Raises:
            InsufficientData, InvalidOutcomeIndex, InvalidLiquidity, CalculationError
        """
        probabilities = calculate_market_probabilities(self.config, bets)

        log.debug(
            "probability_engine.calculated",
            num_outcomes=self.config.num_outcomes,
            num_bets=len(bets),
        )
        return probabilities

    def calculate_price(self, bets: Sequence[Bet], outcome_index: int) -> Decimal:
        """Цена исхода outcome_index.

        Raises:
            InsufficientData: если num_outcomes < 2 (проверяется до индекса)
            InvalidOutcomeIndex: если outcome_index вне [0, num_outcomes)
        """
        validate_num_outcomes(self.config.num_outcomes)
        validate_outcome_index(outcome_index, self.config.num_outcomes)

        probabilities = self.calculate_probabilities(bets)
        return probabilities[outcome_index]

    def calculate_cost(
        self,
        bets: Sequence[Bet],
        outcome_index: int,
        share_amount: Any,
    ) -> Decimal:
        """Стоимость покупки share_amount долей исхода.

        cost = share_amount / ((price_before + price_after) / 2), где price_after —
        цена после добавления гипотетической ставки Bet(outcome_index, share_amount).

        Args:
            bets: текущие ставки рынка
            outcome_index: индекс исхода
            share_amount: объём покупки (конвертируется как Bet.amount)

        Raises:
            InsufficientData: если num_outcomes < 2 (проверяется до индекса)
            InvalidOutcomeIndex: если outcome_index вне [0, num_outcomes)
            pydantic.ValidationError: если share_amount отрицателен
        """
        validate_num_outcomes(self.config.num_outcomes)
        validate_outcome_index(outcome_index, self.config.num_outcomes)

        hypothetical_bet = Bet(option_id=outcome_index, amount=share_amount)

        price_before = self.calculate_price(bets, outcome_index)
        price_after = self.calculate_price([*bets, hypothetical_bet], outcome_index)

        average_price = checked_divide(checked_add(price_before, price_after), Decimal(2))
        cost = checked_divide(hypothetical_bet.amount, average_price)

        log.debug(
            "probability_engine.cost_calculated",
            outcome_index=outcome_index,
            price_before=str(price_before),
            price_after=str(price_after),
        )
        return cost

    def calculate_odds(self, bets: Sequence[Bet]) -> list[Decimal]:
        """Десятичные коэффициенты исходов: probability_to_odds(probabilities[i]).

        Raises:
            InsufficientData, InvalidOutcomeIndex, InvalidLiquidity, CalculationError
        """
        odds = [probability_to_odds(p) for p in self.calculate_probabilities(bets)]

        log.debug("probability_engine.odds_calculated", odds=[str(o) for o in odds])
        return odds
