"""PredictionMarketEngine — фасад движка ценообразования

Держит одну immutable MarketConfig и по одному экземпляру каждого движка.
Каждая публичная операция — прямое делегирование движку плюс маршалинг
внешней границы:
- входные ставки: Bet или mapping {"option_id", "amount"} (проверяется
  контрактом bet.json)
- выходные значения: float / dict of float
- числовые аргументы odds-операций: float / int / Decimal / str

Ошибки движков (MarketError) логируются и пробрасываются без изменений.
Повторов нет: вычисление детерминировано.
"""

from collections.abc import Callable, Iterable, Mapping
from decimal import Decimal
from typing import Any, TypeVar, Union

import structlog

from predmarket.core.contracts import validate_bet, validate_market_config
from predmarket.core.domain.market import Bet, MarketConfig, MarketType
from predmarket.core.errors import MarketError
from predmarket.core.math.numerical_safeguards import to_decimal
from predmarket.core.math.odds import (
    FeeConfig,
    calculate_potential_profit,
    odds_to_probability,
    probability_to_odds,
)
from predmarket.engines.market_maker import MarketMakerEngine, QuoteConfig
from predmarket.engines.probability_engine import ProbabilityEngine
from predmarket.engines.risk_assessment import RiskAssessmentEngine

log = structlog.get_logger()

BetInput = Union[Bet, Mapping[str, Any]]

T = TypeVar("T")


# =============================================================================
# BOUNDARY MARSHALLING
# =============================================================================


def parse_bets(bets: Iterable[BetInput]) -> list[Bet]:
    """Приведение внешних ставок к списку Bet.

    Raises:
        jsonschema.ValidationError: mapping не соответствует bet.json
        TypeError: элемент не Bet и не mapping
    """
    parsed: list[Bet] = []

    for bet in bets:
        if isinstance(bet, Bet):
            parsed.append(bet)
        elif isinstance(bet, Mapping):
            payload = dict(bet)
            validate_bet(payload)
            parsed.append(Bet.model_validate(payload))
        else:
            raise TypeError(f"bet must be Bet or mapping, got {type(bet).__name__}")

    return parsed


def parse_number(value: Any, name: str) -> Decimal:
    """Числовой аргумент → Decimal.

    Raises:
        ValueError: value не представимо в Decimal фиксированной точности
    """
    number = to_decimal(value)
    if number is None:
        raise ValueError(f"{name} must be a finite representable number, got {value!r}")
    return number


# =============================================================================
# FACADE
# =============================================================================


class PredictionMarketEngine:
    """Фасад: вероятности, цена, стоимость долей, коэффициенты, маркет-мейкинг, риск.

    Example:
        >>> engine = PredictionMarketEngine.create(10.0, 2, MarketType.BINARY)
        >>> probabilities = engine.calculate_probabilities(
        ...     [{"option_id": 0, "amount": 50.0}, {"option_id": 1, "amount": 30.0}]
        ... )
        >>> probabilities[0] > probabilities[1]
        True
    """

    def __init__(
        self,
        config: MarketConfig,
        quote_config: QuoteConfig | None = None,
        fee_config: FeeConfig | None = None,
    ):
        """
        Args:
            config: конфигурация рынка (общая для всех движков)
            quote_config: конфигурация котирования маркет-мейкера
            fee_config: комиссии для calculate_potential_profit
        """
        self.config = config
        self.fee_config = fee_config or FeeConfig()
        self.probability_engine = ProbabilityEngine(config)
        self.market_maker = MarketMakerEngine(config, quote_config)
        self.risk_assessment = RiskAssessmentEngine(config)

    @classmethod
    def create(
        cls,
        liquidity_param: float | Decimal,
        num_outcomes: int,
        market_type: MarketType = MarketType.CATEGORICAL,
        quote_config: QuoteConfig | None = None,
        fee_config: FeeConfig | None = None,
    ) -> "PredictionMarketEngine":
        """Создание из отдельных параметров.

        Невалидные liquidity_param / num_outcomes не отклоняются здесь:
        InvalidLiquidity / InsufficientData возникают при первом вычислении.
        """
        config = MarketConfig(
            liquidity_param=liquidity_param,
            num_outcomes=num_outcomes,
            market_type=market_type,
        )
        return cls(config, quote_config, fee_config)

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        quote_config: QuoteConfig | None = None,
        fee_config: FeeConfig | None = None,
    ) -> "PredictionMarketEngine":
        """Создание из JSON payload конфигурации.

        Raises:
            jsonschema.ValidationError: payload не соответствует market_config.json
        """
        data = dict(payload)
        validate_market_config(data)
        return cls(MarketConfig.model_validate(data), quote_config, fee_config)

    # -------------------------------------------------------------------------
    # OPERATIONS
    # -------------------------------------------------------------------------

    def calculate_probabilities(self, bets: Iterable[BetInput]) -> list[float]:
        parsed = parse_bets(bets)
        probabilities = self._delegate(
            "calculate_probabilities",
            lambda: self.probability_engine.calculate_probabilities(parsed),
        )
        return [float(p) for p in probabilities]

    def calculate_price(self, bets: Iterable[BetInput], outcome_index: int) -> float:
        parsed = parse_bets(bets)
        price = self._delegate(
            "calculate_price",
            lambda: self.probability_engine.calculate_price(parsed, outcome_index),
        )
        return float(price)

    def calculate_cost(
        self,
        bets: Iterable[BetInput],
        outcome_index: int,
        share_amount: float | Decimal,
    ) -> float:
        parsed = parse_bets(bets)
        cost = self._delegate(
            "calculate_cost",
            lambda: self.probability_engine.calculate_cost(parsed, outcome_index, share_amount),
        )
        return float(cost)

    def simulate_market_making(self, bets: Iterable[BetInput]) -> dict[str, Any]:
        parsed = parse_bets(bets)
        strategy = self._delegate(
            "simulate_market_making",
            lambda: self.market_maker.simulate_strategy(parsed),
        )
        return strategy.to_external()

    def assess_market_risk(self, bets: Iterable[BetInput]) -> dict[str, Any]:
        parsed = parse_bets(bets)
        profile = self._delegate(
            "assess_market_risk",
            lambda: self.risk_assessment.assess_risk(parsed),
        )
        return profile.to_external()

    def calculate_odds(self, bets: Iterable[BetInput]) -> list[float]:
        parsed = parse_bets(bets)
        odds = self._delegate(
            "calculate_odds",
            lambda: self.probability_engine.calculate_odds(parsed),
        )
        return [float(o) for o in odds]

    # -------------------------------------------------------------------------
    # ODDS CONVERSION
    # -------------------------------------------------------------------------

    def probability_to_odds(self, probability: Any) -> float:
        value = parse_number(probability, "probability")
        return float(self._delegate("probability_to_odds", lambda: probability_to_odds(value)))

    def odds_to_probability(self, odds: Any) -> float:
        value = parse_number(odds, "odds")
        return float(self._delegate("odds_to_probability", lambda: odds_to_probability(value)))

    def calculate_potential_profit(self, amount: Any, odds: Any) -> dict[str, float]:
        """Выигрыш по ставке с комиссиями self.fee_config.

        Returns:
            dict gross / fees / net / bid_fee / payout_fee

        Raises:
            ValueError: amount или odds не представимы в Decimal
            CalculationError: при переполнении
        """
        amount_value = parse_number(amount, "amount")
        odds_value = parse_number(odds, "odds")
        profit = self._delegate(
            "calculate_potential_profit",
            lambda: calculate_potential_profit(amount_value, odds_value, self.fee_config),
        )
        return {key: float(value) for key, value in profit.items()}

    def _delegate(self, operation: str, call: Callable[[], T]) -> T:
        try:
            return call()
        except MarketError as e:
            log.warning(
                "market_engine.operation_failed",
                operation=operation,
                error_kind=type(e).__name__,
                error=str(e),
                num_outcomes=self.config.num_outcomes,
            )
            raise
