"""MarketMakerEngine — котировки маркет-мейкера

Формулы:
    bid_prices[i] = p_i * bid_multiplier       (default 0.95)
    ask_prices[i] = p_i * ask_multiplier       (default 1.05)
    spread = mean_i(ask_prices[i] - bid_prices[i])
    recommended_liquidity = liquidity_param * (1 + entropy(p))

Инварианты:
- bid_prices[i] <= p_i <= ask_prices[i]
- spread >= 0
- recommended_liquidity > 0

Большая энтропия (неопределённость) → большая рекомендуемая ликвидность.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Final

import structlog

from predmarket.core.domain.market import Bet, MarketConfig
from predmarket.core.domain.results import MarketMakingStrategy
from predmarket.core.math.normalization import calculate_market_probabilities
from predmarket.core.math.numerical_safeguards import (
    checked_add,
    checked_multiply,
    decimal_context,
    validate_in_range,
)
from predmarket.core.math.statistics import mean, shannon_entropy

log = structlog.get_logger()


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_BID_MULTIPLIER: Final[Decimal] = Decimal("0.95")
DEFAULT_ASK_MULTIPLIER: Final[Decimal] = Decimal("1.05")


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class QuoteConfig:
    """Конфигурация котирования.

    bid_multiplier в [0, 1], ask_multiplier >= 1: иначе котировки не охватят
    вероятность исхода.
    """

    bid_multiplier: Decimal = DEFAULT_BID_MULTIPLIER
    ask_multiplier: Decimal = DEFAULT_ASK_MULTIPLIER


# =============================================================================
# ENGINE
# =============================================================================


class MarketMakerEngine:
    """Движок стратегии маркет-мейкера."""

    def __init__(self, config: MarketConfig, quote_config: QuoteConfig | None = None):
        """
        Args:
            config: конфигурация рынка
            quote_config: конфигурация котирования (опционально, используется default)

        Raises:
            ValueError: если множители не охватывают вероятность
        """
        self.config = config
        self.quote_config = quote_config or QuoteConfig()

        validate_in_range(
            self.quote_config.bid_multiplier,
            "bid_multiplier",
            min_value=Decimal(0),
            max_value=Decimal(1),
        )
        validate_in_range(
            self.quote_config.ask_multiplier, "ask_multiplier", min_value=Decimal(1)
        )

    def simulate_strategy(self, bets: Sequence[Bet]) -> MarketMakingStrategy:
        """Расчёт котировок для текущего состояния рынка.

        Raises:
            InsufficientData, InvalidOutcomeIndex, InvalidLiquidity, CalculationError
        """
        probabilities = calculate_market_probabilities(self.config, bets)

        bid_prices = [
            checked_multiply(p, self.quote_config.bid_multiplier) for p in probabilities
        ]
        ask_prices = [
            checked_multiply(p, self.quote_config.ask_multiplier) for p in probabilities
        ]

        with decimal_context():
            spreads = [ask - bid for bid, ask in zip(bid_prices, ask_prices)]
        spread = mean(spreads)

        entropy = shannon_entropy(probabilities)
        recommended_liquidity = checked_multiply(
            self.config.liquidity_param, checked_add(Decimal(1), entropy)
        )

        log.debug(
            "market_maker.strategy_simulated",
            num_outcomes=self.config.num_outcomes,
            num_bets=len(bets),
            spread=str(spread),
            entropy=str(entropy),
        )

        return MarketMakingStrategy(
            bid_prices=bid_prices,
            ask_prices=ask_prices,
            spread=spread,
            recommended_liquidity=recommended_liquidity,
        )
