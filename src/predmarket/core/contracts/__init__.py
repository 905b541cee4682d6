"""
Contract Validation Module

Модуль для валидации внешних JSON контрактов движка ценообразования.
"""

from .validators import (
    BetValidator,
    ContractValidator,
    MarketConfigValidator,
    MarketMakingStrategyValidator,
    MarketRiskProfileValidator,
    SchemaLoader,
    validate_bet,
    validate_market_config,
    validate_market_making_strategy,
    validate_market_risk_profile,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "BetValidator",
    "MarketConfigValidator",
    "MarketMakingStrategyValidator",
    "MarketRiskProfileValidator",
    # Functions
    "validate_bet",
    "validate_market_config",
    "validate_market_making_strategy",
    "validate_market_risk_profile",
]
