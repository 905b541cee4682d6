"""
Core math modules для predmarket

Математические примитивы фиксированной точности и нормализация вероятностей.
"""

# Numerical Safeguards
from predmarket.core.math.numerical_safeguards import (
    # Decimal context
    DECIMAL_CONTEXT,
    DECIMAL_MAX,
    DECIMAL_PRECISION,
    decimal_context,
    # Epsilon constants
    EPS_DECIMAL_COMPARE,
    EPS_PROBABILITY,
    # Conversion
    is_representable,
    to_decimal,
    # Checked arithmetic
    checked_add,
    checked_divide,
    checked_multiply,
    checked_sum,
    decimal_exp,
    decimal_ln,
    # Comparisons / utilities
    clamp,
    is_close,
    # Validation
    validate_in_range,
)

# Normalization
from predmarket.core.math.normalization import (
    MIN_LIQUIDITY_SEED,
    MIN_OUTCOMES,
    SCALE_TARGET,
    bounded_exp_normalize,
    calculate_market_probabilities,
    compute_outcome_totals,
    validate_liquidity,
    validate_num_outcomes,
    validate_outcome_index,
)

# Odds
from predmarket.core.math.odds import (
    DEFAULT_BID_FEE,
    DEFAULT_PAYOUT_FEE,
    MAX_IMPLIED_PROBABILITY,
    MAX_ODDS,
    MIN_ODDS,
    FeeConfig,
    calculate_potential_profit,
    odds_to_probability,
    probability_to_odds,
)

# Statistics
from predmarket.core.math.statistics import (
    MAX_LIQUIDITY_RISK,
    concentration,
    liquidity_risk,
    mean,
    population_variance,
    shannon_entropy,
)

__all__ = [
    # Numerical Safeguards: Decimal context
    "DECIMAL_CONTEXT",
    "DECIMAL_MAX",
    "DECIMAL_PRECISION",
    "decimal_context",
    # Numerical Safeguards: Epsilon constants
    "EPS_DECIMAL_COMPARE",
    "EPS_PROBABILITY",
    # Numerical Safeguards: Conversion
    "is_representable",
    "to_decimal",
    # Numerical Safeguards: Checked arithmetic
    "checked_add",
    "checked_divide",
    "checked_multiply",
    "checked_sum",
    "decimal_exp",
    "decimal_ln",
    # Numerical Safeguards: Utilities
    "clamp",
    "is_close",
    "validate_in_range",
    # Normalization
    "MIN_LIQUIDITY_SEED",
    "MIN_OUTCOMES",
    "SCALE_TARGET",
    "bounded_exp_normalize",
    "calculate_market_probabilities",
    "compute_outcome_totals",
    "validate_liquidity",
    "validate_num_outcomes",
    "validate_outcome_index",
    # Odds
    "DEFAULT_BID_FEE",
    "DEFAULT_PAYOUT_FEE",
    "MAX_IMPLIED_PROBABILITY",
    "MAX_ODDS",
    "MIN_ODDS",
    "FeeConfig",
    "calculate_potential_profit",
    "odds_to_probability",
    "probability_to_odds",
    # Statistics
    "MAX_LIQUIDITY_RISK",
    "concentration",
    "liquidity_risk",
    "mean",
    "population_variance",
    "shannon_entropy",
]
