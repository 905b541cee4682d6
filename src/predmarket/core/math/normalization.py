"""
Normalization — Bounded-Exponential Probability Normalization

Единственная реализация перевода ставок в вероятности исходов. Все три движка
(probability, market maker, risk assessment) вызывают calculate_market_probabilities,
поэтому формулы не могут разойтись между движками.

Алгоритм:
    outcome_totals[i] = liquidity_param / num_outcomes + Σ amount(bet | bet.option_id == i)
    scale_factor = max(outcome_totals) / SCALE_TARGET
    exp_values[i] = exp(outcome_totals[i] / scale_factor)
    probabilities[i] = exp_values[i] / Σ exp_values

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. len(probabilities) == num_outcomes
2. Σ probabilities == 1 (в пределах EPS_PROBABILITY)
3. 0 < probabilities[i] < 1 для любого i (liquidity seed > 0 для каждого исхода)
4. Показатель экспоненты доминирующего исхода == SCALE_TARGET, независимо от
   абсолютного размера ставок, поэтому exp не переполняется
"""

from collections.abc import Sequence
from decimal import Decimal
from typing import TYPE_CHECKING, Final

from predmarket.core.errors import InsufficientData, InvalidLiquidity, InvalidOutcomeIndex
from predmarket.core.math.numerical_safeguards import (
    DECIMAL_MAX,
    DECIMAL_PRECISION,
    checked_add,
    checked_divide,
    checked_sum,
    decimal_context,
    decimal_exp,
)

if TYPE_CHECKING:
    from predmarket.core.domain.market import Bet, MarketConfig

# =============================================================================
# CONSTANTS
# =============================================================================

# Показатель экспоненты для максимального outcome_total
SCALE_TARGET: Final[Decimal] = Decimal(10)

# Минимальное число исходов рынка
MIN_OUTCOMES: Final[int] = 2

# Минимальный liquidity seed (liquidity_param / num_outcomes): наименьшее
# нормальное значение контекста, ниже начинается потеря точности и underflow в 0
MIN_LIQUIDITY_SEED: Final[Decimal] = Decimal(f"1e-{DECIMAL_PRECISION}")


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_num_outcomes(num_outcomes: int) -> None:
    """
    Raises:
        InsufficientData: если num_outcomes < MIN_OUTCOMES
    """
    if num_outcomes < MIN_OUTCOMES:
        raise InsufficientData(
            f"market requires at least {MIN_OUTCOMES} outcomes, got {num_outcomes}"
        )


def validate_outcome_index(index: int, num_outcomes: int) -> None:
    """
    Raises:
        InvalidOutcomeIndex: если index вне [0, num_outcomes)
    """
    if index < 0 or index >= num_outcomes:
        raise InvalidOutcomeIndex(index)


def validate_liquidity(liquidity_param: Decimal, num_outcomes: int) -> Decimal:
    """
    Проверка liquidity_param перед любыми вычислениями.

    Args:
        liquidity_param: Параметр ликвидности рынка
        num_outcomes: Число исходов (seed = liquidity_param / num_outcomes)

    Returns:
        liquidity_param без изменений

    Raises:
        InvalidLiquidity: если значение NaN/Inf, <= 0, > DECIMAL_MAX или seed
            меньше MIN_LIQUIDITY_SEED
    """
    if not liquidity_param.is_finite():
        raise InvalidLiquidity(f"must be finite, got {liquidity_param}")

    if liquidity_param <= 0:
        raise InvalidLiquidity(f"must be positive, got {liquidity_param}")

    if liquidity_param > DECIMAL_MAX:
        raise InvalidLiquidity(
            f"{liquidity_param} exceeds fixed-precision maximum {DECIMAL_MAX}"
        )

    with decimal_context():
        seed = liquidity_param / Decimal(num_outcomes)

    if seed < MIN_LIQUIDITY_SEED:
        raise InvalidLiquidity(
            f"seed {liquidity_param} / {num_outcomes} is below fixed-precision minimum "
            f"{MIN_LIQUIDITY_SEED}"
        )

    return liquidity_param


# =============================================================================
# OUTCOME TOTALS
# =============================================================================


def compute_outcome_totals(
    liquidity_param: Decimal,
    num_outcomes: int,
    bets: Sequence["Bet"],
) -> list[Decimal]:
    """
    Агрегация ставок по исходам поверх равномерного liquidity seed.

    Ожидает уже провалидированные liquidity_param и option_id.

    Returns:
        Список длины num_outcomes
    """
    seed = checked_divide(liquidity_param, Decimal(num_outcomes))
    outcome_totals = [seed] * num_outcomes

    for bet in bets:
        outcome_totals[bet.option_id] = checked_add(outcome_totals[bet.option_id], bet.amount)

    return outcome_totals


def bounded_exp_normalize(outcome_totals: Sequence[Decimal]) -> list[Decimal]:
    """
    Нормализация положительных totals в вероятности через масштабированную экспоненту.

    Args:
        outcome_totals: Положительные агрегаты по исходам

    Returns:
        Вероятности той же длины

    Raises:
        InsufficientData: если outcome_totals пуст
        CalculationError: при переполнении суммы или нулевом делителе

    Examples:
        >>> bounded_exp_normalize([Decimal(5), Decimal(5)])
        [Decimal('0.5'), Decimal('0.5')]
    """
    if not outcome_totals:
        raise InsufficientData("no outcome totals to normalize")

    scale_factor = checked_divide(max(outcome_totals), SCALE_TARGET)

    exp_values = [
        decimal_exp(checked_divide(total, scale_factor)) for total in outcome_totals
    ]

    sum_exp = checked_sum(exp_values)

    return [checked_divide(exp_value, sum_exp) for exp_value in exp_values]


# =============================================================================
# SHARED ENTRY POINT
# =============================================================================


def calculate_market_probabilities(
    config: "MarketConfig",
    bets: Sequence["Bet"],
) -> list[Decimal]:
    """
    Вероятности исходов рынка для полного списка ставок.

    Порядок проверок:
    1. num_outcomes >= 2 (InsufficientData)
    2. option_id каждой ставки < num_outcomes (InvalidOutcomeIndex первой нарушившей)
    3. liquidity_param конечен, > 0, представим и даёт seed >= MIN_LIQUIDITY_SEED
       (InvalidLiquidity)

    Args:
        config: Конфигурация рынка
        bets: Полный упорядоченный список ставок рынка

    Returns:
        Вероятности длины config.num_outcomes

    Raises:
        InsufficientData, InvalidOutcomeIndex, InvalidLiquidity, CalculationError
    """
    validate_num_outcomes(config.num_outcomes)

    for bet in bets:
        validate_outcome_index(bet.option_id, config.num_outcomes)

    liquidity_param = validate_liquidity(config.liquidity_param, config.num_outcomes)

    outcome_totals = compute_outcome_totals(liquidity_param, config.num_outcomes, bets)

    return bounded_exp_normalize(outcome_totals)
