"""
Statistics — Market Distribution Metrics

Метрики распределения вероятностей и объёма ставок:
- shannon_entropy: -Σ p_i ln(p_i), неопределённость исхода
- concentration: max(p_i), упрощённый показатель доминирования (НЕ Herfindahl Σp²)
- population_variance: mean((p_i - mean_p)²), прокси волатильности
- liquidity_risk: max_bet / total_volume, уязвимость к одному участнику

Все вычисления в Decimal через numerical_safeguards.
"""

from collections.abc import Sequence
from decimal import Decimal
from typing import Final

from predmarket.core.math.numerical_safeguards import (
    checked_divide,
    checked_multiply,
    checked_sum,
    clamp,
    decimal_ln,
    decimal_context,
)

# Значение liquidity_risk при пустом или нулевом объёме ставок
MAX_LIQUIDITY_RISK: Final[Decimal] = Decimal(1)


# =============================================================================
# ENTROPY / CONCENTRATION
# =============================================================================


def shannon_entropy(probabilities: Sequence[Decimal]) -> Decimal:
    """
    Энтропия Шеннона с натуральным логарифмом.

    Нулевые вероятности дают вклад 0 (предел p·ln p при p → 0).
    Результат ограничен снизу нулём, чтобы округление не давало -0E-28.

    Returns:
        Значение в [0, ln(len(probabilities))]
    """
    terms = [
        checked_multiply(p, decimal_ln(p)) for p in probabilities if p > 0
    ]
    return clamp(-checked_sum(terms), min_value=Decimal(0))


def concentration(probabilities: Sequence[Decimal]) -> Decimal:
    """Максимальная вероятность исхода (0 для пустого вектора)."""
    if not probabilities:
        return Decimal(0)
    return max(probabilities)


# =============================================================================
# MOMENTS
# =============================================================================


def mean(values: Sequence[Decimal]) -> Decimal:
    """
    Среднее арифметическое.

    Raises:
        ValueError: если values пуст
    """
    if not values:
        raise ValueError("values cannot be empty")

    return checked_divide(checked_sum(values), Decimal(len(values)))


def population_variance(values: Sequence[Decimal]) -> Decimal:
    """
    Дисперсия генеральной совокупности: mean((x - mean_x)²).

    Raises:
        ValueError: если values пуст
    """
    mean_value = mean(values)

    with decimal_context():
        squared_deviations = [(value - mean_value) ** 2 for value in values]

    return checked_divide(checked_sum(squared_deviations), Decimal(len(values)))


# =============================================================================
# LIQUIDITY RISK
# =============================================================================


def liquidity_risk(amounts: Sequence[Decimal]) -> Decimal:
    """
    Доля крупнейшей ставки в общем объёме.

    Считается как 1 / Σ(amount_i / max_amount): знаменатель не превышает
    числа ставок, поэтому сумма не переполняется даже когда сумма сырых
    ставок больше DECIMAL_MAX.

    Args:
        amounts: Суммы всех ставок рынка (неотрицательные)

    Returns:
        max(amounts) / sum(amounts) если объём > 0, иначе MAX_LIQUIDITY_RISK

    Examples:
        >>> liquidity_risk([Decimal(50), Decimal(30), Decimal(20)])
        Decimal('0.5')
        >>> liquidity_risk([])
        Decimal('1')
    """
    if not amounts:
        return MAX_LIQUIDITY_RISK

    max_amount = max(amounts)
    if max_amount <= 0:
        return MAX_LIQUIDITY_RISK

    relative_volume = checked_sum(checked_divide(amount, max_amount) for amount in amounts)
    return checked_divide(Decimal(1), relative_volume)
