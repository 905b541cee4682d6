"""
Odds — Конверсия вероятность ↔ десятичные коэффициенты и расчёт выигрыша

Формулы:
    odds = max(MIN_ODDS, 1 / p)            (p <= 0 → MAX_ODDS, p >= 1 → MIN_ODDS)
    p = min(MAX_IMPLIED_PROBABILITY, 1 / odds)   (odds <= 1 → MAX_IMPLIED_PROBABILITY)

    bid_fee = amount * bid_fee_rate
    gross = (amount - bid_fee) * odds
    payout_fee = gross * payout_fee_rate
    net = gross - payout_fee

Коэффициенты ограничены снизу MIN_ODDS, чтобы ставка на почти
гарантированный исход не давала нулевой или отрицательный выигрыш.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Final

from predmarket.core.math.numerical_safeguards import (
    checked_add,
    checked_divide,
    checked_multiply,
    validate_in_range,
)

# =============================================================================
# CONSTANTS
# =============================================================================

# Коэффициент для нулевой вероятности
MAX_ODDS: Final[Decimal] = Decimal(999)

# Минимальный коэффициент (и коэффициент для p >= 1)
MIN_ODDS: Final[Decimal] = Decimal("1.01")

# Верхняя граница вероятности, выводимой из коэффициента
MAX_IMPLIED_PROBABILITY: Final[Decimal] = Decimal("0.99")

# Комиссии по умолчанию: 1% со ставки и 1% с выигрыша
DEFAULT_BID_FEE: Final[Decimal] = Decimal("0.01")
DEFAULT_PAYOUT_FEE: Final[Decimal] = Decimal("0.01")


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class FeeConfig:
    """Конфигурация комиссий. Обе ставки комиссии в [0, 1]."""

    bid_fee: Decimal = DEFAULT_BID_FEE
    payout_fee: Decimal = DEFAULT_PAYOUT_FEE


# =============================================================================
# CONVERSION
# =============================================================================


def probability_to_odds(probability: Decimal) -> Decimal:
    """
    Вероятность → десятичный коэффициент.

    Raises:
        ValueError: если probability NaN/Inf
        CalculationError: если 1 / probability не представимо в Decimal

    Examples:
        >>> probability_to_odds(Decimal("0.25"))
        Decimal('4')
        >>> probability_to_odds(Decimal(0))
        Decimal('999')
    """
    validate_in_range(probability, "probability")

    if probability <= 0:
        return MAX_ODDS
    if probability >= 1:
        return MIN_ODDS

    return max(MIN_ODDS, checked_divide(Decimal(1), probability))


def odds_to_probability(odds: Decimal) -> Decimal:
    """
    Десятичный коэффициент → подразумеваемая вероятность.

    Raises:
        ValueError: если odds NaN/Inf
    """
    validate_in_range(odds, "odds")

    if odds <= 1:
        return MAX_IMPLIED_PROBABILITY

    return min(MAX_IMPLIED_PROBABILITY, checked_divide(Decimal(1), odds))


# =============================================================================
# POTENTIAL PROFIT
# =============================================================================


def calculate_potential_profit(
    amount: Decimal,
    odds: Decimal,
    fee_config: FeeConfig | None = None,
) -> dict[str, Decimal]:
    """
    Выигрыш по ставке amount при коэффициенте odds с учётом комиссий.

    Нулевая или отрицательная ставка и коэффициент <= 1 дают нулевой результат.

    Args:
        amount: Сумма ставки
        odds: Десятичный коэффициент
        fee_config: Комиссии (optional, используется default)

    Returns:
        dict с ключами gross, fees, net, bid_fee, payout_fee

    Raises:
        ValueError: если amount/odds NaN/Inf или комиссия вне [0, 1]
        CalculationError: при переполнении
    """
    fee_config = fee_config or FeeConfig()

    validate_in_range(amount, "amount")
    validate_in_range(odds, "odds")
    validate_in_range(fee_config.bid_fee, "bid_fee", Decimal(0), Decimal(1))
    validate_in_range(fee_config.payout_fee, "payout_fee", Decimal(0), Decimal(1))

    if amount <= 0 or odds <= 1:
        zero = Decimal(0)
        return {"gross": zero, "fees": zero, "net": zero, "bid_fee": zero, "payout_fee": zero}

    bid_fee = checked_multiply(amount, fee_config.bid_fee)
    net_bet_amount = checked_add(amount, bid_fee.copy_negate())

    gross = checked_multiply(net_bet_amount, odds)
    payout_fee = checked_multiply(gross, fee_config.payout_fee)

    return {
        "gross": gross,
        "fees": checked_add(bid_fee, payout_fee),
        "net": checked_add(gross, payout_fee.copy_negate()),
        "bid_fee": bid_fee,
        "payout_fee": payout_fee,
    }
