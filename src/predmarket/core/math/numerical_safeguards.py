"""
Numerical Safeguards — Decimal Fixed-Precision Primitives

Модуль обеспечивает численную устойчивость всех вычислений ценообразования:
- Фиксированный decimal-контекст (28 значащих цифр) вместо binary float
- Конверсия float/int/str → Decimal с отбраковкой NaN/Inf и выхода за диапазон
- Checked-сложение и checked-деление (переполнение / деление на ноль → CalculationError)
- Epsilon-сравнения Decimal
- Валидация параметров

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Float никогда не участвует в арифметике напрямую, только через to_decimal
2. Переполнение и деление на ноль всегда приводят к исключению, не к fallback
3. Все операции детерминированы и воспроизводимы
4. Контекст копируется в thread-local (decimal.localcontext), потоки не делят флаги
"""

import math
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from decimal import (
    ROUND_HALF_EVEN,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)
from typing import Final

from predmarket.core.errors import CalculationError

# =============================================================================
# DECIMAL-КОНТЕКСТ
# =============================================================================

# Число значащих цифр (совпадает с 96-битной мантиссой fixed-precision типа)
DECIMAL_PRECISION: Final[int] = 28

# Максимальное представимое значение: 2^96 - 1
# Всё, что больше, считается переполнением
DECIMAL_MAX: Final[Decimal] = Decimal("79228162514264337593543950335")

# Переполнение, деление на ноль и невалидные операции ловятся как исключения
DECIMAL_CONTEXT: Final[Context] = Context(
    prec=DECIMAL_PRECISION,
    rounding=ROUND_HALF_EVEN,
    Emax=DECIMAL_PRECISION,
    Emin=-DECIMAL_PRECISION,
    traps=[Overflow, DivisionByZero, InvalidOperation],
)


# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Допуск для инварианта Σ p_i == 1
EPS_PROBABILITY: Final[Decimal] = Decimal("1e-9")

# Допуск для общих сравнений Decimal
EPS_DECIMAL_COMPARE: Final[Decimal] = Decimal("1e-20")


@contextmanager
def decimal_context() -> Iterator[Context]:
    """
    Thread-local копия DECIMAL_CONTEXT.

    Все арифметические операции модуля выполняются внутри этого контекста,
    поэтому глобальный контекст вызывающего кода не меняется.
    """
    with localcontext(DECIMAL_CONTEXT) as ctx:
        yield ctx


# =============================================================================
# КОНВЕРСИЯ
# =============================================================================


def is_representable(value: Decimal) -> bool:
    """
    Проверка, что Decimal конечен и укладывается в fixed-precision диапазон.

    Args:
        value: Проверяемое значение

    Returns:
        True если value конечен и abs(value) <= DECIMAL_MAX
    """
    # copy_abs не округляет по контексту, в отличие от abs()
    return value.is_finite() and value.copy_abs() <= DECIMAL_MAX


def to_decimal(value: object, fallback: Decimal | None = None) -> Decimal | None:
    """
    Конверсия внешнего значения в Decimal фиксированной точности.

    Float конвертируется через кратчайшее десятичное представление (repr),
    поэтому 0.1 становится Decimal("0.1"), а не двоичным хвостом.

    Args:
        value: float, int, str или Decimal
        fallback: Значение при невозможности конверсии (default: None)

    Returns:
        Decimal, округлённый до DECIMAL_PRECISION цифр, или fallback если
        значение NaN/Inf, вне диапазона, не число или bool

    Examples:
        >>> to_decimal(0.1)
        Decimal('0.1')
        >>> to_decimal(float("nan")) is None
        True
        >>> to_decimal(1e30) is None
        True
        >>> to_decimal("abc", fallback=Decimal(0))
        Decimal('0')
    """
    if isinstance(value, bool):
        return fallback

    if isinstance(value, Decimal):
        raw = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            return fallback
        raw = Decimal(repr(value))
    elif isinstance(value, int):
        raw = Decimal(value)
    elif isinstance(value, str):
        try:
            raw = Decimal(value.strip())
        except InvalidOperation:
            return fallback
    else:
        return fallback

    if not is_representable(raw):
        return fallback

    with decimal_context():
        # Унарный плюс применяет точность контекста
        result = +raw

    # Округление 29-значного значения у границы может выйти за DECIMAL_MAX
    if not is_representable(result):
        return fallback

    return result


# =============================================================================
# CHECKED-АРИФМЕТИКА
# =============================================================================


def checked_add(a: Decimal, b: Decimal) -> Decimal:
    """
    Сложение с контролем переполнения.

    Args:
        a: Первое слагаемое
        b: Второе слагаемое

    Returns:
        a + b

    Raises:
        CalculationError: Если результат выходит за DECIMAL_MAX
    """
    try:
        with decimal_context():
            result = a + b
    except (Overflow, InvalidOperation) as e:
        raise CalculationError("Numerical overflow in sum") from e

    if not is_representable(result):
        raise CalculationError("Numerical overflow in sum")

    return result


def checked_sum(values: Iterable[Decimal]) -> Decimal:
    """
    Сумма последовательности через checked_add.

    Пустая последовательность даёт Decimal(0).
    """
    total = Decimal(0)
    for value in values:
        total = checked_add(total, value)
    return total


def checked_multiply(a: Decimal, b: Decimal) -> Decimal:
    """
    Умножение с контролем переполнения.

    Raises:
        CalculationError: Если результат выходит за DECIMAL_MAX
    """
    try:
        with decimal_context():
            result = a * b
    except (Overflow, InvalidOperation) as e:
        raise CalculationError("Numerical overflow in product") from e

    if not is_representable(result):
        raise CalculationError("Numerical overflow in product")

    return result


def checked_divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    """
    Деление с контролем деления на ноль и переполнения.

    В отличие от float safe_divide здесь нет fallback: деление на ноль
    означает нарушение инварианта и должно прервать вычисление.

    Args:
        numerator: Числитель
        denominator: Знаменатель

    Returns:
        numerator / denominator

    Raises:
        CalculationError: Если denominator == 0 или результат вне диапазона

    Examples:
        >>> checked_divide(Decimal(1), Decimal(4))
        Decimal('0.25')
    """
    if denominator.is_zero():
        raise CalculationError("Division by zero in probability calculation")

    try:
        with decimal_context():
            result = numerator / denominator
    except DivisionByZero as e:
        raise CalculationError("Division by zero in probability calculation") from e
    except (Overflow, InvalidOperation) as e:
        raise CalculationError("Numerical overflow in division") from e

    if not is_representable(result):
        raise CalculationError("Numerical overflow in division")

    return result


def decimal_exp(value: Decimal) -> Decimal:
    """
    exp(value) в fixed-precision контексте.

    Raises:
        CalculationError: Если результат не представим
    """
    try:
        with decimal_context():
            result = value.exp()
    except (Overflow, InvalidOperation) as e:
        raise CalculationError(f"Numerical overflow in exp({value})") from e

    if not is_representable(result):
        raise CalculationError(f"Numerical overflow in exp({value})")

    return result


def decimal_ln(value: Decimal) -> Decimal:
    """
    Натуральный логарифм в fixed-precision контексте.

    Raises:
        CalculationError: Если value <= 0
    """
    if value <= 0:
        raise CalculationError(f"Logarithm of non-positive value: {value}")

    with decimal_context():
        return value.ln()


# =============================================================================
# EPSILON-СРАВНЕНИЯ
# =============================================================================


def is_close(a: Decimal, b: Decimal, tol: Decimal = EPS_DECIMAL_COMPARE) -> bool:
    """
    Сравнение двух Decimal с абсолютной толерантностью.

    Returns:
        True если abs(a - b) <= tol
    """
    with decimal_context():
        return abs(a - b) <= tol


def clamp(
    value: Decimal,
    min_value: Decimal | None = None,
    max_value: Decimal | None = None,
) -> Decimal:
    """
    Ограничение значения в заданном диапазоне.

    Examples:
        >>> clamp(Decimal("-0.0001"), min_value=Decimal(0))
        Decimal('0')
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_in_range(
    value: Decimal,
    name: str,
    min_value: Decimal | None = None,
    max_value: Decimal | None = None,
) -> None:
    """
    Валидация, что значение конечно и в заданном диапазоне.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        min_value: Минимальное допустимое значение (optional)
        max_value: Максимальное допустимое значение (optional)

    Raises:
        ValueError: Если value вне диапазона или NaN/Inf
    """
    if not value.is_finite():
        raise ValueError(f"{name} must be finite (not NaN/Inf), got {value}")

    if min_value is not None and value < min_value:
        raise ValueError(f"{name} must be >= {min_value}, got {value}")

    if max_value is not None and value > max_value:
        raise ValueError(f"{name} must be <= {max_value}, got {value}")
