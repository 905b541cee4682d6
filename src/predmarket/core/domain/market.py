"""
Market — Конфигурация рынка и ставки

Immutable Pydantic модели входных данных движка:
- MarketConfig: параметры рынка, общие для всех движков
- Bet: одна ставка на исход, поставляется заново при каждом вызове

Float на входе конвертируется в Decimal через кратчайшее десятичное
представление до любой арифметики.
"""

from collections.abc import Sequence
from decimal import Decimal
from enum import Enum
from typing import Any

import structlog
from pydantic import BaseModel, Field, field_validator

from predmarket.core.math.numerical_safeguards import to_decimal

log = structlog.get_logger()


# =============================================================================
# ENUMS
# =============================================================================


class MarketType(str, Enum):
    """
    Тип рынка.

    Информационное поле: ни одно вычисление его не использует.
    """

    BINARY = "binary"
    CATEGORICAL = "categorical"
    SCALAR = "scalar"


# =============================================================================
# MARKET CONFIG
# =============================================================================


class MarketConfig(BaseModel):
    """
    Конфигурация рынка.

    Модель принимает любые числовые liquidity_param (включая NaN/Inf) и
    num_outcomes >= 0: недопустимые значения отклоняются движками при
    вычислении (InvalidLiquidity / InsufficientData), а не при создании.
    """

    liquidity_param: Decimal = Field(
        ..., allow_inf_nan=True, description="Параметр ликвидности (seed на рынок)"
    )
    num_outcomes: int = Field(..., ge=0, description="Число взаимоисключающих исходов")
    market_type: MarketType = Field(
        MarketType.CATEGORICAL, description="Тип рынка (информационный)"
    )

    model_config = {"frozen": True}

    @field_validator("liquidity_param", mode="before")
    @classmethod
    def coerce_liquidity_param(cls, v: Any) -> Any:
        """Float → Decimal через repr, чтобы не тащить двоичный хвост"""
        if isinstance(v, float):
            return Decimal(repr(v))
        return v


# =============================================================================
# BET
# =============================================================================


class Bet(BaseModel):
    """
    Ставка на исход.

    amount, который невозможно представить в Decimal фиксированной точности
    (NaN, Inf, вне диапазона, нечисловая строка), засчитывается как 0.

    Ошибки на границе:
    - отрицательный option_id или amount → pydantic.ValidationError при создании
      (для mapping-входа фасада раньше срабатывает jsonschema.ValidationError)
    - option_id >= num_outcomes → InvalidOutcomeIndex при вычислении, так как
      модель не знает число исходов рынка
    """

    option_id: int = Field(..., ge=0, description="Индекс исхода")
    amount: Decimal = Field(..., ge=0, description="Сумма ставки")

    model_config = {"frozen": True}

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, v: Any) -> Any:
        if isinstance(v, bool) or not isinstance(v, (Decimal, float, int, str)):
            return v

        amount = to_decimal(v)
        if amount is None:
            log.warning("bet.amount_unconvertible", raw_amount=repr(v))
            return Decimal(0)
        return amount

    @classmethod
    def from_outcome_amounts(cls, amounts: Sequence[Any]) -> list["Bet"]:
        """
        Ставки из вектора сумм по исходам: amounts[i] → Bet(option_id=i).

        Examples:
            >>> [b.option_id for b in Bet.from_outcome_amounts([50.0, 30.0])]
            [0, 1]
        """
        return [cls(option_id=i, amount=amount) for i, amount in enumerate(amounts)]
