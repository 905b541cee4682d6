"""
Results — Выходные модели движков

Immutable Pydantic модели результатов:
- MarketMakingStrategy: котировки bid/ask, спред, рекомендуемая ликвидность
- MarketRiskProfile: вероятности и метрики риска

Внутри — Decimal. to_external() отдаёт float-представление для внешней
границы (JSON, отчёты).
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# MARKET MAKING STRATEGY
# =============================================================================


class MarketMakingStrategy(BaseModel):
    """
    Стратегия маркет-мейкера.

    Инвариант: bid_prices[i] <= p_i <= ask_prices[i].
    """

    bid_prices: list[Decimal] = Field(..., min_length=1, description="Цены покупки по исходам")
    ask_prices: list[Decimal] = Field(..., min_length=1, description="Цены продажи по исходам")
    spread: Decimal = Field(..., ge=0, description="Средний спред ask - bid")
    recommended_liquidity: Decimal = Field(
        ..., gt=0, description="Рекомендуемый параметр ликвидности"
    )

    model_config = {"frozen": True}

    @field_validator("ask_prices")
    @classmethod
    def validate_ask_length(cls, v: list[Decimal], info) -> list[Decimal]:
        """Проверка, что ask_prices той же длины, что bid_prices"""
        if "bid_prices" in info.data and len(v) != len(info.data["bid_prices"]):
            raise ValueError(
                f"ask_prices length {len(v)} != bid_prices length {len(info.data['bid_prices'])}"
            )
        return v

    def to_external(self) -> dict[str, Any]:
        return {
            "bid_prices": [float(p) for p in self.bid_prices],
            "ask_prices": [float(p) for p in self.ask_prices],
            "spread": float(self.spread),
            "recommended_liquidity": float(self.recommended_liquidity),
        }


# =============================================================================
# MARKET RISK PROFILE
# =============================================================================


class MarketRiskProfile(BaseModel):
    """
    Профиль риска рынка.

    concentration — это max(p_i), а не индекс Херфиндаля Σp².
    """

    probabilities: list[Decimal] = Field(..., min_length=1, description="Вероятности исходов")
    entropy: Decimal = Field(..., ge=0, description="Энтропия Шеннона (натуральный лог)")
    concentration: Decimal = Field(..., gt=0, le=1, description="Максимальная вероятность")
    expected_volatility: Decimal = Field(
        ..., ge=0, description="Дисперсия вероятностей (прокси волатильности)"
    )
    liquidity_risk: Decimal = Field(
        ..., ge=0, le=1, description="Доля крупнейшей ставки в объёме"
    )

    model_config = {"frozen": True}

    def to_external(self) -> dict[str, Any]:
        return {
            "probabilities": [float(p) for p in self.probabilities],
            "entropy": float(self.entropy),
            "concentration": float(self.concentration),
            "expected_volatility": float(self.expected_volatility),
            "liquidity_risk": float(self.liquidity_risk),
        }
