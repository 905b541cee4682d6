"""
Unit tests для domain models

Тесты проверяют:
1. Конверсию float → Decimal на входе
2. Отбраковку непредставимых сумм ставок (→ 0 с предупреждением)
3. Immutability (frozen models)
4. Инварианты выходных моделей
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError
from structlog.testing import capture_logs

from predmarket.core.domain import (
    Bet,
    MarketConfig,
    MarketMakingStrategy,
    MarketRiskProfile,
    MarketType,
)

# =============================================================================
# MARKET CONFIG
# =============================================================================


class TestMarketConfig:
    """Тесты для MarketConfig"""

    def test_float_liquidity_converted_exactly(self) -> None:
        config = MarketConfig(liquidity_param=0.1, num_outcomes=2)
        assert config.liquidity_param == Decimal("0.1")

    def test_default_market_type(self) -> None:
        config = MarketConfig(liquidity_param=10, num_outcomes=3)
        assert config.market_type == MarketType.CATEGORICAL

    def test_market_type_from_string(self) -> None:
        config = MarketConfig(liquidity_param=10, num_outcomes=2, market_type="binary")
        assert config.market_type == MarketType.BINARY

    def test_unknown_market_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MarketConfig(liquidity_param=10, num_outcomes=2, market_type="futures")

    def test_invalid_values_accepted_at_construction(self) -> None:
        """NaN / 0 / отрицательная ликвидность отклоняются движками, не моделью"""
        assert MarketConfig(liquidity_param=float("nan"), num_outcomes=2).liquidity_param.is_nan()
        assert MarketConfig(liquidity_param=0, num_outcomes=0).num_outcomes == 0
        assert MarketConfig(liquidity_param=-5.0, num_outcomes=1).liquidity_param == Decimal(-5)

    def test_negative_num_outcomes_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MarketConfig(liquidity_param=10, num_outcomes=-1)

    def test_immutability(self) -> None:
        config = MarketConfig(liquidity_param=10, num_outcomes=2)
        with pytest.raises(ValidationError):
            config.num_outcomes = 5


# =============================================================================
# BET
# =============================================================================


class TestBet:
    """Тесты для Bet"""

    def test_valid_bet(self) -> None:
        bet = Bet(option_id=1, amount=30.0)
        assert bet.option_id == 1
        assert bet.amount == Decimal(30)

    def test_amount_from_string_and_decimal(self) -> None:
        assert Bet(option_id=0, amount="12.5").amount == Decimal("12.5")
        assert Bet(option_id=0, amount=Decimal("0.01")).amount == Decimal("0.01")

    def test_float_amount_uses_shortest_repr(self) -> None:
        assert Bet(option_id=0, amount=0.1).amount == Decimal("0.1")

    @pytest.mark.parametrize(
        "raw_amount",
        [float("nan"), float("inf"), 1e30, "not-a-number", Decimal("Infinity")],
    )
    def test_unconvertible_amount_counts_as_zero(self, raw_amount) -> None:
        with capture_logs() as logs:
            bet = Bet(option_id=0, amount=raw_amount)

        assert bet.amount == Decimal(0)
        assert any(entry["event"] == "bet.amount_unconvertible" for entry in logs)

    def test_negative_amount_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Bet(option_id=0, amount=-1.0)

    def test_negative_option_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Bet(option_id=-1, amount=1.0)

    def test_missing_fields_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Bet(option_id=0)

    def test_immutability(self) -> None:
        bet = Bet(option_id=0, amount=1.0)
        with pytest.raises(ValidationError):
            bet.amount = Decimal(2)

    def test_from_outcome_amounts(self) -> None:
        bets = Bet.from_outcome_amounts([50.0, 30.0, 0.0])
        assert [b.option_id for b in bets] == [0, 1, 2]
        assert [b.amount for b in bets] == [Decimal(50), Decimal(30), Decimal(0)]

    def test_from_outcome_amounts_empty(self) -> None:
        assert Bet.from_outcome_amounts([]) == []


# =============================================================================
# RESULTS
# =============================================================================


class TestMarketMakingStrategy:
    """Тесты для MarketMakingStrategy"""

    def test_valid_strategy(self) -> None:
        strategy = MarketMakingStrategy(
            bid_prices=[Decimal("0.475"), Decimal("0.475")],
            ask_prices=[Decimal("0.525"), Decimal("0.525")],
            spread=Decimal("0.05"),
            recommended_liquidity=Decimal("16.93"),
        )
        assert strategy.to_external() == {
            "bid_prices": [0.475, 0.475],
            "ask_prices": [0.525, 0.525],
            "spread": 0.05,
            "recommended_liquidity": 16.93,
        }

    def test_length_mismatch_rejected(self) -> None:
        with pytest.raises(ValidationError, match="ask_prices length"):
            MarketMakingStrategy(
                bid_prices=[Decimal("0.4"), Decimal("0.5")],
                ask_prices=[Decimal("0.6")],
                spread=Decimal("0.1"),
                recommended_liquidity=Decimal(10),
            )

    def test_negative_spread_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MarketMakingStrategy(
                bid_prices=[Decimal("0.5")],
                ask_prices=[Decimal("0.5")],
                spread=Decimal("-0.1"),
                recommended_liquidity=Decimal(10),
            )

    def test_zero_recommended_liquidity_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MarketMakingStrategy(
                bid_prices=[Decimal("0.5")],
                ask_prices=[Decimal("0.5")],
                spread=Decimal(0),
                recommended_liquidity=Decimal(0),
            )


class TestMarketRiskProfile:
    """Тесты для MarketRiskProfile"""

    def test_valid_profile(self) -> None:
        profile = MarketRiskProfile(
            probabilities=[Decimal("0.5"), Decimal("0.5")],
            entropy=Decimal("0.693"),
            concentration=Decimal("0.5"),
            expected_volatility=Decimal(0),
            liquidity_risk=Decimal(1),
        )
        external = profile.to_external()
        assert external["probabilities"] == [0.5, 0.5]
        assert external["liquidity_risk"] == 1.0
        assert all(isinstance(v, float) for v in external["probabilities"])

    @pytest.mark.parametrize(
        "field, value",
        [
            ("entropy", Decimal("-0.1")),
            ("concentration", Decimal(0)),
            ("concentration", Decimal("1.1")),
            ("expected_volatility", Decimal("-1")),
            ("liquidity_risk", Decimal("1.5")),
        ],
    )
    def test_out_of_range_rejected(self, field: str, value: Decimal) -> None:
        data = {
            "probabilities": [Decimal("0.5"), Decimal("0.5")],
            "entropy": Decimal("0.693"),
            "concentration": Decimal("0.5"),
            "expected_volatility": Decimal(0),
            "liquidity_risk": Decimal(1),
        }
        data[field] = value
        with pytest.raises(ValidationError):
            MarketRiskProfile(**data)
