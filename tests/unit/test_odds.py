"""
Тесты для odds (коэффициенты и потенциальный выигрыш)

Проверяет:
1. probability_to_odds: 1/p с ограничениями MAX_ODDS / MIN_ODDS
2. odds_to_probability: 1/odds с ограничением MAX_IMPLIED_PROBABILITY
3. calculate_potential_profit: комиссии со ставки и с выигрыша
4. ProbabilityEngine.calculate_odds
"""

from decimal import Decimal

import pytest

from predmarket.core.domain import Bet, MarketConfig
from predmarket.core.errors import CalculationError
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
from predmarket.engines import ProbabilityEngine


def D(value: str) -> Decimal:
    return Decimal(value)


# =============================================================================
# CONVERSION
# =============================================================================


class TestProbabilityToOdds:
    """Тесты для probability_to_odds"""

    @pytest.mark.parametrize(
        "probability, expected",
        [
            (D("0.5"), Decimal(2)),
            (D("0.25"), Decimal(4)),
            (D("0.1"), Decimal(10)),
        ],
    )
    def test_reciprocal(self, probability: Decimal, expected: Decimal) -> None:
        assert probability_to_odds(probability) == expected

    @pytest.mark.parametrize("probability", [Decimal(0), D("-0.2")])
    def test_non_positive_is_max_odds(self, probability: Decimal) -> None:
        assert probability_to_odds(probability) == MAX_ODDS == Decimal(999)

    @pytest.mark.parametrize("probability", [Decimal(1), D("1.5")])
    def test_certain_is_min_odds(self, probability: Decimal) -> None:
        assert probability_to_odds(probability) == MIN_ODDS == D("1.01")

    def test_near_certain_clamped_to_min_odds(self) -> None:
        """1 / 0.995 ≈ 1.005 < MIN_ODDS"""
        assert probability_to_odds(D("0.995")) == MIN_ODDS

    def test_non_finite_rejected(self) -> None:
        with pytest.raises(ValueError, match="probability must be finite"):
            probability_to_odds(Decimal("NaN"))

    def test_unrepresentable_reciprocal(self) -> None:
        with pytest.raises(CalculationError):
            probability_to_odds(D("1e-29"))


class TestOddsToProbability:
    """Тесты для odds_to_probability"""

    def test_reciprocal(self) -> None:
        assert odds_to_probability(Decimal(4)) == D("0.25")
        assert odds_to_probability(Decimal(2)) == D("0.5")

    @pytest.mark.parametrize("odds", [Decimal(1), D("0.5"), Decimal(0), D("-3")])
    def test_odds_at_or_below_one(self, odds: Decimal) -> None:
        assert odds_to_probability(odds) == MAX_IMPLIED_PROBABILITY == D("0.99")

    def test_clamped_to_max_implied_probability(self) -> None:
        """1 / 1.005 ≈ 0.995 > MAX_IMPLIED_PROBABILITY"""
        assert odds_to_probability(D("1.005")) == MAX_IMPLIED_PROBABILITY

    def test_inverse_of_probability_to_odds_inside_clamps(self) -> None:
        for probability in (D("0.2"), D("0.5"), D("0.8")):
            assert odds_to_probability(probability_to_odds(probability)) == probability

    def test_non_finite_rejected(self) -> None:
        with pytest.raises(ValueError, match="odds must be finite"):
            odds_to_probability(Decimal("Infinity"))


# =============================================================================
# POTENTIAL PROFIT
# =============================================================================


class TestPotentialProfit:
    """Тесты для calculate_potential_profit"""

    def test_default_fees(self) -> None:
        assert DEFAULT_BID_FEE == DEFAULT_PAYOUT_FEE == D("0.01")

    def test_breakdown_with_default_fees(self) -> None:
        """100 при odds 2: bid_fee 1, ставка 99, gross 198, payout_fee 1.98"""
        profit = calculate_potential_profit(Decimal(100), Decimal(2))

        assert profit["bid_fee"] == Decimal(1)
        assert profit["gross"] == Decimal(198)
        assert profit["payout_fee"] == D("1.98")
        assert profit["net"] == D("196.02")
        assert profit["fees"] == D("2.98")

    def test_fees_are_sum_of_components(self) -> None:
        profit = calculate_potential_profit(D("37.5"), D("3.2"))
        assert profit["fees"] == profit["bid_fee"] + profit["payout_fee"]
        assert profit["net"] == profit["gross"] - profit["payout_fee"]

    def test_zero_fees(self) -> None:
        profit = calculate_potential_profit(
            Decimal(100), Decimal(2), FeeConfig(bid_fee=Decimal(0), payout_fee=Decimal(0))
        )
        assert profit["gross"] == profit["net"] == Decimal(200)
        assert profit["fees"] == Decimal(0)

    @pytest.mark.parametrize(
        "amount, odds",
        [
            (Decimal(0), Decimal(2)),
            (D("-10"), Decimal(2)),
            (Decimal(100), Decimal(1)),
            (Decimal(100), D("0.5")),
        ],
    )
    def test_no_stake_or_no_edge_is_zero(self, amount: Decimal, odds: Decimal) -> None:
        profit = calculate_potential_profit(amount, odds)
        assert set(profit) == {"gross", "fees", "net", "bid_fee", "payout_fee"}
        assert all(value == 0 for value in profit.values())

    @pytest.mark.parametrize(
        "fee_config, name",
        [
            (FeeConfig(bid_fee=D("-0.01")), "bid_fee"),
            (FeeConfig(payout_fee=D("1.5")), "payout_fee"),
        ],
    )
    def test_fee_out_of_range(self, fee_config: FeeConfig, name: str) -> None:
        with pytest.raises(ValueError, match=name):
            calculate_potential_profit(Decimal(100), Decimal(2), fee_config)

    def test_overflow_is_calculation_error(self) -> None:
        with pytest.raises(CalculationError):
            calculate_potential_profit(D("5e28"), Decimal(999))


# =============================================================================
# ENGINE
# =============================================================================


class TestCalculateOdds:
    """Тесты для ProbabilityEngine.calculate_odds"""

    def test_uniform_market(self) -> None:
        engine = ProbabilityEngine(MarketConfig(liquidity_param=10.0, num_outcomes=4))
        for odds in engine.calculate_odds([]):
            assert abs(odds - Decimal(4)) < D("1e-20")

    def test_matches_probabilities(self) -> None:
        engine = ProbabilityEngine(MarketConfig(liquidity_param=10.0, num_outcomes=3))
        bets = [Bet(option_id=0, amount=50.0), Bet(option_id=2, amount=5.0)]

        odds = engine.calculate_odds(bets)
        probabilities = engine.calculate_probabilities(bets)

        assert odds == [probability_to_odds(p) for p in probabilities]
        assert odds[0] == min(odds)
