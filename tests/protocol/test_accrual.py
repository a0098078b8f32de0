"""Tests for the accrual math."""

import pytest

from rebase_token.data.constants import DEFAULT_INTEREST_RATE, PRECISION, SECONDS_PER_YEAR
from rebase_token.protocol.accrual import (
    accrued_factor,
    annual_percentage_rate,
    effective_balance,
    growth_curve,
    pending_interest,
)

RATE = DEFAULT_INTEREST_RATE  # 5e10


class TestAccruedFactor:
    def test_no_time_elapsed(self) -> None:
        assert accrued_factor(RATE, 100, 100) == PRECISION

    def test_linear_in_elapsed(self) -> None:
        assert accrued_factor(RATE, 100, 110) == PRECISION + RATE * 10
        assert accrued_factor(RATE, 100, 120) - PRECISION == 2 * (
            accrued_factor(RATE, 100, 110) - PRECISION
        )

    def test_zero_rate(self) -> None:
        assert accrued_factor(0, 0, 10**9) == PRECISION

    def test_backwards_time_rejected(self) -> None:
        with pytest.raises(ValueError):
            accrued_factor(RATE, 200, 100)


class TestEffectiveBalance:
    def test_two_second_example(self) -> None:
        # 10 tokens at 5e10 for 2 seconds: 10e18 * (1e18 + 1e11) / 1e18
        principal = 10 * 10**18
        balance = effective_balance(principal, RATE, 1_000, 1_002)
        assert balance == principal * (PRECISION + RATE * 2) // PRECISION
        assert balance - principal == 10**12

    def test_rounds_down(self) -> None:
        # 1 * (1e18 + 5e10) // 1e18 == 1
        assert effective_balance(1, RATE, 0, 1) == 1

    def test_zero_principal(self) -> None:
        assert effective_balance(0, RATE, 0, 10**6) == 0

    def test_pending_interest(self) -> None:
        principal = 5 * 10**18
        assert pending_interest(principal, RATE, 0, 0) == 0
        assert pending_interest(principal, RATE, 0, 100) == principal * RATE * 100 // PRECISION


class TestAnnualPercentageRate:
    def test_default_rate(self) -> None:
        assert annual_percentage_rate(RATE) == pytest.approx(5e-8 * SECONDS_PER_YEAR)

    def test_zero(self) -> None:
        assert annual_percentage_rate(0) == 0.0


class TestGrowthCurve:
    def test_columns_and_shape(self) -> None:
        df = growth_curve(10.0, RATE, 86_400, n_points=50)
        assert len(df) == 50
        assert list(df.columns) == ["elapsed", "linear_balance", "materialized_balance"]
        assert df["elapsed"].iloc[0] == pytest.approx(0.0)
        assert df["elapsed"].iloc[-1] == pytest.approx(86_400.0)

    def test_never_materialized_is_linear(self) -> None:
        df = growth_curve(10.0, RATE, 86_400, n_points=20)
        assert (df["materialized_balance"] == df["linear_balance"]).all()

    def test_materialization_compounds(self) -> None:
        df = growth_curve(10.0, RATE, 30 * 86_400, n_points=31, materialize_every=86_400)
        final = df.iloc[-1]
        assert final["materialized_balance"] > final["linear_balance"]
        expected = 10.0 * (1.0 + RATE / PRECISION * 86_400) ** 30
        assert final["materialized_balance"] == pytest.approx(expected, rel=1e-9)

    def test_equal_within_first_interval(self) -> None:
        df = growth_curve(10.0, RATE, 3_600, n_points=10, materialize_every=86_400)
        assert df["materialized_balance"].to_numpy() == pytest.approx(
            df["linear_balance"].to_numpy()
        )
