"""Tests for ledger configuration."""

import pytest

from rebase_token.data.config import LedgerConfig, RatePolicy
from rebase_token.data.constants import DEFAULT_INTEREST_RATE, TOKEN_SYMBOL


class TestRatePolicy:
    def test_non_decreasing(self):
        policy = RatePolicy.NON_DECREASING
        assert policy.allows(5, 6)
        assert policy.allows(5, 5)
        assert not policy.allows(5, 4)

    def test_non_increasing(self):
        policy = RatePolicy.NON_INCREASING
        assert policy.allows(5, 4)
        assert policy.allows(5, 5)
        assert not policy.allows(5, 6)


class TestLedgerConfig:
    def test_defaults(self):
        config = LedgerConfig()
        assert config.symbol == TOKEN_SYMBOL
        assert config.initial_rate == DEFAULT_INTEREST_RATE
        assert config.rate_policy is RatePolicy.NON_DECREASING

    def test_negative_rate_rejected(self):
        with pytest.raises(ValueError):
            LedgerConfig(initial_rate=-1)

    def test_from_empty_env(self):
        assert LedgerConfig.from_env({}) == LedgerConfig()

    def test_from_env_overrides(self):
        config = LedgerConfig.from_env(
            {"REBASE_INITIAL_RATE": "40000000000", "REBASE_RATE_POLICY": "Non_Increasing"}
        )
        assert config.initial_rate == 4 * 10**10
        assert config.rate_policy is RatePolicy.NON_INCREASING

    @pytest.mark.parametrize(
        "environ",
        [
            {"REBASE_INITIAL_RATE": "five"},
            {"REBASE_INITIAL_RATE": "-3"},
            {"REBASE_RATE_POLICY": "sideways"},
        ],
    )
    def test_from_env_invalid(self, environ):
        with pytest.raises(ValueError):
            LedgerConfig.from_env(environ)
