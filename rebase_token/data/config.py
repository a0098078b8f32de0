"""Ledger configuration, with environment-variable overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from rebase_token.data.constants import (
    DEFAULT_INTEREST_RATE,
    TOKEN_DECIMALS,
    TOKEN_NAME,
    TOKEN_SYMBOL,
)


class RatePolicy(str, Enum):
    """Which direction ``set_global_rate`` may move the rate.

    Equal rates are accepted under both policies.
    """

    NON_DECREASING = "non_decreasing"
    NON_INCREASING = "non_increasing"

    def allows(self, current: int, new: int) -> bool:
        if self is RatePolicy.NON_DECREASING:
            return new >= current
        return new <= current


@dataclass(frozen=True)
class LedgerConfig:
    """Deployment-time ledger settings."""

    name: str = TOKEN_NAME
    symbol: str = TOKEN_SYMBOL
    decimals: int = TOKEN_DECIMALS
    initial_rate: int = DEFAULT_INTEREST_RATE
    rate_policy: RatePolicy = RatePolicy.NON_DECREASING

    def __post_init__(self) -> None:
        if self.initial_rate < 0:
            raise ValueError(f"initial_rate must be non-negative, got {self.initial_rate}")
        if self.decimals < 0:
            raise ValueError(f"decimals must be non-negative, got {self.decimals}")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "LedgerConfig":
        """Build a config from ``REBASE_*`` environment variables.

        Parameters
        ----------
        environ : dict[str, str] | None
            Mapping to read from. Defaults to ``os.environ``.
        """
        env = os.environ if environ is None else environ

        raw_rate = env.get("REBASE_INITIAL_RATE")
        try:
            initial_rate = int(raw_rate) if raw_rate else DEFAULT_INTEREST_RATE
        except ValueError:
            raise ValueError(f"REBASE_INITIAL_RATE is not an integer: {raw_rate!r}") from None

        raw_policy = env.get("REBASE_RATE_POLICY", RatePolicy.NON_DECREASING.value)
        try:
            policy = RatePolicy(raw_policy.strip().lower())
        except ValueError:
            valid = ", ".join(p.value for p in RatePolicy)
            raise ValueError(f"REBASE_RATE_POLICY must be one of {valid}; got {raw_policy!r}") from None

        return cls(initial_rate=initial_rate, rate_policy=policy)
