"""Per-account linear interest accrual.

Within one interval between materializations the balance grows linearly:

    factor  = PRECISION + rate * (now - last_updated)
    balance = principal * factor // PRECISION

Materialization folds the interest into principal and restarts the
interval, so across several intervals growth compounds.
"""

import numpy as np
import pandas as pd

from rebase_token.data.constants import PRECISION, SECONDS_PER_YEAR


def accrued_factor(rate: int, last_updated: int, now: int) -> int:
    """Fixed-point growth factor accumulated since ``last_updated``."""
    elapsed = now - last_updated
    if elapsed < 0:
        raise ValueError(f"Timestamp {now} precedes last update {last_updated}")
    return PRECISION + rate * elapsed


def effective_balance(principal: int, rate: int, last_updated: int, now: int) -> int:
    """Principal scaled by the accrued factor (rounded down)."""
    return principal * accrued_factor(rate, last_updated, now) // PRECISION


def pending_interest(principal: int, rate: int, last_updated: int, now: int) -> int:
    """Interest accrued but not yet folded into principal."""
    return effective_balance(principal, rate, last_updated, now) - principal


def annual_percentage_rate(rate: int) -> float:
    """Simple (non-compounded) yearly rate as a decimal, e.g. 0.05 = 5%."""
    return rate * SECONDS_PER_YEAR / PRECISION


def growth_curve(
    principal: float,
    rate: int,
    horizon_seconds: int,
    n_points: int = 200,
    materialize_every: int | None = None,
) -> pd.DataFrame:
    """Balance over time with and without periodic materialization.

    Args:
        principal: Starting principal (token units, float is fine here).
        rate: Per-second fixed-point rate.
        horizon_seconds: Length of the curve.
        n_points: Number of sample points.
        materialize_every: Seconds between materializations. ``None``
            means the account is never touched (pure linear growth).

    Returns:
        DataFrame with columns: elapsed, linear_balance, materialized_balance
    """
    r = rate / PRECISION
    elapsed = np.linspace(0, horizon_seconds, n_points)
    linear = principal * (1.0 + r * elapsed)

    if materialize_every is None or materialize_every <= 0:
        materialized = linear.copy()
    else:
        # Completed intervals compound; the open interval is linear.
        n_done = np.floor(elapsed / materialize_every)
        remainder = elapsed - n_done * materialize_every
        materialized = (
            principal
            * np.power(1.0 + r * materialize_every, n_done)
            * (1.0 + r * remainder)
        )

    return pd.DataFrame(
        {
            "elapsed": elapsed,
            "linear_balance": linear,
            "materialized_balance": materialized,
        }
    )
