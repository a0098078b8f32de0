"""Simulations of how interaction cadence turns linear accrual into compounding.

An untouched account grows linearly. Each materializing interaction folds
interest into principal, so the more often a holder (or anyone sending to
them) touches the account, the closer growth gets to continuous
compounding. Two views:

1. Deterministic paths for fixed materialization intervals.
2. Monte Carlo paths where interactions arrive as a Poisson process.

``replay_on_ledger`` runs a schedule through the real integer ledger so
the float simulations can be checked against it.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np
import pandas as pd

from rebase_token.data.config import LedgerConfig
from rebase_token.data.constants import PRECISION, SECONDS_PER_DAY
from rebase_token.protocol.accrual import growth_curve
from rebase_token.protocol.environment import Environment, ManualClock
from rebase_token.protocol.gateway import deploy
from rebase_token.simulation.results import AccrualSimulationResult


def simulate_materialization_paths(
    principal: float,
    rate: int,
    horizon_days: int,
    intervals_days: Iterable[float],
) -> pd.DataFrame:
    """Daily balance for each fixed materialization interval.

    Returns:
        DataFrame indexed by day with a ``linear`` column and one
        ``every_<n>d`` column per interval.
    """
    horizon_seconds = horizon_days * SECONDS_PER_DAY
    n_points = horizon_days + 1

    base = growth_curve(principal, rate, horizon_seconds, n_points)
    df = pd.DataFrame(
        {"day": base["elapsed"] / SECONDS_PER_DAY, "linear": base["linear_balance"]}
    )
    for interval in intervals_days:
        curve = growth_curve(
            principal,
            rate,
            horizon_seconds,
            n_points,
            materialize_every=int(interval * SECONDS_PER_DAY),
        )
        df[f"every_{interval:g}d"] = curve["materialized_balance"]
    return df.set_index("day")


def run_monte_carlo(
    principal: float,
    rate: int,
    horizon_days: int = 365,
    interactions_per_day: float = 1.0,
    n_paths: int = 1000,
    seed: int | None = None,
) -> AccrualSimulationResult:
    """Simulate balances when interactions arrive at random.

    Interactions are a Poisson process with intensity
    ``interactions_per_day``; time is discretized to days, and a day with at
    least one interaction materializes at its close.

    Args:
        principal: Deposited amount.
        rate: Per-second fixed-point rate snapshot.
        horizon_days: Simulation horizon in days.
        interactions_per_day: Mean materializing interactions per day.
        n_paths: Number of simulation paths.
        seed: Random seed for reproducibility.

    Returns:
        AccrualSimulationResult with all path data.
    """
    if interactions_per_day < 0:
        raise ValueError(f"interactions_per_day must be >= 0, got {interactions_per_day}")

    rng = np.random.default_rng(seed)
    n_steps = horizon_days + 1  # +1: index 0 = deposit
    r = rate / PRECISION

    p_touch = 1.0 - np.exp(-interactions_per_day)
    touches = rng.random((n_paths, n_steps - 1)) < p_touch

    paths = np.empty((n_paths, n_steps))
    paths[:, 0] = principal
    base = np.full(n_paths, float(principal))
    since = np.zeros(n_paths)

    for t in range(1, n_steps):
        since += SECONDS_PER_DAY
        paths[:, t] = base * (1.0 + r * since)
        hit = touches[:, t - 1]
        base = np.where(hit, paths[:, t], base)
        since = np.where(hit, 0.0, since)

    linear_terminal = principal * (1.0 + r * horizon_days * SECONDS_PER_DAY)

    return AccrualSimulationResult(
        balance_paths=paths,
        terminal_balance=paths[:, -1],
        interaction_counts=touches.sum(axis=1),
        linear_terminal=linear_terminal,
        timesteps=np.arange(n_steps, dtype=float),
    )


def replay_on_ledger(
    principal: int,
    rate: int,
    interaction_days: Iterable[int],
    horizon_days: int,
) -> pd.DataFrame:
    """Run a materialization schedule through a real ledger and vault.

    The holder deposits ``principal`` on day 0 and makes a zero-value
    transfer to itself on every day in ``interaction_days``.

    Returns:
        DataFrame with columns: day, principal, balance (one row per
        interaction plus the horizon).
    """
    clock = ManualClock(start=1)
    env = Environment(clock)
    owner = env.new_address("owner")
    holder = env.new_address("holder")
    ledger, vault = deploy(env, owner, LedgerConfig(initial_rate=rate))

    env.fund(holder, principal)
    vault.deposit(holder, principal)
    start = clock.now()

    rows = []
    days = sorted({d for d in interaction_days if 0 < d <= horizon_days})
    for day in days:
        clock.warp(start + day * SECONDS_PER_DAY)
        ledger.transfer(holder, holder, 0)
        rows.append(
            {
                "day": day,
                "principal": ledger.principal_balance_of(holder),
                "balance": ledger.balance_of(holder),
            }
        )

    clock.warp(start + horizon_days * SECONDS_PER_DAY)
    rows.append(
        {
            "day": horizon_days,
            "principal": ledger.principal_balance_of(holder),
            "balance": ledger.balance_of(holder),
        }
    )
    # Object columns keep exact integers beyond int64
    df = pd.DataFrame(rows, columns=["day", "principal", "balance"])
    return df.astype({"principal": object, "balance": object})
