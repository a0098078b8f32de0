"""Simulations page: Monte Carlo over interaction cadence."""

import numpy as np
import streamlit as st

from rebase_token.dashboard.components.charts import (
    balance_fan_chart,
    terminal_balance_histogram,
)
from rebase_token.simulation.accrual_paths import run_monte_carlo


def render_simulations(deposit: float, rate: int, horizon_days: int) -> None:
    """Render the Monte Carlo page."""
    st.header("Monte Carlo: Random Interaction Cadence")

    with st.expander("Simulation Parameters", expanded=False):
        col1, col2 = st.columns(2)
        with col1:
            n_paths = st.number_input("Paths", min_value=100, max_value=10000, value=1000, step=100)
            seed = st.number_input("Seed", min_value=0, value=42, step=1)
        with col2:
            intensity = st.number_input(
                "Interactions per day", min_value=0.0, max_value=24.0, value=0.2, step=0.05
            )

    result = run_monte_carlo(
        principal=deposit,
        rate=rate,
        horizon_days=horizon_days,
        interactions_per_day=float(intensity),
        n_paths=int(n_paths),
        seed=int(seed),
    )

    c1, c2, c3 = st.columns(3)
    with c1:
        st.metric("Median Final Balance", f"{np.median(result.terminal_balance):,.4f}")
    with c2:
        st.metric("Never-Touched Balance", f"{result.linear_terminal:,.4f}")
    with c3:
        st.metric("Mean Interactions", f"{result.interaction_counts.mean():.1f}")

    st.plotly_chart(balance_fan_chart(result), use_container_width=True)
    st.plotly_chart(terminal_balance_histogram(result), use_container_width=True)
