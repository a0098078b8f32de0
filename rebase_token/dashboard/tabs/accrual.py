"""Accrual page: linear vs materialized growth."""

import pandas as pd
import streamlit as st

from rebase_token.dashboard.components.charts import growth_curve_chart
from rebase_token.dashboard.components.metrics_cards import format_units
from rebase_token.protocol.accrual import annual_percentage_rate
from rebase_token.simulation.accrual_paths import replay_on_ledger, simulate_materialization_paths


def render_accrual(deposit: float, rate: int, horizon_days: int) -> None:
    """Render the accrual comparison page."""
    st.header("Accrual: Linear vs Materialized")
    st.caption(
        "Balances grow linearly between interactions. Every mint, burn or "
        "transfer folds the interest into principal, so frequent interaction compounds."
    )

    intervals = st.multiselect(
        "Materialization interval (days)",
        options=[1, 7, 30, 90],
        default=[1, 30],
    )

    df = simulate_materialization_paths(deposit, rate, horizon_days, intervals)
    st.plotly_chart(growth_curve_chart(df), use_container_width=True)

    st.divider()
    st.subheader("Final Balance by Strategy")
    final = df.iloc[-1]
    rows = [
        {
            "Strategy": column,
            "Final Balance": f"{final[column]:,.6f}",
            "Gain vs Linear": f"{final[column] - final['linear']:,.6f}",
        }
        for column in df.columns
    ]
    st.table(pd.DataFrame(rows))
    st.metric("Simple APR at this rate", f"{annual_percentage_rate(rate)*100:.2f}%")

    st.divider()
    st.subheader("Ledger Replay")
    st.caption("The same schedule run through the integer ledger, one interaction per interval.")
    interval = st.selectbox("Replay interval (days)", options=[1, 7, 30, 90], index=2)
    replay = replay_on_ledger(
        principal=int(deposit * 10**18),
        rate=rate,
        interaction_days=range(interval, horizon_days + 1, interval),
        horizon_days=horizon_days,
    )
    st.dataframe(
        pd.DataFrame(
            {
                "Day": replay["day"],
                "Principal": [format_units(v) for v in replay["principal"]],
                "Balance": [format_units(v) for v in replay["balance"]],
            }
        ),
        hide_index=True,
    )
