"""Reusable Plotly chart components."""

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from rebase_token.simulation.results import AccrualSimulationResult


def growth_curve_chart(
    df: pd.DataFrame,
    title: str = "Balance Growth",
) -> go.Figure:
    """Linear vs periodically materialized balance.

    Args:
        df: DataFrame indexed by day, one column per strategy
            (as returned by ``simulate_materialization_paths``).
        title: Chart title.
    """
    fig = go.Figure()

    palette = ["#6b7280", "#3b82f6", "#22c55e", "#f59e0b", "#ef4444"]
    for i, column in enumerate(df.columns):
        fig.add_trace(
            go.Scatter(
                x=df.index,
                y=df[column],
                name=column,
                line=dict(
                    color=palette[i % len(palette)],
                    width=2,
                    dash="dash" if column == "linear" else None,
                ),
                hovertemplate="Day %{x:.0f}<br>Balance: %{y:,.4f}<extra></extra>",
            )
        )

    fig.update_layout(
        title=title,
        xaxis_title="Day",
        yaxis_title="Balance",
        hovermode="x unified",
        template="plotly_dark",
        height=450,
    )

    return fig


def balance_fan_chart(result: AccrualSimulationResult) -> go.Figure:
    """Percentile fan chart of simulated balances over time."""
    days = result.timesteps
    balances = result.balance_paths

    p5 = np.percentile(balances, 5, axis=0)
    p50 = np.percentile(balances, 50, axis=0)
    p95 = np.percentile(balances, 95, axis=0)

    fig = go.Figure()

    fig.add_trace(
        go.Scatter(
            x=np.concatenate([days, days[::-1]]),
            y=np.concatenate([p95, p5[::-1]]),
            fill="toself",
            fillcolor="rgba(59,130,246,0.15)",
            line=dict(color="rgba(0,0,0,0)"),
            name="5th-95th percentile",
            hoverinfo="skip",
        )
    )

    fig.add_trace(
        go.Scatter(
            x=days,
            y=p50,
            mode="lines",
            name="Median",
            line=dict(color="#3b82f6", width=2),
            hovertemplate="Day %{x:.0f}<br>Balance: %{y:,.4f}<extra></extra>",
        )
    )

    fig.add_hline(
        y=result.linear_terminal,
        line_dash="dash",
        line_color="#6b7280",
        annotation_text="Never touched (final)",
    )

    fig.update_layout(
        title="Balance Fan Chart",
        xaxis_title="Day",
        yaxis_title="Balance",
        template="plotly_dark",
        height=450,
    )

    return fig


def terminal_balance_histogram(result: AccrualSimulationResult) -> go.Figure:
    """Histogram of final balances with the linear baseline marked."""
    terminal = result.terminal_balance

    fig = go.Figure()

    fig.add_trace(
        go.Histogram(
            x=terminal,
            nbinsx=50,
            marker_color="#3b82f6",
            opacity=0.75,
            name="Final balance",
            hovertemplate="Balance: %{x:,.4f}<br>Count: %{y}<extra></extra>",
        )
    )

    median = float(np.median(terminal))
    fig.add_vline(x=median, line_dash="solid", line_color="#22c55e",
                  annotation_text=f"Median: {median:,.2f}")
    fig.add_vline(x=result.linear_terminal, line_dash="dash", line_color="#ef4444",
                  annotation_text=f"Linear: {result.linear_terminal:,.2f}")

    fig.update_layout(
        title="Terminal Balance Distribution",
        xaxis_title="Balance",
        yaxis_title="Count",
        template="plotly_dark",
        height=450,
    )

    return fig
