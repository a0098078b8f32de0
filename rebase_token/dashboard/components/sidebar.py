"""Sidebar parameter controls."""

from dataclasses import dataclass

import streamlit as st

from rebase_token.data.constants import DEFAULT_INTEREST_RATE


@dataclass
class SidebarParams:
    """User-controlled parameters from the sidebar."""

    deposit_amount: float
    rate: int
    elapsed_days: int
    horizon_days: int
    account: str | None


def render_sidebar(live_rate: int | None = None) -> SidebarParams:
    """Render sidebar controls and return selected parameters.

    Parameters
    ----------
    live_rate : int | None
        If provided, used as the default rate (from on-chain).
    """
    # "Data Source" header and on-chain toggle are rendered in app.py.

    st.sidebar.header("Deposit")

    deposit = st.sidebar.number_input(
        "Deposit (native units)",
        min_value=0.0,
        value=10.0,
        step=1.0,
        format="%.2f",
    )

    elapsed = st.sidebar.slider(
        "Days since last interaction",
        min_value=0,
        max_value=365,
        value=30,
    )

    st.sidebar.header("Interest Rate")

    default_rate = live_rate if live_rate is not None else DEFAULT_INTEREST_RATE
    rate = int(
        st.sidebar.number_input(
            "Rate per second (1e18 fixed point)",
            min_value=0,
            value=int(default_rate),
            step=int(1e9),
        )
    )
    if live_rate is not None:
        st.sidebar.caption(f"Default from chain: {live_rate}")

    horizon = st.sidebar.slider(
        "Projection horizon (days)",
        min_value=7,
        max_value=730,
        value=365,
        step=7,
    )

    account = st.sidebar.text_input("Inspect on-chain account", value="").strip() or None

    return SidebarParams(
        deposit_amount=deposit,
        rate=rate,
        elapsed_days=elapsed,
        horizon_days=horizon,
        account=account,
    )
