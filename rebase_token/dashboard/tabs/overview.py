"""Holder Overview page: KPI cards for one account."""

import streamlit as st

from rebase_token.dashboard.components.metrics_cards import amount_card, format_units, kpi_row
from rebase_token.data.constants import SECONDS_PER_DAY
from rebase_token.data.interfaces import LedgerDataProvider
from rebase_token.position.holder import HolderPosition


def render_overview(
    position: HolderPosition,
    provider: LedgerDataProvider,
    horizon_days: int,
) -> None:
    """Render the holder overview page."""
    st.header("Holder Overview")
    st.caption(f"Account `{position.account}`")

    balance = position.effective_balance(provider)
    principal = position.principal(provider)
    pending = position.pending_interest(provider)
    projected = position.projected_balance(provider, horizon_days * SECONDS_PER_DAY)

    kpi_row(
        {
            "Principal": principal,
            "Pending Interest": pending,
            "APR (simple)": f"{position.apr(provider)*100:.2f}%",
        }
    )
    amount_card("Balance", balance, baseline=principal)

    st.divider()

    kpi_row(
        {
            "Daily Interest": position.daily_interest(provider),
            f"Balance in {horizon_days}d": projected,
            "Account Rate": str(position.rate(provider)),
        }
    )

    summary = provider.get_ledger_summary()
    st.info(
        f"Global rate: **{summary.global_rate}** · "
        f"Total principal: **{format_units(summary.total_supply)}**"
    )
