"""Rebase Token Dashboard: Main Streamlit entry point."""

import os
from dataclasses import replace
from pathlib import Path

import streamlit as st

# Load .env file if present (for ETH_RPC_URL, REBASE_TOKEN_ADDRESS, etc.)
_env_path = Path(__file__).resolve().parents[2] / ".env"
if _env_path.exists():
    for line in _env_path.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#") and "=" in line:
            key, _, value = line.partition("=")
            os.environ.setdefault(key.strip(), value.strip())

from rebase_token.dashboard.components.sidebar import render_sidebar
from rebase_token.dashboard.tabs.accrual import render_accrual
from rebase_token.dashboard.tabs.overview import render_overview
from rebase_token.dashboard.tabs.simulations import render_simulations
from rebase_token.data.config import LedgerConfig
from rebase_token.data.constants import SECONDS_PER_DAY
from rebase_token.data.provider_factory import create_provider
from rebase_token.data.onchain_provider import OnChainDataProvider
from rebase_token.position.holder import HolderPosition
from rebase_token.protocol.environment import Environment, ManualClock
from rebase_token.protocol.gateway import deploy


def _demo_ledger(deposit: float, rate: int, elapsed_days: int):
    """Local ledger with one holder who deposited ``elapsed_days`` ago."""
    clock = ManualClock()
    env = Environment(clock)
    owner = env.new_address("owner")
    holder = env.new_address("holder")
    config = replace(LedgerConfig.from_env(), initial_rate=rate)
    ledger, vault = deploy(env, owner, config)

    amount = int(deposit * 10**ledger.decimals)
    env.fund(holder, amount)
    vault.deposit(holder, amount)
    clock.advance(elapsed_days * SECONDS_PER_DAY)
    return ledger, holder


def main() -> None:
    st.set_page_config(
        page_title="Rebase Token Dashboard",
        page_icon="📈",
        layout="wide",
    )

    st.title("Rebase Token Dashboard")
    st.caption("Interest accrual, materialization and custody")

    st.sidebar.header("Data Source")
    use_onchain = st.sidebar.checkbox("Use On-Chain Data", value=False, key="use_onchain")

    params = render_sidebar()
    ledger, demo_holder = _demo_ledger(params.deposit_amount, params.rate, params.elapsed_days)
    provider = create_provider(ledger, use_onchain=use_onchain)

    if use_onchain:
        if isinstance(provider, OnChainDataProvider):
            if provider.is_connected:
                st.sidebar.success("On-chain: connected")
            else:
                st.sidebar.error("On-chain: cannot reach RPC endpoint")
            if st.sidebar.button("Refresh On-Chain Data"):
                provider.refresh()
                st.rerun()
        else:
            st.sidebar.error("Fell back to local ledger (set ETH_RPC_URL and REBASE_TOKEN_ADDRESS)")

    account = params.account if use_onchain and params.account else demo_holder
    position = HolderPosition(account)

    tab1, tab2, tab3 = st.tabs(["Holder Overview", "Accrual", "Simulations"])

    with tab1:
        render_overview(position, provider, params.horizon_days)

    with tab2:
        render_accrual(params.deposit_amount, params.rate, params.horizon_days)

    with tab3:
        render_simulations(params.deposit_amount, params.rate, params.horizon_days)


if __name__ == "__main__":
    main()
