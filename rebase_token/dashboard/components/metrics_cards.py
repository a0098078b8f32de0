"""Metric cards for raw fixed-point token amounts."""

import streamlit as st

from rebase_token.data.constants import TOKEN_DECIMALS


def format_units(amount: int, decimals: int = TOKEN_DECIMALS, places: int = 6) -> str:
    """Render a raw integer amount in whole-token units."""
    return f"{amount / 10**decimals:,.{places}f}"


def amount_card(label: str, amount: int, baseline: int | None = None) -> None:
    """Token amount, with the change against ``baseline`` as the delta."""
    delta = None
    if baseline is not None and amount != baseline:
        delta = f"{'+' if amount > baseline else '-'}{format_units(abs(amount - baseline))}"
    st.metric(label=label, value=format_units(amount), delta=delta)


def kpi_row(cards: dict[str, int | str]) -> None:
    """One column per card; ints are raw token amounts, strings shown as-is."""
    for col, (label, value) in zip(st.columns(len(cards)), cards.items()):
        with col:
            if isinstance(value, int):
                amount_card(label, value)
            else:
                st.metric(label=label, value=value)
