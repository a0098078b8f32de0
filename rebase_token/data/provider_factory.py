"""Factory for creating the appropriate LedgerDataProvider."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from rebase_token.data.interfaces import LedgerDataProvider
from rebase_token.data.local_provider import LocalDataProvider

if TYPE_CHECKING:
    from rebase_token.protocol.ledger import RebaseLedger

logger = logging.getLogger(__name__)


def create_provider(
    ledger: RebaseLedger,
    use_onchain: bool = False,
    rpc_url: str | None = None,
    token_address: str | None = None,
    cache_ttl: float = 15.0,
) -> LedgerDataProvider:
    """Create a data provider, selecting local or on-chain.

    Parameters
    ----------
    ledger : RebaseLedger
        In-process ledger backing the local provider and the fallback.
    use_onchain : bool
        If True, attempt to create an ``OnChainDataProvider``.
    rpc_url : str | None
        JSON-RPC URL. Falls back to the ``ETH_RPC_URL`` environment variable.
    token_address : str | None
        Deployed token. Falls back to ``REBASE_TOKEN_ADDRESS``.
    cache_ttl : float
        TTL in seconds for the on-chain cache.

    Returns
    -------
    LedgerDataProvider
        ``OnChainDataProvider`` when requested and configured, otherwise
        ``LocalDataProvider``.
    """
    local = LocalDataProvider(ledger)
    if not use_onchain:
        return local

    resolved_url = rpc_url or os.environ.get("ETH_RPC_URL")
    resolved_token = token_address or os.environ.get("REBASE_TOKEN_ADDRESS")
    if not resolved_url or not resolved_token:
        logger.warning(
            "On-chain data requested but RPC URL or token address missing; using local ledger"
        )
        return local

    from rebase_token.data.onchain_provider import OnChainDataProvider

    try:
        return OnChainDataProvider(
            rpc_url=resolved_url,
            token_address=resolved_token,
            cache_ttl=cache_ttl,
            fallback=local,
        )
    except Exception:
        logger.warning("Failed to create OnChainDataProvider; using local ledger", exc_info=True)
        return local
