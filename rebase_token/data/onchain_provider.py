"""On-chain data provider reading a deployed rebase token via web3.py."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from web3 import Web3

from rebase_token.data.contracts import REBASE_TOKEN_ABI
from rebase_token.data.interfaces import LedgerDataProvider

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# TTL cache
# ---------------------------------------------------------------------------

class _TTLCache:
    """Simple dict-based cache with per-entry TTL expiry."""

    def __init__(self, ttl: float) -> None:
        self._ttl = ttl
        self._store: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Any | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        ts, value = entry
        if time.monotonic() - ts > self._ttl:
            del self._store[key]
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        self._store[key] = (time.monotonic(), value)

    def clear(self) -> None:
        self._store.clear()


# ---------------------------------------------------------------------------
# OnChainDataProvider
# ---------------------------------------------------------------------------

class OnChainDataProvider(LedgerDataProvider):
    """Live reads from a deployed rebase token.

    Parameters
    ----------
    rpc_url : str
        JSON-RPC endpoint URL.
    token_address : str
        Address of the deployed rebase token.
    cache_ttl : float
        Seconds before a cached value expires (default 15). Balances grow
        every second, so keep this short.
    fallback : LedgerDataProvider | None
        Optional provider used when an RPC call fails.
    """

    def __init__(
        self,
        rpc_url: str,
        token_address: str,
        cache_ttl: float = 15.0,
        fallback: LedgerDataProvider | None = None,
    ) -> None:
        self._w3 = Web3(Web3.HTTPProvider(rpc_url))
        self._cache = _TTLCache(cache_ttl)
        self._fallback = fallback

        # No RPC calls here
        self._token = self._w3.eth.contract(
            address=self._w3.to_checksum_address(token_address),
            abi=REBASE_TOKEN_ABI,
        )

    def _checksum(self, account: str) -> str:
        return self._w3.to_checksum_address(account)

    def _call_with_fallback(
        self,
        cache_key: str,
        fetcher: Callable[[], Any],
        fallback_method: Callable[..., Any] | None,
        *fallback_args: Any,
    ) -> Any:
        """Cache → RPC → fallback pipeline."""
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            value = fetcher()
            self._cache.set(cache_key, value)
            return value
        except Exception:
            logger.warning(
                "RPC call failed for key=%s, using fallback", cache_key, exc_info=True
            )

        if fallback_method is not None:
            return fallback_method(*fallback_args)

        raise RuntimeError(f"RPC call failed and no fallback available for {cache_key}")

    # ------------------------------------------------------------------
    # LedgerDataProvider interface
    # ------------------------------------------------------------------

    def get_global_rate(self) -> int:
        fb = self._fallback.get_global_rate if self._fallback else None
        return self._call_with_fallback(
            "global_rate", lambda: int(self._token.functions.getInterestRate().call()), fb
        )

    def get_account_rate(self, account: str) -> int:
        def _fetch() -> int:
            return int(self._token.functions.getUserInterestRate(self._checksum(account)).call())

        fb = self._fallback.get_account_rate if self._fallback else None
        return self._call_with_fallback(f"account_rate:{account}", _fetch, fb, account)

    def balance_of(self, account: str) -> int:
        def _fetch() -> int:
            return int(self._token.functions.balanceOf(self._checksum(account)).call())

        fb = self._fallback.balance_of if self._fallback else None
        return self._call_with_fallback(f"balance:{account}", _fetch, fb, account)

    def principal_balance_of(self, account: str) -> int:
        def _fetch() -> int:
            return int(
                self._token.functions.principalBalanceOf(self._checksum(account)).call()
            )

        fb = self._fallback.principal_balance_of if self._fallback else None
        return self._call_with_fallback(f"principal:{account}", _fetch, fb, account)

    def total_supply(self) -> int:
        fb = self._fallback.total_supply if self._fallback else None
        return self._call_with_fallback(
            "total_supply", lambda: int(self._token.functions.totalSupply().call()), fb
        )

    # ------------------------------------------------------------------
    # Cache management
    # ------------------------------------------------------------------

    def refresh(self) -> None:
        """Invalidate all cached values, forcing fresh RPC calls."""
        self._cache.clear()

    @property
    def is_connected(self) -> bool:
        try:
            return self._w3.is_connected()
        except Exception:
            return False
