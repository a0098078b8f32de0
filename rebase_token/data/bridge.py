"""Cross-chain route registration for a burn/mint token pool.

Builds the ``applyChainUpdates`` payload that permits moving ledger units
to a remote chain, with inbound/outbound rate limits. Nothing here sends
a transaction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from web3 import Web3

from rebase_token.data.contracts import TOKEN_POOL_ABI

_UINT64_MAX = 2**64 - 1
_UINT128_MAX = 2**128 - 1


@dataclass(frozen=True)
class RateLimiterConfig:
    """Token-bucket limiter: ``capacity`` tokens, refilled at ``rate``/second."""

    is_enabled: bool = False
    capacity: int = 0
    rate: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.capacity <= _UINT128_MAX or not 0 <= self.rate <= _UINT128_MAX:
            raise ValueError("capacity and rate must fit in uint128")
        if self.is_enabled:
            if self.rate == 0 or self.rate > self.capacity:
                raise ValueError(
                    f"Enabled limiter needs 0 < rate <= capacity; got rate={self.rate}, "
                    f"capacity={self.capacity}"
                )
        elif self.capacity or self.rate:
            raise ValueError("Disabled limiter must have zero capacity and rate")

    def as_abi_tuple(self) -> tuple[bool, int, int]:
        return (self.is_enabled, self.capacity, self.rate)


@dataclass(frozen=True)
class ChainUpdate:
    """One permitted route to a remote chain."""

    remote_chain_selector: int
    remote_pool_addresses: tuple[bytes, ...]
    remote_token_address: bytes
    outbound: RateLimiterConfig
    inbound: RateLimiterConfig

    def as_abi_tuple(self) -> tuple[Any, ...]:
        return (
            self.remote_chain_selector,
            list(self.remote_pool_addresses),
            self.remote_token_address,
            self.outbound.as_abi_tuple(),
            self.inbound.as_abi_tuple(),
        )


def encode_address(address: str) -> bytes:
    """ABI-encode an address as a single left-padded 32-byte word."""
    if not Web3.is_address(address):
        raise ValueError(f"Not an address: {address}")
    raw = Web3.to_bytes(hexstr=address)
    return bytes(32 - len(raw)) + raw


def build_chain_update(
    remote_chain_selector: int,
    remote_pool_address: str,
    remote_token_address: str,
    outbound: RateLimiterConfig | None = None,
    inbound: RateLimiterConfig | None = None,
) -> ChainUpdate:
    """Assemble a route; limiters default to disabled."""
    if not 0 < remote_chain_selector <= _UINT64_MAX:
        raise ValueError(f"Chain selector out of uint64 range: {remote_chain_selector}")
    return ChainUpdate(
        remote_chain_selector=remote_chain_selector,
        remote_pool_addresses=(encode_address(remote_pool_address),),
        remote_token_address=encode_address(remote_token_address),
        outbound=outbound or RateLimiterConfig(),
        inbound=inbound or RateLimiterConfig(),
    )


def build_apply_chain_updates_tx(
    w3: Web3,
    pool_address: str,
    updates: list[ChainUpdate],
    sender: str,
    remove_selectors: list[int] | None = None,
) -> dict[str, Any]:
    """Build (not sign or send) the ``applyChainUpdates`` transaction."""
    pool = w3.eth.contract(address=w3.to_checksum_address(pool_address), abi=TOKEN_POOL_ABI)
    return pool.functions.applyChainUpdates(
        remove_selectors or [],
        [u.as_abi_tuple() for u in updates],
    ).build_transaction({"from": w3.to_checksum_address(sender)})
