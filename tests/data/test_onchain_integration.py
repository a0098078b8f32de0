"""Live on-chain integration tests; require ETH_RPC_URL and REBASE_TOKEN_ADDRESS."""

from __future__ import annotations

import os

import pytest

from rebase_token.data.onchain_provider import OnChainDataProvider

pytestmark = pytest.mark.onchain

RPC_URL = os.environ.get("ETH_RPC_URL", "")
TOKEN_ADDRESS = os.environ.get("REBASE_TOKEN_ADDRESS", "")

if not RPC_URL or not TOKEN_ADDRESS:
    pytest.skip("ETH_RPC_URL or REBASE_TOKEN_ADDRESS not set", allow_module_level=True)

ZERO = "0x0000000000000000000000000000000000000000"


@pytest.fixture(scope="module")
def provider() -> OnChainDataProvider:
    return OnChainDataProvider(rpc_url=RPC_URL, token_address=TOKEN_ADDRESS, cache_ttl=300.0)


class TestConnection:
    def test_is_connected(self, provider: OnChainDataProvider):
        assert provider.is_connected is True


class TestReads:
    def test_global_rate(self, provider: OnChainDataProvider):
        assert provider.get_global_rate() >= 0

    def test_total_supply(self, provider: OnChainDataProvider):
        assert provider.total_supply() >= 0

    def test_balance_at_least_principal(self, provider: OnChainDataProvider):
        assert provider.balance_of(ZERO) >= provider.principal_balance_of(ZERO)
