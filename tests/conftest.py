"""Shared fixtures: a fresh environment with a deployed ledger and vault."""

import pytest

from rebase_token.data.config import LedgerConfig
from rebase_token.data.constants import DEFAULT_INTEREST_RATE
from rebase_token.protocol.environment import Environment, ManualClock
from rebase_token.protocol.gateway import Vault, deploy
from rebase_token.protocol.ledger import RebaseLedger

ONE = 10**18


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(start=1_000)


@pytest.fixture
def env(clock: ManualClock) -> Environment:
    return Environment(clock)


@pytest.fixture
def owner(env: Environment) -> str:
    return env.new_address("owner")


@pytest.fixture
def alice(env: Environment) -> str:
    address = env.new_address("alice")
    env.fund(address, 1_000 * ONE)
    return address


@pytest.fixture
def bob(env: Environment) -> str:
    address = env.new_address("bob")
    env.fund(address, 1_000 * ONE)
    return address


@pytest.fixture
def deployment(env: Environment, owner: str) -> tuple[RebaseLedger, Vault]:
    return deploy(env, owner, LedgerConfig(initial_rate=DEFAULT_INTEREST_RATE))


@pytest.fixture
def ledger(deployment: tuple[RebaseLedger, Vault]) -> RebaseLedger:
    return deployment[0]


@pytest.fixture
def vault(deployment: tuple[RebaseLedger, Vault]) -> Vault:
    return deployment[1]
