"""Tests for the execution environment."""

from dataclasses import dataclass, field
from unittest.mock import patch

import pytest

from rebase_token.protocol.environment import (
    Environment,
    ManualClock,
    SystemClock,
    derive_address,
)
from rebase_token.protocol.errors import InsufficientNativeBalance, InvalidAmount


@dataclass
class _CounterState:
    value: int = 0
    tags: dict[object, int] = field(default_factory=dict)
    members: set[str] = field(default_factory=set)


class TestClocks:
    def test_manual_clock_advances(self) -> None:
        clock = ManualClock(start=10)
        assert clock.advance(5) == 15
        assert clock.warp(100) == 100
        assert clock.now() == 100

    def test_manual_clock_never_goes_back(self) -> None:
        clock = ManualClock(start=10)
        with pytest.raises(ValueError):
            clock.advance(-1)
        with pytest.raises(ValueError):
            clock.warp(9)
        assert clock.now() == 10

    def test_system_clock_is_int(self) -> None:
        assert isinstance(SystemClock().now(), int)

    def test_system_clock_ignores_wall_clock_steps_back(self) -> None:
        clock = SystemClock()
        steps = [1_000.5, 990.0, 1_002.0]
        with patch("rebase_token.protocol.environment.time.time", side_effect=steps):
            assert clock.now() == 1_000
            assert clock.now() == 1_000
            assert clock.now() == 1_002


class TestAddresses:
    def test_derive_is_deterministic_and_checksummed(self) -> None:
        a = derive_address("alice")
        assert a == derive_address("alice")
        assert a != derive_address("bob")
        assert a.startswith("0x") and len(a) == 42

    def test_new_address_unique(self) -> None:
        env = Environment()
        assert env.new_address("x") != env.new_address("x")


class TestTransaction:
    def test_commit(self) -> None:
        env = Environment()
        state = _CounterState()
        with env.transaction():
            env.set_attr(state, "value", 5)
            env.emit("event")
        assert state.value == 5
        assert env.events == ("event",)
        assert env._journal == []

    def test_rollback_restores_everything(self) -> None:
        env = Environment()
        state = _CounterState(tags={"kept": 1})
        env.fund("a", 10)

        with pytest.raises(RuntimeError):
            with env.transaction():
                env.set_attr(state, "value", 5)
                env.set_item(state.tags, "kept", 2)
                env.set_item(state.tags, "new", 3)
                env.add_to_set(state.members, "m")
                env.transfer_native("a", "b", 4)
                env.emit("event")
                raise RuntimeError("abort")

        assert state.value == 0
        assert state.tags == {"kept": 1}
        assert state.members == set()
        assert env.native_balance("a") == 10
        assert "b" not in env._native
        assert env.events == ()

    def test_nested_rollback_keeps_outer_changes(self) -> None:
        env = Environment()
        state = _CounterState()
        with env.transaction():
            env.set_attr(state, "value", 1)
            with pytest.raises(KeyError):
                with env.transaction():
                    env.set_attr(state, "value", 2)
                    env.set_item(state.tags, "inner", 1)
                    raise KeyError("inner")
            assert state.value == 1
            assert state.tags == {}
        assert state.value == 1

    def test_outer_rollback_undoes_committed_inner(self) -> None:
        env = Environment()
        state = _CounterState()
        with pytest.raises(RuntimeError):
            with env.transaction():
                with env.transaction():
                    env.set_attr(state, "value", 7)
                raise RuntimeError("abort")
        assert state.value == 0

    def test_writes_outside_transaction_are_not_journaled(self) -> None:
        env = Environment()
        state = _CounterState()
        env.set_attr(state, "value", 3)
        assert state.value == 3
        assert env._journal == []

    def test_journal_tracks_only_touched_keys(self) -> None:
        env = Environment()
        small = _CounterState(tags={i: i for i in range(2)})
        large = _CounterState(tags={i: i for i in range(10_000)})
        sizes = []
        for state in (small, large):
            with env.transaction():
                env.set_item(state.tags, 0, -1)
                env.set_item(state.tags, 1, -1)
                sizes.append(len(env._journal))
        assert sizes == [2, 2]


class TestNativeCurrency:
    def test_transfer(self) -> None:
        env = Environment()
        env.fund("a", 10)
        env.transfer_native("a", "b", 3)
        assert env.native_balance("a") == 7
        assert env.native_balance("b") == 3

    def test_insufficient(self) -> None:
        env = Environment()
        env.fund("a", 1)
        with pytest.raises(InsufficientNativeBalance):
            env.transfer_native("a", "b", 2)

    def test_negative_rejected(self) -> None:
        env = Environment()
        with pytest.raises(InvalidAmount):
            env.fund("a", -1)

    def test_send_native_success_runs_hook(self) -> None:
        env = Environment()
        env.fund("a", 10)
        received: list[tuple[str, int]] = []
        env.set_receive_hook("b", lambda sender, amount: received.append((sender, amount)))
        assert env.send_native("a", "b", 4) is True
        assert received == [("a", 4)]
        assert env.native_balance("b") == 4

    def test_send_native_failure_reports_false(self) -> None:
        env = Environment()
        env.fund("a", 10)

        def boom(sender: str, amount: int) -> None:
            env.emit("from hook")
            raise RuntimeError("no thanks")

        env.set_receive_hook("b", boom)
        assert env.send_native("a", "b", 4) is False
        assert env.native_balance("a") == 10
        assert env.native_balance("b") == 0
        assert env.events == ()

    def test_send_native_insufficient_reports_false(self) -> None:
        env = Environment()
        assert env.send_native("a", "b", 1) is False
