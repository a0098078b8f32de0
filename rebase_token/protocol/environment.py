"""Serialized execution environment: clock, native currency, event log.

Every externally visible operation runs inside ``Environment.transaction()``.
Components never assign their state directly: they write through
``set_item``, ``set_attr`` and ``add_to_set``, which journal the previous
value while a transaction is open. If the body raises, the journal is
unwound back to the point the transaction started and the event log is
truncated, so rollback costs only as much as the writes it undoes.

There is no parallelism; the only hazard is reentrancy through receive
hooks, which the gateway guards against itself.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from functools import partial
from typing import Any, Callable, Hashable, Iterator, MutableMapping

from web3 import Web3

from rebase_token.protocol.errors import InsufficientNativeBalance, InvalidAmount

logger = logging.getLogger(__name__)

ReceiveHook = Callable[[str, int], None]

_MISSING = object()


def derive_address(label: str) -> str:
    """Deterministic checksummed address from a human-readable label."""
    digest = Web3.keccak(text=label)
    return Web3.to_checksum_address(digest[-20:])


# ---------------------------------------------------------------------------
# Clocks
# ---------------------------------------------------------------------------

class Clock(ABC):
    """Source of block timestamps (seconds)."""

    @abstractmethod
    def now(self) -> int:
        """Current timestamp."""


class ManualClock(Clock):
    """Test clock that only moves when told to, and never backwards."""

    def __init__(self, start: int = 1) -> None:
        self._now = start

    def now(self) -> int:
        return self._now

    def advance(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError(f"Cannot move clock backwards by {-seconds}s")
        self._now += seconds
        return self._now

    def warp(self, timestamp: int) -> int:
        if timestamp < self._now:
            raise ValueError(f"Cannot warp from {self._now} back to {timestamp}")
        self._now = timestamp
        return self._now


class SystemClock(Clock):
    """Wall-clock seconds, clamped so a clock adjustment never moves it back."""

    def __init__(self) -> None:
        self._last = 0

    def now(self) -> int:
        self._last = max(self._last, int(time.time()))
        return self._last


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

class Environment:
    """Owns the clock, native balances, receive hooks and the event log.

    Parameters
    ----------
    clock : Clock | None
        Timestamp source. Defaults to a ``ManualClock``.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self.clock = clock if clock is not None else ManualClock()
        self._journal: list[Callable[[], None]] = []
        self._depth = 0
        self._native: dict[str, int] = {}
        self._events: list[Any] = []
        self._hooks: dict[str, ReceiveHook] = {}
        self._nonce = 0

    def now(self) -> int:
        return self.clock.now()

    def new_address(self, label: str) -> str:
        """Fresh deterministic address, unique within this environment."""
        self._nonce += 1
        return derive_address(f"{label}:{self._nonce}")

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """All-or-nothing scope; nested scopes roll back independently."""
        mark = len(self._journal)
        n_events = len(self._events)
        self._depth += 1
        try:
            yield
        except BaseException:
            while len(self._journal) > mark:
                self._journal.pop()()
            del self._events[n_events:]
            raise
        finally:
            self._depth -= 1
            if self._depth == 0:
                self._journal.clear()

    def set_item(self, mapping: MutableMapping[Any, Any], key: Hashable, value: Any) -> None:
        """``mapping[key] = value``, undone on rollback."""
        if self._depth:
            self._journal.append(partial(_restore_item, mapping, key, mapping.get(key, _MISSING)))
        mapping[key] = value

    def set_attr(self, obj: Any, name: str, value: Any) -> None:
        """``setattr(obj, name, value)``, undone on rollback."""
        if self._depth:
            self._journal.append(partial(setattr, obj, name, getattr(obj, name)))
        setattr(obj, name, value)

    def add_to_set(self, target: set[Any], item: Hashable) -> None:
        """``target.add(item)``, undone on rollback."""
        if item in target:
            return
        if self._depth:
            self._journal.append(partial(target.discard, item))
        target.add(item)

    # ------------------------------------------------------------------
    # Native currency
    # ------------------------------------------------------------------

    def native_balance(self, address: str) -> int:
        return self._native.get(address, 0)

    def fund(self, address: str, amount: int) -> None:
        """Credit native currency out of thin air (genesis / test faucet)."""
        if amount < 0:
            raise InvalidAmount(f"Cannot fund a negative amount: {amount}")
        self.set_item(self._native, address, self.native_balance(address) + amount)

    def transfer_native(self, sender: str, recipient: str, amount: int) -> None:
        """Payable-style value transfer; raises on insufficient funds."""
        if amount < 0:
            raise InvalidAmount(f"Cannot transfer a negative amount: {amount}")
        available = self.native_balance(sender)
        if amount > available:
            raise InsufficientNativeBalance(sender, available, amount)
        self.set_item(self._native, sender, available - amount)
        self.set_item(self._native, recipient, self.native_balance(recipient) + amount)

    def set_receive_hook(self, address: str, hook: ReceiveHook | None) -> None:
        """Install code that runs when ``address`` receives a payout."""
        if hook is None:
            self._hooks.pop(address, None)
        else:
            self._hooks[address] = hook

    def send_native(self, sender: str, recipient: str, amount: int) -> bool:
        """Low-level payout: credit, run the recipient's hook, report success.

        Any failure is rolled back and reported as ``False`` rather than
        raised, so the caller decides whether to abort.
        """
        try:
            with self.transaction():
                self.transfer_native(sender, recipient, amount)
                hook = self._hooks.get(recipient)
                if hook is not None:
                    hook(sender, amount)
        except Exception:
            logger.warning(
                "Native payout of %d from %s to %s failed",
                amount, sender, recipient, exc_info=True,
            )
            return False
        return True

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def emit(self, event: Any) -> None:
        self._events.append(event)

    @property
    def events(self) -> tuple[Any, ...]:
        return tuple(self._events)

    def events_of(self, event_type: type) -> list[Any]:
        return [e for e in self._events if isinstance(e, event_type)]


def _restore_item(mapping: MutableMapping[Any, Any], key: Hashable, old: Any) -> None:
    if old is _MISSING:
        mapping.pop(key, None)
    else:
        mapping[key] = old
