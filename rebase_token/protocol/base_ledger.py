"""Plain fungible ledger: raw balances, allowances and total supply.

Knows nothing about interest; the rebase ledger wraps it. All writes go
through the environment so a failed transaction can undo them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rebase_token.data.constants import MAX_AMOUNT, MAX_UINT256, ZERO_ADDRESS
from rebase_token.protocol.environment import Environment
from rebase_token.protocol.errors import (
    AmountOverflow,
    InsufficientAllowance,
    InsufficientBalance,
    InvalidAmount,
)
from rebase_token.protocol.events import Approval, Transfer


def check_amount(amount: int) -> int:
    """Reject values that cannot be a uint256."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmount(f"Amount must be an integer, got {amount!r}")
    if amount < 0:
        raise InvalidAmount(f"Amount must be non-negative, got {amount}")
    if amount > MAX_UINT256:
        raise AmountOverflow(f"Amount {amount} exceeds uint256")
    return amount


@dataclass
class FungibleState:
    balances: dict[str, int] = field(default_factory=dict)
    allowances: dict[tuple[str, str], int] = field(default_factory=dict)
    total_supply: int = 0


class FungibleLedger:
    """Raw-unit bookkeeping; every mutation emits the matching event."""

    def __init__(self, env: Environment, address: str) -> None:
        self.env = env
        self.address = address
        self.state = FungibleState()

    def balance_of(self, account: str) -> int:
        return self.state.balances.get(account, 0)

    def total_supply(self) -> int:
        return self.state.total_supply

    def allowance(self, owner: str, spender: str) -> int:
        return self.state.allowances.get((owner, spender), 0)

    def mint_raw(self, account: str, amount: int) -> None:
        check_amount(amount)
        new_supply = self.state.total_supply + amount
        if new_supply > MAX_UINT256:
            raise AmountOverflow(f"Total supply would reach {new_supply}")
        self.env.set_attr(self.state, "total_supply", new_supply)
        self.env.set_item(self.state.balances, account, self.balance_of(account) + amount)
        self.env.emit(Transfer(self.address, ZERO_ADDRESS, account, amount))

    def burn_raw(self, account: str, amount: int) -> None:
        check_amount(amount)
        available = self.balance_of(account)
        if amount > available:
            raise InsufficientBalance(account, available, amount)
        self.env.set_item(self.state.balances, account, available - amount)
        self.env.set_attr(self.state, "total_supply", self.state.total_supply - amount)
        self.env.emit(Transfer(self.address, account, ZERO_ADDRESS, amount))

    def move(self, sender: str, recipient: str, amount: int) -> None:
        check_amount(amount)
        available = self.balance_of(sender)
        if amount > available:
            raise InsufficientBalance(sender, available, amount)
        self.env.set_item(self.state.balances, sender, available - amount)
        self.env.set_item(self.state.balances, recipient, self.balance_of(recipient) + amount)
        self.env.emit(Transfer(self.address, sender, recipient, amount))

    def approve(self, owner: str, spender: str, amount: int) -> None:
        check_amount(amount)
        self.env.set_item(self.state.allowances, (owner, spender), amount)
        self.env.emit(Approval(self.address, owner, spender, amount))

    def spend_allowance(self, owner: str, spender: str, amount: int) -> None:
        current = self.allowance(owner, spender)
        if current == MAX_AMOUNT:
            return
        if amount > current:
            raise InsufficientAllowance(owner, spender, current, amount)
        self.env.set_item(self.state.allowances, (owner, spender), current - amount)
