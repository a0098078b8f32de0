"""Exception hierarchy for ledger and gateway failures.

Every failure aborts the enclosing transaction; nothing here is caught
and recovered inside the core.
"""

from __future__ import annotations


class RebaseTokenError(Exception):
    """Base class for all ledger and gateway failures."""


class RateChangeRejected(RebaseTokenError):
    """Global rate update violates the configured direction."""

    def __init__(self, current_rate: int, new_rate: int, policy: str) -> None:
        self.current_rate = current_rate
        self.new_rate = new_rate
        self.policy = policy
        super().__init__(
            f"rate change {current_rate} -> {new_rate} rejected by {policy} policy"
        )


class InsufficientBalance(RebaseTokenError):
    """Burn or transfer exceeds the account's balance after materialization."""

    def __init__(self, account: str, available: int, requested: int) -> None:
        self.account = account
        self.available = available
        self.requested = requested
        super().__init__(
            f"{account} has {available}, requested {requested}"
        )


class InsufficientAllowance(RebaseTokenError):
    """Delegated transfer exceeds the spender's allowance."""

    def __init__(self, owner: str, spender: str, allowance: int, requested: int) -> None:
        self.owner = owner
        self.spender = spender
        self.allowance = allowance
        self.requested = requested
        super().__init__(
            f"{spender} may spend {allowance} of {owner}, requested {requested}"
        )


class RedeemTransferFailed(RebaseTokenError):
    """Native-currency payout could not be delivered."""

    def __init__(self, recipient: str, amount: int) -> None:
        self.recipient = recipient
        self.amount = amount
        super().__init__(f"payout of {amount} to {recipient} failed")


class UnauthorizedCaller(RebaseTokenError):
    """Restricted operation invoked by an identity without the needed role."""

    def __init__(self, caller: str, action: str) -> None:
        self.caller = caller
        self.action = action
        super().__init__(f"{caller} is not authorized to {action}")


class ReentrantCall(RebaseTokenError):
    """A guarded operation was re-entered before it finished."""


class InsufficientNativeBalance(RebaseTokenError):
    """Native-currency debit exceeds the sender's holdings."""

    def __init__(self, account: str, available: int, requested: int) -> None:
        self.account = account
        self.available = available
        self.requested = requested
        super().__init__(
            f"{account} holds {available} native, requested {requested}"
        )


class AmountOverflow(RebaseTokenError):
    """Result would not fit the 256-bit unsigned representation."""


class InvalidAmount(RebaseTokenError, ValueError):
    """Amount is negative or not an integer."""
