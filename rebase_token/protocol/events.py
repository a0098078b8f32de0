"""Event records emitted into the environment's log."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Transfer:
    """Principal movement. Mints come from, and burns go to, the zero address."""

    emitter: str
    sender: str
    recipient: str
    value: int


@dataclass(frozen=True)
class Approval:
    emitter: str
    owner: str
    spender: str
    value: int


@dataclass(frozen=True)
class InterestRateSet:
    emitter: str
    new_rate: int


@dataclass(frozen=True)
class RoleGranted:
    emitter: str
    role: str
    account: str
    granted_by: str


@dataclass(frozen=True)
class OwnershipTransferred:
    emitter: str
    previous_owner: str
    new_owner: str


@dataclass(frozen=True)
class Deposit:
    emitter: str
    user: str
    amount: int


@dataclass(frozen=True)
class Redeem:
    emitter: str
    user: str
    amount: int


@dataclass(frozen=True)
class RewardsReceived:
    emitter: str
    sender: str
    amount: int
