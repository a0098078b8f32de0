"""Interest-bearing rebase ledger.

Balances are never stored: ``balance_of`` scales the raw principal by the
account's accrued factor on every read. Every principal mutation (mint,
burn, transfer) first materializes pending interest, folding it into
principal and restarting the account's accrual clock.

Two deliberate behaviours worth knowing about:

* ``mint`` overwrites the account's rate snapshot with the current global
  rate every time, so a returning depositor loses a better locked-in rate.
* A transfer into an account with zero balance hands it the sender's rate
  snapshot; an account that already holds a balance keeps its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from web3 import Web3

from rebase_token.data.config import LedgerConfig
from rebase_token.data.constants import MAX_AMOUNT
from rebase_token.protocol import accrual
from rebase_token.protocol.base_ledger import FungibleLedger, check_amount
from rebase_token.protocol.environment import Environment
from rebase_token.protocol.errors import RateChangeRejected, UnauthorizedCaller
from rebase_token.protocol.events import (
    InterestRateSet,
    OwnershipTransferred,
    RoleGranted,
)

logger = logging.getLogger(__name__)

MINT_AND_BURN_ROLE = Web3.to_hex(Web3.keccak(text="MINT_AND_BURN_ROLE"))


@dataclass
class AccrualRecord:
    """Per-account accrual inputs; principal lives in the base ledger."""

    rate: int = 0
    last_updated: int = 0


@dataclass
class LedgerState:
    global_rate: int
    owner: str
    accounts: dict[str, AccrualRecord] = field(default_factory=dict)
    minters: set[str] = field(default_factory=set)


@dataclass(frozen=True)
class AccountSnapshot:
    """Read-only view of one account at a point in time."""

    principal: int
    rate_snapshot: int
    last_updated: int
    balance: int

    @property
    def pending_interest(self) -> int:
        return self.balance - self.principal


class RebaseLedger:
    """Rebase token wrapping a plain fungible ledger.

    Parameters
    ----------
    env : Environment
        Execution environment supplying time, transactions and the event log.
    owner : str
        Admin identity; may change the rate and grant the mint/burn role.
    config : LedgerConfig | None
        Token metadata, initial rate and rate-change policy.
    address : str | None
        Ledger address. A fresh one is derived when omitted.
    """

    def __init__(
        self,
        env: Environment,
        owner: str,
        config: LedgerConfig | None = None,
        address: str | None = None,
    ) -> None:
        self.env = env
        self.config = config if config is not None else LedgerConfig()
        self.address = address or env.new_address(f"{self.config.symbol}-ledger")
        self._base = FungibleLedger(env, self.address)
        self.state = LedgerState(global_rate=self.config.initial_rate, owner=owner)

    # ------------------------------------------------------------------
    # Metadata and plain accessors
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def symbol(self) -> str:
        return self.config.symbol

    @property
    def decimals(self) -> int:
        return self.config.decimals

    @property
    def owner(self) -> str:
        return self.state.owner

    def get_global_rate(self) -> int:
        return self.state.global_rate

    def get_account_rate(self, account: str) -> int:
        record = self.state.accounts.get(account)
        return record.rate if record is not None else 0

    def principal_balance_of(self, account: str) -> int:
        return self._base.balance_of(account)

    def balance_of(self, account: str) -> int:
        """Principal plus interest accrued since the last materialization."""
        principal = self._base.balance_of(account)
        record = self.state.accounts.get(account)
        if record is None:
            return principal
        return accrual.effective_balance(
            principal, record.rate, record.last_updated, self.env.now()
        )

    def total_supply(self) -> int:
        """Sum of principal; unmaterialized interest is not counted."""
        return self._base.total_supply()

    def allowance(self, owner: str, spender: str) -> int:
        return self._base.allowance(owner, spender)

    def account(self, account: str) -> AccountSnapshot:
        record = self.state.accounts.get(account, AccrualRecord())
        return AccountSnapshot(
            principal=self.principal_balance_of(account),
            rate_snapshot=record.rate,
            last_updated=record.last_updated,
            balance=self.balance_of(account),
        )

    # ------------------------------------------------------------------
    # Access control
    # ------------------------------------------------------------------

    def _require_owner(self, caller: str, action: str) -> None:
        if caller != self.state.owner:
            raise UnauthorizedCaller(caller, action)

    def _require_minter(self, caller: str, action: str) -> None:
        if caller not in self.state.minters:
            raise UnauthorizedCaller(caller, action)

    def has_mint_and_burn_role(self, account: str) -> bool:
        return account in self.state.minters

    def grant_mint_and_burn_role(self, account: str, *, caller: str) -> None:
        with self.env.transaction():
            self._require_owner(caller, "grant the mint and burn role")
            if account not in self.state.minters:
                self.env.add_to_set(self.state.minters, account)
                self.env.emit(RoleGranted(self.address, MINT_AND_BURN_ROLE, account, caller))
        logger.info("Granted mint/burn role to %s", account)

    def transfer_ownership(self, new_owner: str, *, caller: str) -> None:
        with self.env.transaction():
            self._require_owner(caller, "transfer ownership")
            previous = self.state.owner
            self.env.set_attr(self.state, "owner", new_owner)
            self.env.emit(OwnershipTransferred(self.address, previous, new_owner))
        logger.info("Ownership transferred from %s to %s", previous, new_owner)

    def set_global_rate(self, new_rate: int, *, caller: str) -> None:
        """Change the rate handed to future snapshots.

        Existing snapshots are untouched. The allowed direction comes from
        ``config.rate_policy``.
        """
        with self.env.transaction():
            self._require_owner(caller, "set the interest rate")
            check_amount(new_rate)
            current = self.state.global_rate
            policy = self.config.rate_policy
            if not policy.allows(current, new_rate):
                raise RateChangeRejected(current, new_rate, policy.value)
            self.env.set_attr(self.state, "global_rate", new_rate)
            self.env.emit(InterestRateSet(self.address, new_rate))
        logger.info("Global interest rate %d -> %d", current, new_rate)

    # ------------------------------------------------------------------
    # Accrual
    # ------------------------------------------------------------------

    def _materialize(self, account: str) -> int:
        """Fold pending interest into principal and restart the clock."""
        previous_principal = self._base.balance_of(account)
        delta = self.balance_of(account) - previous_principal
        record = self.state.accounts.get(account)
        if record is None:
            record = AccrualRecord()
            self.env.set_item(self.state.accounts, account, record)
        self.env.set_attr(record, "last_updated", self.env.now())
        if delta > 0:
            self._base.mint_raw(account, delta)
            logger.debug("Materialized %d interest for %s", delta, account)
        return delta

    # ------------------------------------------------------------------
    # Mint / burn (restricted)
    # ------------------------------------------------------------------

    def mint(self, account: str, amount: int, *, caller: str) -> None:
        with self.env.transaction():
            self._require_minter(caller, "mint")
            check_amount(amount)
            self._materialize(account)
            # Unconditional: repeat depositors are moved to the current rate.
            self.env.set_attr(self.state.accounts[account], "rate", self.state.global_rate)
            self._base.mint_raw(account, amount)

    def burn(self, account: str, amount: int, *, caller: str) -> int:
        """Burn ``amount`` (or the whole balance for ``MAX_AMOUNT``).

        Returns the amount actually burned.
        """
        with self.env.transaction():
            self._require_minter(caller, "burn")
            check_amount(amount)
            if amount == MAX_AMOUNT:
                amount = self.balance_of(account)
            self._materialize(account)
            self._base.burn_raw(account, amount)
        return amount

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------

    def _prepare_transfer(self, sender: str, recipient: str, amount: int) -> int:
        check_amount(amount)
        self._materialize(sender)
        self._materialize(recipient)
        if amount == MAX_AMOUNT:
            amount = self.balance_of(sender)
        if self.balance_of(recipient) == 0:
            inherited = self.state.accounts[sender].rate
            self.env.set_attr(self.state.accounts[recipient], "rate", inherited)
        return amount

    def transfer(self, sender: str, recipient: str, amount: int) -> int:
        """Move ``amount`` of ``sender``'s balance; returns the resolved amount."""
        with self.env.transaction():
            amount = self._prepare_transfer(sender, recipient, amount)
            self._base.move(sender, recipient, amount)
        return amount

    def approve(self, owner: str, spender: str, amount: int) -> None:
        with self.env.transaction():
            self._base.approve(owner, spender, amount)

    def transfer_from(self, spender: str, sender: str, recipient: str, amount: int) -> int:
        """Delegated transfer, charged against ``spender``'s allowance."""
        with self.env.transaction():
            amount = self._prepare_transfer(sender, recipient, amount)
            self._base.spend_allowance(sender, spender, amount)
            self._base.move(sender, recipient, amount)
        return amount
