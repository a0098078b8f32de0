"""Custody gateway: native currency in, ledger units out (1:1), and back.

``redeem`` burns before paying out. The payout runs the recipient's
receive hook, which may try to call back into the vault; the busy flag
rejects that, and the failed payout aborts the whole redemption.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from rebase_token.data.config import LedgerConfig
from rebase_token.data.constants import MAX_AMOUNT
from rebase_token.protocol.base_ledger import check_amount
from rebase_token.protocol.environment import Environment
from rebase_token.protocol.errors import RedeemTransferFailed, ReentrantCall
from rebase_token.protocol.events import Deposit, Redeem, RewardsReceived
from rebase_token.protocol.ledger import RebaseLedger

logger = logging.getLogger(__name__)


class Vault:
    """Holds the native currency backing one ledger."""

    def __init__(
        self,
        env: Environment,
        ledger: RebaseLedger,
        address: str | None = None,
    ) -> None:
        self.env = env
        self.ledger = ledger
        self.address = address or env.new_address("vault")
        self._busy = False

    def get_ledger_address(self) -> str:
        return self.ledger.address

    @property
    def reserves(self) -> int:
        """Native currency currently held."""
        return self.env.native_balance(self.address)

    @contextmanager
    def _non_reentrant(self) -> Iterator[None]:
        if self._busy:
            raise ReentrantCall(f"{self.address} is already executing redeem")
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    def deposit(self, caller: str, value: int) -> None:
        """Take ``value`` native currency from ``caller`` and mint it 1:1."""
        with self.env.transaction():
            check_amount(value)
            self.env.transfer_native(caller, self.address, value)
            self.ledger.mint(caller, value, caller=self.address)
            self.env.emit(Deposit(self.address, caller, value))
        logger.debug("Deposit of %d by %s", value, caller)

    def redeem(self, caller: str, amount: int) -> int:
        """Burn ``amount`` (``MAX_AMOUNT`` = everything) and pay it out.

        Returns the amount paid.
        """
        with self._non_reentrant(), self.env.transaction():
            check_amount(amount)
            if amount == MAX_AMOUNT:
                amount = self.ledger.balance_of(caller)
            self.ledger.burn(caller, amount, caller=self.address)
            if not self.env.send_native(self.address, caller, amount):
                raise RedeemTransferFailed(caller, amount)
            self.env.emit(Redeem(self.address, caller, amount))
        logger.debug("Redeemed %d for %s", amount, caller)
        return amount

    def receive_rewards(self, sender: str, value: int) -> None:
        """Accept native currency without minting; funds paid-out interest."""
        with self.env.transaction():
            check_amount(value)
            self.env.transfer_native(sender, self.address, value)
            self.env.emit(RewardsReceived(self.address, sender, value))


def deploy(
    env: Environment,
    owner: str,
    config: LedgerConfig | None = None,
) -> tuple[RebaseLedger, Vault]:
    """Create a ledger and its vault, and let the vault mint and burn."""
    ledger = RebaseLedger(env, owner, config)
    vault = Vault(env, ledger)
    ledger.grant_mint_and_burn_role(vault.address, caller=owner)
    logger.info("Deployed ledger %s with vault %s", ledger.address, vault.address)
    return ledger, vault
