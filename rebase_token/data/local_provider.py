"""Data provider reading an in-process ledger."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rebase_token.data.interfaces import LedgerDataProvider

if TYPE_CHECKING:
    from rebase_token.protocol.ledger import RebaseLedger


class LocalDataProvider(LedgerDataProvider):
    """Reads straight from a ``RebaseLedger`` instance."""

    def __init__(self, ledger: RebaseLedger) -> None:
        self.ledger = ledger

    def get_global_rate(self) -> int:
        return self.ledger.get_global_rate()

    def get_account_rate(self, account: str) -> int:
        return self.ledger.get_account_rate(account)

    def balance_of(self, account: str) -> int:
        return self.ledger.balance_of(account)

    def principal_balance_of(self, account: str) -> int:
        return self.ledger.principal_balance_of(account)

    def total_supply(self) -> int:
        return self.ledger.total_supply()
