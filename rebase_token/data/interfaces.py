"""Abstract data provider interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class LedgerSummary:
    """Ledger-wide figures."""

    global_rate: int  # Fixed-point per-second rate for new snapshots
    total_supply: int  # Sum of principal (excludes unmaterialized interest)


class LedgerDataProvider(ABC):
    """Read-only access to a rebase ledger, local or deployed."""

    @abstractmethod
    def get_global_rate(self) -> int:
        """Rate that new snapshots will receive."""

    @abstractmethod
    def get_account_rate(self, account: str) -> int:
        """Rate snapshot an account accrues at."""

    @abstractmethod
    def balance_of(self, account: str) -> int:
        """Effective balance including pending interest."""

    @abstractmethod
    def principal_balance_of(self, account: str) -> int:
        """Raw principal, ignoring pending interest."""

    @abstractmethod
    def total_supply(self) -> int:
        """Total principal."""

    def get_ledger_summary(self) -> LedgerSummary:
        return LedgerSummary(
            global_rate=self.get_global_rate(),
            total_supply=self.total_supply(),
        )
