"""Holder-level view of a rebase ledger account."""

from dataclasses import dataclass

from rebase_token.data.constants import PRECISION, SECONDS_PER_DAY
from rebase_token.data.interfaces import LedgerDataProvider
from rebase_token.protocol.accrual import annual_percentage_rate


@dataclass
class HolderPosition:
    """One account's balances and yield, read through a data provider."""

    account: str

    def effective_balance(self, provider: LedgerDataProvider) -> int:
        return provider.balance_of(self.account)

    def principal(self, provider: LedgerDataProvider) -> int:
        return provider.principal_balance_of(self.account)

    def pending_interest(self, provider: LedgerDataProvider) -> int:
        """Interest that the next materialization will fold into principal."""
        return self.effective_balance(provider) - self.principal(provider)

    def rate(self, provider: LedgerDataProvider) -> int:
        return provider.get_account_rate(self.account)

    def apr(self, provider: LedgerDataProvider) -> float:
        """Simple yearly rate implied by the account's snapshot."""
        return annual_percentage_rate(self.rate(provider))

    def projected_balance(self, provider: LedgerDataProvider, seconds: int) -> int:
        """Balance after ``seconds`` if materialized now and then left alone."""
        balance = self.effective_balance(provider)
        return balance * (PRECISION + self.rate(provider) * seconds) // PRECISION

    def daily_interest(self, provider: LedgerDataProvider) -> int:
        """Interest the current balance earns over the next day."""
        return self.projected_balance(provider, SECONDS_PER_DAY) - self.effective_balance(provider)
