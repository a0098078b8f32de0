"""Data providers for rebase ledger state."""

from rebase_token.data.provider_factory import create_provider

__all__ = ["create_provider"]
