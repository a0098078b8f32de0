"""Ledger identifiers and fixed-point constants."""

# Fixed-point unit for interest rates and accrual factors (1e18)
PRECISION = 10**18

# uint256 ceiling; also the "whole balance" sentinel for burn/transfer/redeem
MAX_UINT256 = 2**256 - 1
MAX_AMOUNT = MAX_UINT256

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Per-second rate: 5e10 / 1e18 = 5e-8 of principal per second
DEFAULT_INTEREST_RATE = (5 * PRECISION) // 10**8

# Token metadata
TOKEN_NAME = "Rebase Token"
TOKEN_SYMBOL = "RBT"
TOKEN_DECIMALS = 18

SECONDS_PER_DAY = 24 * 3600
SECONDS_PER_YEAR = 365.25 * SECONDS_PER_DAY
