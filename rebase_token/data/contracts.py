"""Minimal ABIs for reading a deployed rebase token and configuring its pool."""

# ---------------------------------------------------------------------------
# Rebase token: only the view functions we call
# ---------------------------------------------------------------------------

REBASE_TOKEN_ABI = [
    {
        "inputs": [{"name": "_user", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"name": "_user", "type": "address"}],
        "name": "principalBalanceOf",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "getInterestRate",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"name": "_user", "type": "address"}],
        "name": "getUserInterestRate",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "totalSupply",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
]

VAULT_ABI = [
    {
        "inputs": [],
        "name": "getRebaseTokenAddress",
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
]

# ---------------------------------------------------------------------------
# Cross-chain token pool: route registration
# ---------------------------------------------------------------------------

_RATE_LIMITER_CONFIG_COMPONENTS = [
    {"name": "isEnabled", "type": "bool"},
    {"name": "capacity", "type": "uint128"},
    {"name": "rate", "type": "uint128"},
]

TOKEN_POOL_ABI = [
    {
        "inputs": [
            {"name": "remoteChainSelectorsToRemove", "type": "uint64[]"},
            {
                "components": [
                    {"name": "remoteChainSelector", "type": "uint64"},
                    {"name": "remotePoolAddresses", "type": "bytes[]"},
                    {"name": "remoteTokenAddress", "type": "bytes"},
                    {
                        "components": _RATE_LIMITER_CONFIG_COMPONENTS,
                        "name": "outboundRateLimiterConfig",
                        "type": "tuple",
                    },
                    {
                        "components": _RATE_LIMITER_CONFIG_COMPONENTS,
                        "name": "inboundRateLimiterConfig",
                        "type": "tuple",
                    },
                ],
                "name": "chainsToAdd",
                "type": "tuple[]",
            },
        ],
        "name": "applyChainUpdates",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]
