"""Constants for the gasless SDK.

ABI encoding widths, token decimals, numeric bounds and the two contract
functions this SDK calls.
"""

# ABI Encoding Constants
ABI_SELECTOR_LENGTH = 4

# Random token identifiers
UINT256_BYTES = 32
MAX_UINT256 = 2**256 - 1

# Token Constants
USDC_DECIMALS = 6
MAX_TOKEN_DECIMALS = 77  # 10**77 is the largest power of ten below 2**256

# Safe account defaults
DEFAULT_THRESHOLD = 1

# ERC-20 transfer, human-readable ABI item
ERC20_TRANSFER_SIGNATURE = "function transfer(address recipient, uint256 amount) returns (bool)"

# ERC-721 safeMint(address,uint256), JSON ABI fragment
SAFE_MINT_ABI = {
    "constant": False,
    "inputs": [
        {"name": "to", "type": "address"},
        {"name": "tokenId", "type": "uint256"},
    ],
    "name": "safeMint",
    "outputs": [],
    "payable": False,
    "stateMutability": "nonpayable",
    "type": "function",
}

__all__ = [
    "ABI_SELECTOR_LENGTH",
    "UINT256_BYTES",
    "MAX_UINT256",
    "USDC_DECIMALS",
    "MAX_TOKEN_DECIMALS",
    "DEFAULT_THRESHOLD",
    "ERC20_TRANSFER_SIGNATURE",
    "SAFE_MINT_ABI",
]
