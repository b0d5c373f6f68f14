"""Request and response contracts for the web layer.

These Pydantic models define the JSON interface. Fields are snake_case in
Python and camelCase on the wire.
"""

from jupswap.web.contracts.common import ApiModel
from jupswap.web.contracts.keys import ValidateKeyResponse
from jupswap.web.contracts.swaps import (
    SwapFailedResponse,
    SwapRejectedResponse,
    SwapRequestBody,
    SwapResponse,
    SwapUsageResponse,
)
from jupswap.web.contracts.tokens import TokenMetadataResponse, TokenRecord
from jupswap.web.contracts.wallet import TokenEntry, WalletTokensResponse

__all__ = [
    "ApiModel",
    # Swap contracts
    "SwapRequestBody",
    "SwapResponse",
    "SwapRejectedResponse",
    "SwapFailedResponse",
    "SwapUsageResponse",
    # Wallet contracts
    "TokenEntry",
    "WalletTokensResponse",
    # Token contracts
    "TokenRecord",
    "TokenMetadataResponse",
    # Key contracts
    "ValidateKeyResponse",
]
