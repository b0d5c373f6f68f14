"""Utility modules for jupswap."""

from jupswap.utils.validation import (
    is_valid_address,
    parse_amount,
    parse_bool,
    validate_address,
    validate_rpc_url,
)

__all__ = [
    "is_valid_address",
    "parse_amount",
    "parse_bool",
    "validate_address",
    "validate_rpc_url",
]
