"""Input validation helpers.

All helpers raise ValidationError so that malformed input is rejected
before any upstream call is made.
"""

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any

from solders.pubkey import Pubkey

from jupswap.errors import ValidationError

SOLANA_ADDRESS_RE = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")

# Amounts are base units of an SPL token (u64)
MAX_AMOUNT = Decimal(2**64 - 1)
MAX_FRACTION_DIGITS = 18


def is_valid_address(address: Any) -> bool:
    """Check that a value is a base58 Solana address decoding to 32 bytes."""
    if not isinstance(address, str) or not SOLANA_ADDRESS_RE.match(address):
        return False
    try:
        Pubkey.from_string(address)
    except ValueError:
        return False
    return True


def validate_address(address: Any, field: str = "address") -> str:
    """Return the address unchanged or raise ValidationError."""
    if not is_valid_address(address):
        raise ValidationError(f"Invalid {field}: must be a valid Solana address")
    return address


def parse_amount(value: Any, field: str = "inputAmount") -> Decimal:
    """Parse a strictly positive, finite amount.

    Accepts ints, floats and numeric strings, matching what a JSON body can carry.
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field}: must be a positive number")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(f"Invalid {field}: must be a positive number")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid {field}: must be a positive number")
    if not amount.is_finite() or amount <= 0:
        raise ValidationError(f"Invalid {field}: must be a positive number")
    if amount > MAX_AMOUNT or amount.as_tuple().exponent < -MAX_FRACTION_DIGITS:
        raise ValidationError(f"Invalid {field}: amount is out of range")
    return amount


def validate_rpc_url(url: Any, field: str = "rpcUrl") -> str:
    """Require an http(s) URL."""
    if not isinstance(url, str) or not re.match(r"^https?://[^\s/$.?#][^\s]*$", url.strip()):
        raise ValidationError(f"Invalid {field}: must be an http(s) URL")
    return url.strip()


def parse_bool(value: Any, default: bool = False) -> bool:
    """Parse a query-string flag ("true", "1", "yes" are true)."""
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes", "on")
