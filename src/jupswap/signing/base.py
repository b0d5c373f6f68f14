"""Base interfaces for transaction signing.

Signing flow:
1. Aggregator returns a serialized, unsigned transaction
2. Transaction is deserialized into a VersionedTransaction
3. Signer backend applies its signature(s) to the message
4. Signed transaction is submitted to the ledger
"""

import base64
import binascii
import logging
from abc import ABC, abstractmethod
from enum import Enum

from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction

from jupswap.errors import ErrorKind, JupswapError

logger = logging.getLogger(__name__)


class SigningError(JupswapError):
    """Raised when a transaction cannot be deserialized or signed."""

    kind = ErrorKind.UPSTREAM


def deserialize_transaction(payload: str) -> VersionedTransaction:
    """Decode the aggregator's base64 transaction payload.

    Raises:
        SigningError: if the payload is not base64 or not a versioned transaction
    """
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise SigningError(f"Swap transaction is not valid base64: {e}") from e

    try:
        return VersionedTransaction.from_bytes(raw)
    except ValueError as e:
        raise SigningError(f"Could not deserialize swap transaction: {e}") from e


class SignerType(str, Enum):
    """Type of signing backend."""
    LOCAL = "local"  # Caller-supplied key held in memory for one request


class SignerBackend(ABC):
    """Abstract base class for signing backends.

    Implementations never expose raw private keys, only signatures.
    """

    def __init__(self, signer_type: SignerType):
        self.signer_type = signer_type

    @property
    @abstractmethod
    def pubkey(self) -> Pubkey:
        """Public key of the fee payer."""
        pass

    @abstractmethod
    def sign_transaction(self, transaction: VersionedTransaction) -> VersionedTransaction:
        """Sign a deserialized transaction.

        Args:
            transaction: Unsigned transaction (signature slots may be zeroed)

        Returns:
            New VersionedTransaction with the same message and fresh signatures
        """
        pass

    def sign_payload(self, payload: str) -> VersionedTransaction:
        """Deserialize a base64 payload and sign it."""
        return self.sign_transaction(deserialize_transaction(payload))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(type={self.signer_type.value})"
