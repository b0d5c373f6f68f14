"""Local signing backend.

Signs with a keypair decoded from caller-supplied base58 key material. The
keypair lives only for the duration of the request that supplied it.
"""

import logging
from typing import Optional, Sequence

import base58
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction

from jupswap.errors import DecodeError
from jupswap.signing.base import SignerBackend, SignerType, SigningError

logger = logging.getLogger(__name__)

# ed25519 secret (32) + public key (32)
SECRET_KEY_LENGTH = 64


def decode_keypair(secret: Optional[str]) -> Keypair:
    """Decode a base58 secret key into a signing keypair.

    Raises:
        DecodeError: if the input is empty, not base58, not 64 bytes, or not
            a consistent ed25519 keypair
    """
    if not secret or not isinstance(secret, str) or not secret.strip():
        raise DecodeError("Missing private key")

    try:
        raw = base58.b58decode(secret.strip())
    except ValueError as e:
        raise DecodeError(f"Invalid private key format: not valid base58 ({e})") from e

    if len(raw) != SECRET_KEY_LENGTH:
        raise DecodeError(
            f"Invalid private key length: expected {SECRET_KEY_LENGTH} bytes, got {len(raw)}"
        )

    try:
        return Keypair.from_bytes(raw)
    except ValueError as e:
        raise DecodeError(f"Invalid private key: {e}") from e


class LocalSigner(SignerBackend):
    """Signing backend holding one or more in-memory keypairs.

    The first keypair is the fee payer.
    """

    def __init__(self, keypairs: Sequence[Keypair]):
        super().__init__(SignerType.LOCAL)
        if not keypairs:
            raise ValueError("LocalSigner needs at least one keypair")
        self._keypairs = list(keypairs)

    @classmethod
    def from_secret(cls, secret: Optional[str]) -> "LocalSigner":
        """Build a signer from base58 key material."""
        return cls([decode_keypair(secret)])

    @property
    def pubkey(self) -> Pubkey:
        return self._keypairs[0].pubkey()

    def sign_transaction(self, transaction: VersionedTransaction) -> VersionedTransaction:
        """Sign ``transaction``'s message with every held keypair."""
        try:
            signed = VersionedTransaction(transaction.message, self._keypairs)
        except Exception as e:
            # solders raises its own SignerError when a required signer is missing
            raise SigningError(f"Failed to sign swap transaction: {e}") from e

        logger.debug(f"Transaction signed by {len(self._keypairs)} keypair(s)")
        return signed
