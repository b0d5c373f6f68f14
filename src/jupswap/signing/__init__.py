"""Transaction signing services.

- LocalSigner: signs with caller-supplied keypairs held in memory
"""

from jupswap.signing.base import (
    SignerBackend,
    SignerType,
    SigningError,
    deserialize_transaction,
)
from jupswap.signing.local import LocalSigner, decode_keypair

__all__ = [
    "SignerBackend",
    "SignerType",
    "SigningError",
    "LocalSigner",
    "decode_keypair",
    "deserialize_transaction",
]
