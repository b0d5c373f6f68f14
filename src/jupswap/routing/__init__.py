"""Routing module: Jupiter aggregator quotes and swap transactions."""

from jupswap.routing.base import Quote, SwapTransaction
from jupswap.routing.jupiter import NATIVE_MINT, QuoteClient, TransactionBuilder

__all__ = [
    "Quote",
    "SwapTransaction",
    "QuoteClient",
    "TransactionBuilder",
    "NATIVE_MINT",
]
