"""HTTP controllers for the web API."""

from jupswap.web.controllers.keys import router as keys_router
from jupswap.web.controllers.swaps import router as swaps_router
from jupswap.web.controllers.tokens import router as tokens_router
from jupswap.web.controllers.wallet import router as wallet_router

__all__ = [
    "keys_router",
    "swaps_router",
    "tokens_router",
    "wallet_router",
]
