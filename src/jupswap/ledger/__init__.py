"""Solana ledger access: balance reads, token accounts, submission."""

from jupswap.ledger.models import LAMPORTS_PER_SOL, TokenHolding
from jupswap.ledger.rpc import TOKEN_PROGRAM_ID, SolanaLedger
from jupswap.ledger.submitter import LedgerSubmitter

__all__ = [
    "LAMPORTS_PER_SOL",
    "TOKEN_PROGRAM_ID",
    "TokenHolding",
    "SolanaLedger",
    "LedgerSubmitter",
]
