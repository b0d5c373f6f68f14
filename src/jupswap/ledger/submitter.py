"""Submission of signed transactions."""

import logging
from typing import Optional

from solana.rpc.commitment import Commitment, Processed
from solders.transaction import VersionedTransaction

from jupswap.ledger.rpc import SolanaLedger

logger = logging.getLogger(__name__)


class LedgerSubmitter:
    """Sends a signed transaction and waits for the requested commitment.

    Defaults to ``processed``: the call returns as soon as a node has
    executed the transaction, without waiting for cluster confirmation.
    """

    def __init__(self, ledger: SolanaLedger, commitment: Commitment = Processed):
        self.ledger = ledger
        self.commitment = commitment

    async def submit(self, transaction: VersionedTransaction) -> str:
        signature = await self.ledger.send_transaction(transaction)
        logger.info(f"Transaction submitted: {signature}")
        return signature

    async def confirm(self, signature: str, last_valid_block_height: Optional[int] = None) -> None:
        await self.ledger.confirm_transaction(
            signature,
            commitment=self.commitment,
            last_valid_block_height=last_valid_block_height,
        )
        logger.info(f"Transaction {signature} reached '{self.commitment}' commitment")
