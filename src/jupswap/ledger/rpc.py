"""Solana JSON-RPC access.

Wraps solana-py's AsyncClient for the four calls the service makes:
balance reads, parsed token-account reads, transaction submission and
signature status polling. Responses are checked here and every failure is
re-raised as an UpstreamError.
"""

import logging
from contextlib import asynccontextmanager
from decimal import Decimal, InvalidOperation
from typing import AsyncIterator, Optional

from pydantic import ValidationError as SchemaError
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment, Confirmed, Processed
from solana.rpc.types import TokenAccountOpts, TxOpts
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import VersionedTransaction

from jupswap.errors import UpstreamError
from jupswap.ledger.models import ParsedTokenAccount, TokenHolding

logger = logging.getLogger(__name__)

# Standard SPL Token program
TOKEN_PROGRAM_ID = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")


class SolanaLedger:
    """Async context manager around one RPC endpoint.

    Example:
        async with SolanaLedger(rpc_url) as ledger:
            lamports = await ledger.get_native_balance(address)
    """

    def __init__(
        self,
        rpc_url: str,
        commitment: Commitment = Confirmed,
        sleep_seconds: float = 0.5,
        client: Optional[AsyncClient] = None,
    ):
        self.rpc_url = rpc_url
        self.commitment = commitment
        self.sleep_seconds = sleep_seconds
        self._client = client or AsyncClient(rpc_url, commitment=commitment)

    async def __aenter__(self) -> "SolanaLedger":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.close()

    @asynccontextmanager
    async def _rpc(self, method: str) -> AsyncIterator[None]:
        """Translate any client-side failure of ``method`` into UpstreamError."""
        try:
            yield
        except UpstreamError:
            raise
        except Exception as e:
            logger.warning(f"RPC {method} failed on {self.rpc_url}: {type(e).__name__}: {e}")
            raise UpstreamError(f"RPC {method} failed: {e}", url=self.rpc_url) from e

    async def get_native_balance(self, address: str) -> int:
        """Lamport balance of ``address``."""
        async with self._rpc("getBalance"):
            resp = await self._client.get_balance(Pubkey.from_string(address))
            return int(resp.value)

    async def get_token_holdings(self, owner: str) -> list[TokenHolding]:
        """All SPL token accounts owned by ``owner``, zero balances included."""
        async with self._rpc("getTokenAccountsByOwner"):
            resp = await self._client.get_token_accounts_by_owner_json_parsed(
                Pubkey.from_string(owner),
                TokenAccountOpts(program_id=TOKEN_PROGRAM_ID),
            )
            keyed_accounts = list(resp.value)

        holdings = []
        for keyed in keyed_accounts:
            holdings.append(self._parse_token_account(str(keyed.pubkey), keyed.account.data.parsed))
        return holdings

    def _parse_token_account(self, account: str, parsed: object) -> TokenHolding:
        try:
            data = ParsedTokenAccount.model_validate(parsed)
            ui_amount = Decimal(data.info.token_amount.ui_amount_string)
            amount = int(data.info.token_amount.amount)
        except (SchemaError, InvalidOperation, ValueError) as e:
            raise UpstreamError(
                f"Unexpected token account data for {account}",
                url=self.rpc_url,
                body=str(parsed)[:500],
            ) from e

        return TokenHolding(
            mint=data.info.mint,
            amount=amount,
            decimals=data.info.token_amount.decimals,
            ui_amount=ui_amount,
            account=account,
            owner=data.info.owner,
        )

    async def send_transaction(self, transaction: VersionedTransaction) -> str:
        """Submit a signed transaction and return its signature."""
        async with self._rpc("sendTransaction"):
            resp = await self._client.send_transaction(
                transaction,
                opts=TxOpts(skip_confirmation=True, preflight_commitment=self.commitment),
            )
            return str(resp.value)

    async def confirm_transaction(
        self,
        signature: str,
        commitment: Commitment = Processed,
        last_valid_block_height: Optional[int] = None,
    ) -> None:
        """Poll until ``signature`` reaches ``commitment``.

        Raises:
            UpstreamError: on timeout, RPC failure, or if the transaction
                landed with an error
        """
        async with self._rpc("confirmTransaction"):
            resp = await self._client.confirm_transaction(
                Signature.from_string(signature),
                commitment=commitment,
                sleep_seconds=self.sleep_seconds,
                last_valid_block_height=last_valid_block_height,
            )
            statuses = list(resp.value)

        status = statuses[0] if statuses else None
        if status is None:
            raise UpstreamError("Transaction status unavailable", url=self.rpc_url)
        if status.err is not None:
            raise UpstreamError(f"Transaction failed on-chain: {status.err}", url=self.rpc_url)
