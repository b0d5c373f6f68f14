"""Pytest configuration and fixtures."""

import base64
import os
from decimal import Decimal
from typing import Callable, Optional

import base58
import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.system_program import TransferParams, transfer
from solders.transaction import VersionedTransaction

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "true"
os.environ.pop("JUPITER_API_KEY", None)

from jupswap.errors import UpstreamError
from jupswap.ledger.models import TokenHolding

WSOL_MINT = "So11111111111111111111111111111111111111112"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
BONK_MINT = "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"
RPC_URL = "https://rpc.test.local"


def build_unsigned_transaction(payer: Pubkey) -> str:
    """Base64 v0 transaction with a zeroed signature slot for ``payer``."""
    ix = transfer(TransferParams(from_pubkey=payer, to_pubkey=Pubkey.new_unique(), lamports=1_000))
    message = MessageV0.try_compile(payer, [ix], [], Hash.default())
    tx = VersionedTransaction.populate(message, [Signature.default()])
    return base64.b64encode(bytes(tx)).decode()


def make_holding(
    mint: str,
    ui_amount: str,
    decimals: int = 6,
    owner: Optional[str] = None,
) -> TokenHolding:
    """SPL holding with a consistent raw amount."""
    ui = Decimal(ui_amount)
    return TokenHolding(
        mint=mint,
        amount=int(ui * (10**decimals)),
        decimals=decimals,
        ui_amount=ui,
        account=str(Pubkey.new_unique()),
        owner=owner or str(Pubkey.new_unique()),
    )


class FakeLedger:
    """In-memory stand-in for SolanaLedger."""

    def __init__(
        self,
        lamports: int = 0,
        holdings: Optional[list[TokenHolding]] = None,
        signature: str = "5" * 88,
        read_error: Optional[Exception] = None,
        send_error: Optional[Exception] = None,
        confirm_error: Optional[Exception] = None,
    ):
        self.lamports = lamports
        self.holdings = holdings or []
        self.signature = signature
        self.read_error = read_error
        self.send_error = send_error
        self.confirm_error = confirm_error

        self.opened_with: list[str] = []
        self.closed = 0
        self.sent: list[VersionedTransaction] = []
        self.confirmed: list[tuple] = []

    def factory(self, rpc_url: str) -> "FakeLedger":
        self.opened_with.append(rpc_url)
        return self

    async def __aenter__(self) -> "FakeLedger":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.closed += 1

    async def get_native_balance(self, address: str) -> int:
        if self.read_error:
            raise self.read_error
        return self.lamports

    async def get_token_holdings(self, owner: str) -> list[TokenHolding]:
        if self.read_error:
            raise self.read_error
        return list(self.holdings)

    async def send_transaction(self, transaction: VersionedTransaction) -> str:
        if self.send_error:
            raise self.send_error
        self.sent.append(transaction)
        return self.signature

    async def confirm_transaction(self, signature, commitment=None, last_valid_block_height=None):
        self.confirmed.append((signature, commitment, last_valid_block_height))
        if self.confirm_error:
            raise self.confirm_error


@pytest.fixture
def keypair() -> Keypair:
    """Fresh payer keypair."""
    return Keypair()


@pytest.fixture
def secret_b58(keypair: Keypair) -> str:
    """The payer's 64-byte secret key in base58."""
    return base58.b58encode(bytes(keypair)).decode()


@pytest.fixture
def unsigned_tx() -> Callable[[Pubkey], str]:
    return build_unsigned_transaction


@pytest.fixture
def wallet_address() -> str:
    return str(Keypair().pubkey())


@pytest.fixture
def fake_ledger() -> FakeLedger:
    return FakeLedger()


@pytest.fixture
def upstream_error() -> UpstreamError:
    return UpstreamError("Token metadata API error 503", url="https://tokens.test.local", status=503)
