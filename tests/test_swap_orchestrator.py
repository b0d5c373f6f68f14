"""Tests for the swap orchestrator."""

import logging
from decimal import Decimal
from unittest.mock import AsyncMock

import base58
import pytest
from solana.rpc.commitment import Processed

from conftest import RPC_URL, USDC_MINT, WSOL_MINT
from jupswap.errors import ErrorKind, UpstreamError
from jupswap.routing.base import Quote, SwapTransaction
from jupswap.services.swap_orchestrator import (
    SWAP_SLIPPAGE_BPS,
    SwapOrchestrator,
    SwapRequest,
)

QUOTE = Quote(
    input_mint=WSOL_MINT,
    output_mint=USDC_MINT,
    in_amount="100000000",
    out_amount="16724521",
    price_impact_pct="0.0012",
    slippage_bps=100,
    route_payload={"outAmount": "16724521"},
)


@pytest.fixture
def quote_client():
    client = AsyncMock()
    client.get_quote = AsyncMock(return_value=QUOTE)
    return client


@pytest.fixture
def transaction_builder(keypair, unsigned_tx):
    builder = AsyncMock()
    builder.build = AsyncMock(
        return_value=SwapTransaction(
            payload=unsigned_tx(keypair.pubkey()),
            payer=str(keypair.pubkey()),
            last_valid_block_height=279632475,
        )
    )
    return builder


@pytest.fixture
def orchestrator(quote_client, transaction_builder, fake_ledger):
    return SwapOrchestrator(quote_client, transaction_builder, ledger_factory=fake_ledger.factory)


@pytest.fixture
def request_factory(secret_b58):
    def make(**overrides) -> SwapRequest:
        fields = dict(
            input_mint=WSOL_MINT,
            output_mint=USDC_MINT,
            amount="100000000",
            rpc_url=RPC_URL,
            signer=secret_b58,
        )
        fields.update(overrides)
        return SwapRequest(**fields)

    return make


def assert_no_upstream_calls(quote_client, transaction_builder, fake_ledger):
    quote_client.get_quote.assert_not_awaited()
    transaction_builder.build.assert_not_awaited()
    assert fake_ledger.opened_with == []
    assert fake_ledger.sent == []


class TestSwapSuccess:
    """Tests for a successful swap attempt."""

    @pytest.mark.asyncio
    async def test_execute_reports_quoted_out_amount(
        self, orchestrator, request_factory, quote_client, transaction_builder, fake_ledger, keypair
    ):
        """Test the full quote -> build -> sign -> submit -> confirm run."""
        result = await orchestrator.execute(request_factory())

        assert result.success is True
        assert result.error is None
        assert result.signature == fake_ledger.signature
        assert result.out_amount == QUOTE.out_amount
        assert result.price_impact_pct == QUOTE.price_impact_pct
        assert result.input_amount == Decimal("100000000")
        assert result.input_mint == WSOL_MINT
        assert result.output_mint == USDC_MINT

        quote_client.get_quote.assert_awaited_once_with(
            WSOL_MINT, USDC_MINT, Decimal("100000000"), SWAP_SLIPPAGE_BPS
        )
        transaction_builder.build.assert_awaited_once_with(
            QUOTE, str(keypair.pubkey()), wrap_and_unwrap_sol=True
        )

    @pytest.mark.asyncio
    async def test_signed_transaction_is_submitted_and_confirmed(
        self, orchestrator, request_factory, fake_ledger, keypair
    ):
        """Test that the signed transaction reaches the caller's RPC."""
        await orchestrator.execute(request_factory())

        assert fake_ledger.opened_with == [RPC_URL]
        assert len(fake_ledger.sent) == 1
        assert fake_ledger.sent[0].message.account_keys[0] == keypair.pubkey()
        assert fake_ledger.confirmed == [(fake_ledger.signature, Processed, 279632475)]
        assert fake_ledger.closed == 1

    @pytest.mark.asyncio
    async def test_route_is_logged(self, orchestrator, request_factory, quote_client, caplog):
        quote_client.get_quote.return_value = Quote(
            input_mint=WSOL_MINT,
            output_mint=USDC_MINT,
            in_amount="100000000",
            out_amount="16724521",
            price_impact_pct="0.0012",
            slippage_bps=100,
            route_labels=("Whirlpool", "Meteora DLMM"),
        )

        with caplog.at_level(logging.INFO, logger="jupswap.services.swap_orchestrator"):
            await orchestrator.execute(request_factory())

        assert "route=Whirlpool -> Meteora DLMM" in caplog.text

    def test_slippage_is_one_percent(self):
        assert SWAP_SLIPPAGE_BPS == 100


class TestSwapValidation:
    """Tests for rejection before any upstream call."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["input_mint", "output_mint", "amount", "rpc_url", "signer"])
    async def test_missing_field(
        self, orchestrator, request_factory, missing, quote_client, transaction_builder, fake_ledger
    ):
        result = await orchestrator.execute(request_factory(**{missing: None}))

        assert result.success is False
        assert result.error == "Missing required parameters"
        assert result.error_kind == ErrorKind.VALIDATION
        assert result.required == ["inputMint", "inputAmount", "outputMint", "rpcUrl", "signer"]
        assert_no_upstream_calls(quote_client, transaction_builder, fake_ledger)

    @pytest.mark.asyncio
    async def test_blank_field_counts_as_missing(self, orchestrator, request_factory):
        result = await orchestrator.execute(request_factory(input_mint="  "))

        assert result.error == "Missing required parameters"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", ["-5", "0", "abc", "NaN"])
    async def test_invalid_amount(
        self, orchestrator, request_factory, amount, quote_client, transaction_builder, fake_ledger
    ):
        result = await orchestrator.execute(request_factory(amount=amount))

        assert result.success is False
        assert result.error == "Invalid inputAmount: must be a positive number"
        assert result.error_kind == ErrorKind.VALIDATION
        assert_no_upstream_calls(quote_client, transaction_builder, fake_ledger)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", ["1e1000000", "1e-1000000", str(2**64)])
    async def test_out_of_range_amount(
        self, orchestrator, request_factory, amount, quote_client, transaction_builder, fake_ledger
    ):
        result = await orchestrator.execute(request_factory(amount=amount))

        assert result.success is False
        assert result.error == "Invalid inputAmount: amount is out of range"
        assert result.error_kind == ErrorKind.VALIDATION
        assert_no_upstream_calls(quote_client, transaction_builder, fake_ledger)

    @pytest.mark.asyncio
    async def test_invalid_mint(self, orchestrator, request_factory, quote_client):
        result = await orchestrator.execute(request_factory(output_mint="USDC"))

        assert result.error == "Invalid outputMint: must be a valid Solana address"
        assert result.error_kind == ErrorKind.VALIDATION
        quote_client.get_quote.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_rpc_url(self, orchestrator, request_factory, quote_client):
        result = await orchestrator.execute(request_factory(rpc_url="ftp://rpc"))

        assert result.error_kind == ErrorKind.VALIDATION
        assert "rpcUrl" in result.error
        quote_client.get_quote.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "signer",
        ["0OIl", base58.b58encode(b"\x01" * 32).decode()],
        ids=["not-base58", "32-bytes"],
    )
    async def test_invalid_signer(
        self, orchestrator, request_factory, signer, quote_client, transaction_builder, fake_ledger
    ):
        result = await orchestrator.execute(request_factory(signer=signer))

        assert result.success is False
        assert result.error == "Invalid signer private key format"
        assert result.error_kind == ErrorKind.DECODE
        assert_no_upstream_calls(quote_client, transaction_builder, fake_ledger)

    def test_request_repr_hides_signer(self, request_factory, secret_b58):
        assert secret_b58 not in repr(request_factory())


class TestSwapUpstreamFailures:
    """Tests for failures after the first upstream call."""

    @pytest.mark.asyncio
    async def test_quote_failure(self, orchestrator, request_factory, quote_client, transaction_builder):
        quote_client.get_quote.side_effect = UpstreamError("Jupiter API error 400: no route")

        result = await orchestrator.execute(request_factory())

        assert result.success is False
        assert result.error == "Jupiter API error 400: no route"
        assert result.error_kind == ErrorKind.UPSTREAM
        assert result.signature is None
        assert result.out_amount is None
        transaction_builder.build.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_build_failure(self, orchestrator, request_factory, transaction_builder, fake_ledger):
        transaction_builder.build.side_effect = UpstreamError("No swap transaction returned")

        result = await orchestrator.execute(request_factory())

        assert result.error == "No swap transaction returned"
        assert fake_ledger.sent == []

    @pytest.mark.asyncio
    async def test_undecodable_transaction(self, orchestrator, request_factory, transaction_builder, fake_ledger):
        transaction_builder.build.return_value = SwapTransaction(payload="%%%", payer="x")

        result = await orchestrator.execute(request_factory())

        assert result.success is False
        assert result.error_kind == ErrorKind.UPSTREAM
        assert "base64" in result.error
        assert fake_ledger.sent == []

    @pytest.mark.asyncio
    async def test_submission_failure(self, orchestrator, request_factory, fake_ledger):
        fake_ledger.send_error = UpstreamError("RPC sendTransaction failed: blockhash not found")

        result = await orchestrator.execute(request_factory())

        assert result.success is False
        assert "blockhash not found" in result.error
        assert fake_ledger.closed == 1

    @pytest.mark.asyncio
    async def test_on_chain_failure_names_signature(self, orchestrator, request_factory, fake_ledger):
        """Test that a landed-but-failed transaction is reported as a failure."""
        fake_ledger.confirm_error = UpstreamError("Transaction failed on-chain: SlippageToleranceExceeded")

        result = await orchestrator.execute(request_factory())

        assert result.success is False
        assert fake_ledger.signature in result.error
        assert "SlippageToleranceExceeded" in result.error
        assert result.error_kind == ErrorKind.UPSTREAM

    @pytest.mark.asyncio
    async def test_unexpected_error_is_internal(self, orchestrator, request_factory, quote_client):
        quote_client.get_quote.side_effect = RuntimeError("boom")

        result = await orchestrator.execute(request_factory())

        assert result.success is False
        assert result.error == "boom"
        assert result.error_kind == ErrorKind.INTERNAL
