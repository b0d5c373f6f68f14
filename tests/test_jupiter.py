"""Tests for the Jupiter quote and swap-build clients."""

import json
from decimal import Decimal

import httpx
import pytest

from conftest import USDC_MINT, WSOL_MINT
from jupswap.errors import UpstreamError
from jupswap.routing.base import Quote
from jupswap.routing.jupiter import QuoteClient, TransactionBuilder, format_amount

BASE_URL = "https://jupiter.test.local/swap/v1"

QUOTE_RESPONSE = {
    "inputMint": WSOL_MINT,
    "inAmount": "100000000",
    "outputMint": USDC_MINT,
    "outAmount": "16724521",
    "otherAmountThreshold": "16557276",
    "swapMode": "ExactIn",
    "slippageBps": 100,
    "priceImpactPct": "0.0001",
    "routePlan": [
        {"swapInfo": {"ammKey": "amm1", "label": "Whirlpool"}, "percent": 100},
    ],
    "contextSlot": 1,
}


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestFormatAmount:
    """Tests for amount rendering."""

    def test_plain_integers(self):
        assert format_amount(Decimal("100")) == "100"

    def test_exponent_is_expanded(self):
        assert format_amount(Decimal("1E+2")) == "100"

    def test_fractions_are_kept(self):
        assert format_amount(Decimal("0.50")) == "0.5"

    def test_trailing_zeros_are_dropped(self):
        assert format_amount(Decimal("100.00")) == "100"

    def test_large_exponent_is_expanded(self):
        assert format_amount(Decimal("1E+30")) == "1" + "0" * 30


class TestQuoteClient:
    """Tests for QuoteClient.get_quote."""

    @pytest.mark.asyncio
    async def test_get_quote_sends_pair_amount_and_slippage(self):
        """Test the quote request parameters and parsed Quote."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = request.url
            seen["headers"] = request.headers
            return httpx.Response(200, json=QUOTE_RESPONSE)

        async with mock_client(handler) as http:
            client = QuoteClient(http, base_url=BASE_URL)
            quote = await client.get_quote(WSOL_MINT, USDC_MINT, Decimal("100000000"), 100)

        assert seen["url"].path == "/swap/v1/quote"
        assert seen["url"].params["inputMint"] == WSOL_MINT
        assert seen["url"].params["outputMint"] == USDC_MINT
        assert seen["url"].params["amount"] == "100000000"
        assert seen["url"].params["slippageBps"] == "100"
        assert "x-api-key" not in seen["headers"]

        assert isinstance(quote, Quote)
        assert quote.out_amount == "16724521"
        assert quote.price_impact_pct == "0.0001"
        assert quote.slippage_bps == 100
        assert quote.route_labels == ("Whirlpool",)
        assert quote.route_payload == QUOTE_RESPONSE

    @pytest.mark.asyncio
    async def test_api_key_header(self):
        """Test that a configured API key is sent."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["key"] = request.headers.get("x-api-key")
            return httpx.Response(200, json=QUOTE_RESPONSE)

        async with mock_client(handler) as http:
            client = QuoteClient(http, base_url=BASE_URL, api_key="secret")
            await client.get_quote(WSOL_MINT, USDC_MINT, Decimal("1"), 100)

        assert seen["key"] == "secret"

    @pytest.mark.asyncio
    async def test_numeric_amounts_are_accepted(self):
        """Test that numeric JSON amounts are coerced to strings."""
        payload = dict(QUOTE_RESPONSE, outAmount=16724521, priceImpactPct=0)

        async with mock_client(lambda r: httpx.Response(200, json=payload)) as http:
            quote = await QuoteClient(http, base_url=BASE_URL).get_quote(
                WSOL_MINT, USDC_MINT, Decimal("1"), 100
            )

        assert quote.out_amount == "16724521"
        assert quote.price_impact_pct == "0"

    @pytest.mark.asyncio
    async def test_error_status_raises_upstream_error(self):
        """Test that a non-2xx response carries status and body."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"error": "Could not find any route"})

        async with mock_client(handler) as http:
            client = QuoteClient(http, base_url=BASE_URL)
            with pytest.raises(UpstreamError) as exc_info:
                await client.get_quote(WSOL_MINT, USDC_MINT, Decimal("1"), 100)

        err = exc_info.value
        assert err.status == 400
        assert "Could not find any route" in err.body
        assert err.url == f"{BASE_URL}/quote"

    @pytest.mark.asyncio
    async def test_network_error_raises_upstream_error(self):
        """Test that transport failures become UpstreamError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with mock_client(handler) as http:
            client = QuoteClient(http, base_url=BASE_URL)
            with pytest.raises(UpstreamError, match="Jupiter request failed"):
                await client.get_quote(WSOL_MINT, USDC_MINT, Decimal("1"), 100)

    @pytest.mark.asyncio
    async def test_schema_mismatch_raises_upstream_error(self):
        """Test that a response without outAmount is rejected."""
        payload = {k: v for k, v in QUOTE_RESPONSE.items() if k != "outAmount"}

        async with mock_client(lambda r: httpx.Response(200, json=payload)) as http:
            client = QuoteClient(http, base_url=BASE_URL)
            with pytest.raises(UpstreamError, match="Unexpected Jupiter quote response"):
                await client.get_quote(WSOL_MINT, USDC_MINT, Decimal("1"), 100)

    @pytest.mark.asyncio
    async def test_invalid_json_raises_upstream_error(self):
        async with mock_client(lambda r: httpx.Response(200, text="<html>")) as http:
            client = QuoteClient(http, base_url=BASE_URL)
            with pytest.raises(UpstreamError, match="invalid JSON"):
                await client.get_quote(WSOL_MINT, USDC_MINT, Decimal("1"), 100)


class TestTransactionBuilder:
    """Tests for TransactionBuilder.build."""

    def _quote(self) -> Quote:
        return Quote(
            input_mint=WSOL_MINT,
            output_mint=USDC_MINT,
            in_amount="100000000",
            out_amount="16724521",
            price_impact_pct="0.0001",
            slippage_bps=100,
            route_payload=QUOTE_RESPONSE,
        )

    @pytest.mark.asyncio
    async def test_build_posts_quote_and_payer(self):
        """Test that the raw quote is forwarded with the payer."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "swapTransaction": "AQAB",
                    "lastValidBlockHeight": 279632475,
                    "prioritizationFeeLamports": 9999,
                },
            )

        async with mock_client(handler) as http:
            builder = TransactionBuilder(http, base_url=BASE_URL)
            swap_tx = await builder.build(self._quote(), "Payer1111111111111111111111111111111111111")

        assert seen["method"] == "POST"
        assert seen["path"] == "/swap/v1/swap"
        assert seen["body"]["quoteResponse"] == QUOTE_RESPONSE
        assert seen["body"]["userPublicKey"] == "Payer1111111111111111111111111111111111111"
        assert seen["body"]["wrapAndUnwrapSol"] is True

        assert swap_tx.payload == "AQAB"
        assert swap_tx.last_valid_block_height == 279632475
        assert swap_tx.prioritization_fee_lamports == 9999

    @pytest.mark.asyncio
    async def test_missing_transaction_raises_upstream_error(self):
        """Test a response without swapTransaction."""

        async with mock_client(lambda r: httpx.Response(200, json={"error": "x"})) as http:
            builder = TransactionBuilder(http, base_url=BASE_URL)
            with pytest.raises(UpstreamError, match="No swap transaction returned"):
                await builder.build(self._quote(), "payer")

    @pytest.mark.asyncio
    async def test_error_status_raises_upstream_error(self):
        async with mock_client(lambda r: httpx.Response(500, text="boom")) as http:
            builder = TransactionBuilder(http, base_url=BASE_URL)
            with pytest.raises(UpstreamError) as exc_info:
                await builder.build(self._quote(), "payer")

        assert exc_info.value.status == 500
