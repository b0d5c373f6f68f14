"""Jupiter DEX aggregator integration for Solana.

Uses the Jupiter swap API for quotes and unsigned swap transactions.
API docs: https://dev.jup.ag/docs/swap-api
"""

import logging
from decimal import Decimal
from typing import Any, Optional

import httpx
from pydantic import ValidationError as SchemaError

from jupswap.errors import UpstreamError
from jupswap.routing.base import Quote, SwapTransaction
from jupswap.routing.schemas import JupiterQuoteResponse, JupiterSwapResponse

logger = logging.getLogger(__name__)

JUPITER_API_V1 = "https://lite-api.jup.ag/swap/v1"

# Wrapped SOL mint, also used as the native asset identifier
NATIVE_MINT = "So11111111111111111111111111111111111111112"


def format_amount(amount: Decimal) -> str:
    """Render an amount without exponent notation (Decimal("1E+2") -> "100")."""
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class JupiterClient:
    """Shared plumbing for Jupiter API calls.

    The httpx client is owned by the caller and reused across requests.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str = JUPITER_API_V1,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
    ):
        self._http = http_client
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    def _get_headers(self) -> dict:
        """Get API headers."""
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["x-api-key"] = self.api_key
        return headers

    async def _send(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            UpstreamError: on network failure, non-2xx status or non-JSON body
        """
        url = f"{self.base_url}{path}"
        try:
            response = await self._http.request(
                method,
                url,
                headers=self._get_headers(),
                timeout=self.timeout,
                **kwargs,
            )
        except httpx.HTTPError as e:
            logger.warning(f"Jupiter request failed: {method} {url}: {e}")
            raise UpstreamError(f"Jupiter request failed: {e}", url=url) from e

        if not response.is_success:
            body = response.text[:500]
            logger.warning(f"Jupiter API error: {response.status_code} - {body}")
            raise UpstreamError(
                f"Jupiter API error {response.status_code}: {body}",
                url=url,
                status=response.status_code,
                body=body,
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                "Jupiter API returned invalid JSON",
                url=url,
                status=response.status_code,
                body=response.text[:500],
            ) from e


class QuoteClient(JupiterClient):
    """Requests swap quotes for a mint pair."""

    async def get_quote(
        self,
        input_mint: str,
        output_mint: str,
        amount: Decimal,
        slippage_bps: int,
    ) -> Quote:
        """Get a quote from Jupiter.

        Args:
            input_mint: Mint being sold
            output_mint: Mint being bought
            amount: Input amount in the input mint's base units
            slippage_bps: Slippage tolerance in basis points

        Returns:
            Quote carrying the raw response for the swap call
        """
        data = await self._send(
            "GET",
            "/quote",
            params={
                "inputMint": input_mint,
                "outputMint": output_mint,
                "amount": format_amount(amount),
                "slippageBps": str(slippage_bps),
            },
        )

        try:
            parsed = JupiterQuoteResponse.model_validate(data)
        except SchemaError as e:
            raise UpstreamError(
                f"Unexpected Jupiter quote response: {e.error_count()} invalid field(s)",
                url=f"{self.base_url}/quote",
                body=str(data)[:500],
            ) from e

        labels = tuple(step.swap_info.label or "Unknown" for step in parsed.route_plan)

        return Quote(
            input_mint=parsed.input_mint,
            output_mint=parsed.output_mint,
            in_amount=parsed.in_amount,
            out_amount=parsed.out_amount,
            price_impact_pct=parsed.price_impact_pct,
            slippage_bps=parsed.slippage_bps if parsed.slippage_bps is not None else slippage_bps,
            route_payload=data,
            route_labels=labels,
        )


class TransactionBuilder(JupiterClient):
    """Requests the serialized, unsigned transaction for a quote."""

    async def build(
        self,
        quote: Quote,
        payer: str,
        wrap_and_unwrap_sol: bool = True,
    ) -> SwapTransaction:
        """Build the swap transaction for ``payer``.

        The quote's route payload is forwarded verbatim.
        """
        data = await self._send(
            "POST",
            "/swap",
            json={
                "quoteResponse": quote.route_payload,
                "userPublicKey": payer,
                "wrapAndUnwrapSol": wrap_and_unwrap_sol,
            },
        )

        try:
            parsed = JupiterSwapResponse.model_validate(data)
        except SchemaError as e:
            raise UpstreamError(
                "No swap transaction returned",
                url=f"{self.base_url}/swap",
                body=str(data)[:500],
            ) from e

        return SwapTransaction(
            payload=parsed.swap_transaction,
            payer=payer,
            last_valid_block_height=parsed.last_valid_block_height,
            prioritization_fee_lamports=parsed.prioritization_fee_lamports,
        )
