"""Swap execution: quote, build, sign, submit, confirm.

Steps run strictly in order and none is retried. Input validation and key
decoding happen before the first network call; any later failure ends the
attempt with a failed SwapResult. The submitted transaction is atomic on the
ledger, so nothing is rolled back.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from functools import partial
from typing import Any, Callable, Optional

from solana.rpc.commitment import Commitment, Processed

from jupswap.errors import (
    DecodeError,
    ErrorKind,
    JupswapError,
    UpstreamError,
    ValidationError,
)
from jupswap.ledger.rpc import SolanaLedger
from jupswap.ledger.submitter import LedgerSubmitter
from jupswap.routing.jupiter import QuoteClient, TransactionBuilder
from jupswap.signing.base import SignerBackend
from jupswap.signing.local import LocalSigner
from jupswap.utils.validation import parse_amount, validate_address, validate_rpc_url

logger = logging.getLogger(__name__)

# Fixed slippage policy for every swap (1%)
SWAP_SLIPPAGE_BPS = 100

INVALID_SIGNER_MESSAGE = "Invalid signer private key format"

# (attribute, wire name) in the order they are reported when missing
REQUIRED_FIELDS = (
    ("input_mint", "inputMint"),
    ("amount", "inputAmount"),
    ("output_mint", "outputMint"),
    ("rpc_url", "rpcUrl"),
    ("signer", "signer"),
)


@dataclass
class SwapRequest:
    """Caller-supplied swap parameters, as received."""

    input_mint: Any = None
    output_mint: Any = None
    amount: Any = None
    rpc_url: Any = None
    signer: Any = None  # base58 secret key

    def __repr__(self) -> str:
        # never render key material
        return (
            f"SwapRequest(input_mint={self.input_mint!r}, output_mint={self.output_mint!r}, "
            f"amount={self.amount!r}, rpc_url={self.rpc_url!r})"
        )

    def missing_fields(self) -> list[str]:
        missing = []
        for attr, wire in REQUIRED_FIELDS:
            value = getattr(self, attr)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(wire)
        return missing


@dataclass
class SwapResult:
    """Outcome of one swap attempt."""

    success: bool
    input_mint: Optional[str] = None
    output_mint: Optional[str] = None
    input_amount: Optional[Decimal] = None
    signature: Optional[str] = None
    out_amount: Optional[str] = None
    price_impact_pct: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    required: Optional[list[str]] = None

    @classmethod
    def failed(
        cls,
        request: SwapRequest,
        error: JupswapError,
        amount: Optional[Decimal] = None,
    ) -> "SwapResult":
        return cls(
            success=False,
            input_mint=request.input_mint if isinstance(request.input_mint, str) else None,
            output_mint=request.output_mint if isinstance(request.output_mint, str) else None,
            input_amount=amount,
            error=error.message,
            error_kind=error.kind,
            required=getattr(error, "required", None),
        )


@dataclass(frozen=True)
class _ValidatedSwap:
    input_mint: str
    output_mint: str
    amount: Decimal
    rpc_url: str


class SwapOrchestrator:
    """Runs QuoteClient -> TransactionBuilder -> signer -> LedgerSubmitter."""

    def __init__(
        self,
        quote_client: QuoteClient,
        transaction_builder: TransactionBuilder,
        ledger_factory: Callable[[str], SolanaLedger] = SolanaLedger,
        signer_factory: Callable[[Optional[str]], SignerBackend] = LocalSigner.from_secret,
        commitment: Commitment = Processed,
    ):
        self.quote_client = quote_client
        self.transaction_builder = transaction_builder
        self.ledger_factory = ledger_factory
        self.signer_factory = signer_factory
        self.commitment = commitment

    @classmethod
    def with_sleep(
        cls,
        quote_client: QuoteClient,
        transaction_builder: TransactionBuilder,
        confirm_sleep_seconds: float,
    ) -> "SwapOrchestrator":
        """Orchestrator whose ledgers poll signature status every ``confirm_sleep_seconds``."""
        return cls(
            quote_client,
            transaction_builder,
            ledger_factory=partial(SolanaLedger, sleep_seconds=confirm_sleep_seconds),
        )

    def validate(self, request: SwapRequest) -> _ValidatedSwap:
        """Check caller input without touching the network.

        Raises:
            ValidationError: on missing or malformed fields
        """
        missing = request.missing_fields()
        if missing:
            raise ValidationError(
                "Missing required parameters",
                required=[wire for _, wire in REQUIRED_FIELDS],
            )

        amount = parse_amount(request.amount, "inputAmount")
        input_mint = validate_address(request.input_mint, "inputMint")
        output_mint = validate_address(request.output_mint, "outputMint")
        rpc_url = validate_rpc_url(request.rpc_url, "rpcUrl")

        return _ValidatedSwap(input_mint, output_mint, amount, rpc_url)

    async def execute(self, request: SwapRequest) -> SwapResult:
        """Execute one swap attempt."""
        try:
            swap = self.validate(request)
        except ValidationError as e:
            logger.info(f"Swap rejected: {e.message}")
            return SwapResult.failed(request, e)

        try:
            signer = self.signer_factory(request.signer)
        except DecodeError as e:
            logger.info(f"Swap rejected: {e.message}")
            return SwapResult.failed(request, DecodeError(INVALID_SIGNER_MESSAGE), swap.amount)

        try:
            return await self._run(swap, signer)
        except JupswapError as e:
            logger.error(f"Error in Jupiter swap: {e.message}")
            return SwapResult.failed(request, e, swap.amount)
        except Exception as e:
            logger.exception("Unexpected error in Jupiter swap")
            return SwapResult(
                success=False,
                input_mint=swap.input_mint,
                output_mint=swap.output_mint,
                input_amount=swap.amount,
                error=str(e) or type(e).__name__,
                error_kind=ErrorKind.INTERNAL,
            )

    async def _run(self, swap: _ValidatedSwap, signer: SignerBackend) -> SwapResult:
        quote = await self.quote_client.get_quote(
            swap.input_mint,
            swap.output_mint,
            swap.amount,
            SWAP_SLIPPAGE_BPS,
        )
        logger.info(
            f"Quote obtained: priceImpact={quote.price_impact_pct}, outAmount={quote.out_amount}, "
            f"route={' -> '.join(quote.route_labels) or 'direct'}"
        )

        swap_tx = await self.transaction_builder.build(
            quote,
            str(signer.pubkey),
            wrap_and_unwrap_sol=True,
        )

        signed = signer.sign_payload(swap_tx.payload)

        async with self.ledger_factory(swap.rpc_url) as ledger:
            submitter = LedgerSubmitter(ledger, commitment=self.commitment)
            signature = await submitter.submit(signed)
            try:
                await submitter.confirm(signature, swap_tx.last_valid_block_height)
            except UpstreamError as e:
                raise UpstreamError(
                    f"Swap transaction {signature} submitted but not confirmed: {e.message}",
                    url=e.url,
                ) from e

        logger.info(f"Jupiter swap transaction successful: {signature}")

        return SwapResult(
            success=True,
            input_mint=swap.input_mint,
            output_mint=swap.output_mint,
            input_amount=swap.amount,
            signature=signature,
            out_amount=quote.out_amount,
            price_impact_pct=quote.price_impact_pct,
        )
