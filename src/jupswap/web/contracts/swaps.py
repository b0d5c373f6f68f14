"""Swap execution contracts.

The request body is accepted loosely (every field optional, any JSON type)
so that missing or malformed fields are reported by the orchestrator with a
400 instead of a schema error.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from jupswap.routing.jupiter import NATIVE_MINT
from jupswap.services.swap_orchestrator import SwapRequest, SwapResult
from jupswap.web.contracts.common import ApiModel, as_number

USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


class SwapRequestBody(ApiModel):
    """Body of POST /swap."""

    input_mint: Optional[Any] = Field(None, description="Mint of the token sold")
    input_amount: Optional[Any] = Field(None, description="Amount sold, in base units")
    output_mint: Optional[Any] = Field(None, description="Mint of the token bought")
    rpc_url: Optional[Any] = Field(None, description="Solana RPC endpoint to submit through")
    signer: Optional[Any] = Field(None, description="Base58 secret key of the payer", repr=False)

    def to_request(self) -> SwapRequest:
        return SwapRequest(
            input_mint=self.input_mint,
            output_mint=self.output_mint,
            amount=self.input_amount,
            rpc_url=self.rpc_url,
            signer=self.signer,
        )


class SwapResponse(ApiModel):
    """Successful swap."""

    success: bool = True
    swap_signature: str = Field(..., description="Transaction signature")
    out_amount: str = Field(..., description="Quoted output amount, base units")
    input_amount: Union[int, float] = Field(..., description="Input amount as submitted")
    input_mint: str
    output_mint: str
    price_impact_pct: str = Field(..., description="Quoted price impact")

    @classmethod
    def from_result(cls, result: SwapResult) -> "SwapResponse":
        return cls(
            swap_signature=result.signature,
            out_amount=result.out_amount,
            input_amount=as_number(result.input_amount),
            input_mint=result.input_mint,
            output_mint=result.output_mint,
            price_impact_pct=result.price_impact_pct,
        )


class SwapRejectedResponse(ApiModel):
    """Swap refused before any upstream call (400)."""

    success: bool = False
    error: str
    required: Optional[list[str]] = None


class SwapFailedResponse(ApiModel):
    """Swap aborted after reaching an upstream (500)."""

    success: bool = False
    error: str
    swap_signature: Optional[str] = None
    out_amount: Optional[str] = None


class SwapExample(ApiModel):
    input_mint: str = NATIVE_MINT
    input_amount: str = "100"
    output_mint: str = USDC_MINT
    rpc_url: str = "https://api.mainnet-beta.solana.com"
    signer: str = "your-private-key-in-bs58-format"


class SwapUsageResponse(BaseModel):
    """Body of GET /swap."""

    message: str = "Jupiter Swap API is running"
    usage: str = (
        "Send POST request with parameters: inputMint, inputAmount, outputMint, rpcUrl, signer"
    )
    example: SwapExample = Field(default_factory=SwapExample)
