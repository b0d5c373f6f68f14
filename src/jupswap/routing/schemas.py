"""Pydantic schemas for Jupiter swap API responses.

Responses are validated here so that a shape mismatch surfaces as an
UpstreamError instead of a half-built Quote.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SwapInfo(BaseModel):
    """One AMM hop inside a route plan step."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    amm_key: Optional[str] = Field(None, alias="ammKey")
    label: Optional[str] = None


class RoutePlanStep(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    swap_info: SwapInfo = Field(..., alias="swapInfo")
    percent: Optional[int] = None


class JupiterQuoteResponse(BaseModel):
    """Response of ``GET /quote``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    input_mint: str = Field(..., alias="inputMint")
    output_mint: str = Field(..., alias="outputMint")
    in_amount: str = Field(..., alias="inAmount")
    out_amount: str = Field(..., alias="outAmount")
    price_impact_pct: str = Field("0", alias="priceImpactPct")
    slippage_bps: Optional[int] = Field(None, alias="slippageBps")
    route_plan: list[RoutePlanStep] = Field(default_factory=list, alias="routePlan")

    @field_validator("in_amount", "out_amount", "price_impact_pct", mode="before")
    @classmethod
    def coerce_number(cls, v):
        """Jupiter sends amounts as strings; accept bare numbers as well."""
        if isinstance(v, bool):
            raise ValueError("expected a numeric string")
        if isinstance(v, (int, float)):
            return str(v)
        return v


class JupiterSwapResponse(BaseModel):
    """Response of ``POST /swap``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    swap_transaction: str = Field(..., min_length=1, alias="swapTransaction")
    last_valid_block_height: Optional[int] = Field(None, alias="lastValidBlockHeight")
    prioritization_fee_lamports: Optional[int] = Field(None, alias="prioritizationFeeLamports")
