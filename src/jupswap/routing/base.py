"""Swap routing data types."""

import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Quote:
    """A swap quote from the aggregator.

    ``route_payload`` is the aggregator's full quote response. It is handed
    back to the transaction builder unmodified.
    """

    input_mint: str
    output_mint: str
    in_amount: str
    out_amount: str
    price_impact_pct: str
    slippage_bps: int
    route_payload: dict = field(default_factory=dict, compare=False, repr=False)
    route_labels: tuple[str, ...] = ()
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True)
class SwapTransaction:
    """Serialized, unsigned transaction realizing a quote."""

    payload: str  # base64 encoded VersionedTransaction
    payer: str
    last_valid_block_height: Optional[int] = None
    prioritization_fee_lamports: Optional[int] = None
