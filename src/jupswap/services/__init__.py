"""Core services: swap execution and wallet reporting."""

from jupswap.services.balance_aggregator import (
    BalanceAggregator,
    EnrichedHolding,
    JoinStatus,
    ReportOptions,
    WalletReport,
)
from jupswap.services.swap_orchestrator import (
    SWAP_SLIPPAGE_BPS,
    SwapOrchestrator,
    SwapRequest,
    SwapResult,
)

__all__ = [
    "BalanceAggregator",
    "EnrichedHolding",
    "JoinStatus",
    "ReportOptions",
    "WalletReport",
    "SWAP_SLIPPAGE_BPS",
    "SwapOrchestrator",
    "SwapRequest",
    "SwapResult",
]
