"""Wallet holdings report contracts."""

from typing import Optional, Union

from pydantic import Field

from jupswap.services.balance_aggregator import (
    EnrichedHolding,
    ReportOptions,
    ReportProvenance,
    ReportSummary,
    WalletReport,
)
from jupswap.web.contracts.common import ApiModel, as_number

Number = Union[int, float]


class TokenEntry(ApiModel):
    """One holding in the report."""

    mint: str
    token_account: Optional[str] = Field(None, description="Token account (wallet address for SOL)")
    amount: str = Field(..., description="Raw amount in base units")
    decimals: int
    ui_amount: Number = Field(..., description="Human-readable amount")
    symbol: str
    name: str
    logo_uri: Optional[str] = Field(None, alias="logoURI")
    tags: Optional[list[str]] = None
    price: Optional[Number] = Field(None, description="USD price")
    value: Optional[Number] = Field(None, description="USD value of the holding")
    verified: bool
    is_native: bool = False
    error: Optional[str] = None

    @classmethod
    def from_holding(cls, enriched: EnrichedHolding, options: ReportOptions) -> "TokenEntry":
        holding = enriched.holding
        return cls(
            mint=holding.mint,
            token_account=holding.account,
            amount=str(holding.amount),
            decimals=holding.decimals,
            ui_amount=as_number(holding.ui_amount),
            symbol=enriched.symbol,
            name=enriched.name,
            logo_uri=enriched.icon if options.include_logo else None,
            tags=enriched.tags if options.include_tags else None,
            price=as_number(enriched.price),
            value=as_number(enriched.value),
            verified=enriched.verified,
            is_native=holding.is_native,
            error=enriched.error,
        )


class WalletSummary(ApiModel):
    native_balance: Number
    spl_tokens_count: int
    verified_tokens_count: int
    unverified_tokens_count: int
    total_tokens: int

    @classmethod
    def from_summary(cls, summary: ReportSummary) -> "WalletSummary":
        return cls(
            native_balance=as_number(summary.native_balance),
            spl_tokens_count=summary.spl_tokens_count,
            verified_tokens_count=summary.verified_tokens_count,
            unverified_tokens_count=summary.unverified_tokens_count,
            total_tokens=summary.total_tokens,
        )


class ReportMetadata(ApiModel):
    """Provenance of the report."""

    timestamp: str
    source: str
    include_logo: bool
    include_tags: bool
    queried_mints: int
    matched_metadata: int
    dropped_without_price: int
    zero_balance_accounts: int
    metadata_error: Optional[str] = None

    @classmethod
    def from_provenance(
        cls, provenance: ReportProvenance, options: ReportOptions
    ) -> "ReportMetadata":
        return cls(
            timestamp=provenance.timestamp,
            source=provenance.metadata_source,
            include_logo=options.include_logo,
            include_tags=options.include_tags,
            queried_mints=provenance.queried_mints,
            matched_metadata=provenance.matched_metadata,
            dropped_without_price=provenance.dropped_without_price,
            zero_balance_accounts=provenance.zero_balance_accounts,
            metadata_error=provenance.metadata_error,
        )


class WalletTokensResponse(ApiModel):
    """Body of GET /wallet-tokens."""

    success: bool = True
    wallet: str
    rpc_url: str
    total_tokens: int
    tokens: list[TokenEntry]
    summary: WalletSummary
    metadata: ReportMetadata

    @classmethod
    def from_report(cls, report: WalletReport, rpc_url: str) -> "WalletTokensResponse":
        return cls(
            wallet=report.wallet,
            rpc_url=rpc_url,
            total_tokens=report.total_tokens,
            tokens=[TokenEntry.from_holding(h, report.options) for h in report.holdings],
            summary=WalletSummary.from_summary(report.summary),
            metadata=ReportMetadata.from_provenance(report.provenance, report.options),
        )
