"""Wallet holdings report.

Reads SOL and SPL token balances from the ledger and joins them with token
metadata from the search service. Every token holding ends up in exactly
one join state:

- MATCHED: metadata with a USD price was found; the holding is reported
- NO_PRICE: no metadata, or metadata without a price; the holding is dropped
- LOOKUP_FAILED: the metadata lookup or the join raised; the holding is
  reported as an unverified "UNKNOWN" token with the error attached

The native SOL holding is always reported first when its balance is positive.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Callable, Optional

from jupswap.errors import UpstreamError
from jupswap.ledger.models import TokenHolding
from jupswap.ledger.rpc import SolanaLedger
from jupswap.providers.metadata import MetadataClient, TokenMetadata
from jupswap.routing.jupiter import NATIVE_MINT
from jupswap.utils.validation import validate_address

logger = logging.getLogger(__name__)

NATIVE_SYMBOL = "SOL"
NATIVE_NAME = "Solana"
NATIVE_ICON = (
    "https://raw.githubusercontent.com/solana-labs/token-list/main/assets/"
    "mainnet/So11111111111111111111111111111111111111112/logo.png"
)

UNKNOWN_SYMBOL = "UNKNOWN"
UNKNOWN_NAME = "Unknown Token"


class JoinStatus(str, Enum):
    """Outcome of joining one holding with its metadata."""

    MATCHED = "matched"
    NO_PRICE = "no_price"
    LOOKUP_FAILED = "lookup_failed"


@dataclass(frozen=True)
class ReportOptions:
    include_logo: bool = True
    include_tags: bool = False


@dataclass
class EnrichedHolding:
    """A holding joined with its metadata."""

    holding: TokenHolding
    status: JoinStatus
    symbol: str = UNKNOWN_SYMBOL
    name: str = UNKNOWN_NAME
    icon: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    price: Optional[Decimal] = None
    verified: bool = False
    error: Optional[str] = None

    @property
    def value(self) -> Optional[Decimal]:
        """USD value of the holding, when a price is known."""
        if self.price is None:
            return None
        return self.holding.ui_amount * self.price

    @classmethod
    def failed(cls, holding: TokenHolding, error: str) -> "EnrichedHolding":
        return cls(holding=holding, status=JoinStatus.LOOKUP_FAILED, error=error)


@dataclass
class ReportSummary:
    native_balance: Decimal
    spl_tokens_count: int
    verified_tokens_count: int
    unverified_tokens_count: int
    total_tokens: int


@dataclass
class ReportProvenance:
    """Where the report's data came from."""

    timestamp: str
    metadata_source: str
    queried_mints: int
    matched_metadata: int
    dropped_without_price: int
    zero_balance_accounts: int
    metadata_error: Optional[str] = None


@dataclass
class WalletReport:
    wallet: str
    rpc_url: str
    options: ReportOptions
    holdings: list[EnrichedHolding]
    summary: ReportSummary
    provenance: ReportProvenance

    @property
    def total_tokens(self) -> int:
        return len(self.holdings)


class BalanceAggregator:
    """Builds WalletReports from ledger state and token metadata."""

    def __init__(
        self,
        metadata_client: MetadataClient,
        ledger_factory: Callable[[str], SolanaLedger] = SolanaLedger,
    ):
        self.metadata_client = metadata_client
        self.ledger_factory = ledger_factory

    async def build_report(
        self,
        wallet_address: str,
        rpc_url: str,
        options: Optional[ReportOptions] = None,
    ) -> WalletReport:
        """Build the holdings report for ``wallet_address``.

        Raises:
            ValidationError: if the wallet address is malformed
            UpstreamError: if the ledger cannot be read
        """
        options = options or ReportOptions()
        wallet = validate_address(wallet_address, "address")

        logger.info(f"Fetching wallet tokens for {wallet[:8]}...")

        async with self.ledger_factory(rpc_url) as ledger:
            lamports = await ledger.get_native_balance(wallet)
            accounts = await ledger.get_token_holdings(wallet)

        holdings = [h for h in accounts if h.ui_amount > 0]
        mints = list(dict.fromkeys(h.mint for h in holdings))

        lookup, lookup_error = await self._fetch_metadata(mints)

        enriched: list[EnrichedHolding] = []
        if lamports > 0:
            enriched.append(self._native(TokenHolding.native(wallet, lamports, NATIVE_MINT), lookup))

        dropped = 0
        for holding in holdings:
            joined = self._join(holding, lookup, lookup_error)
            if joined.status is JoinStatus.NO_PRICE:
                dropped += 1
                continue
            enriched.append(joined)

        summary = self._summarize(enriched)
        provenance = ReportProvenance(
            timestamp=datetime.now(timezone.utc).isoformat(),
            metadata_source=self.metadata_client.search_url,
            queried_mints=len(mints),
            matched_metadata=sum(
                1 for h in enriched if h.status is JoinStatus.MATCHED and not h.holding.is_native
            ),
            dropped_without_price=dropped,
            zero_balance_accounts=len(accounts) - len(holdings),
            metadata_error=lookup_error,
        )

        logger.info(
            f"Wallet {wallet[:8]}...: {summary.total_tokens} token(s) reported, "
            f"{dropped} dropped without price"
        )

        return WalletReport(
            wallet=wallet,
            rpc_url=rpc_url,
            options=options,
            holdings=enriched,
            summary=summary,
            provenance=provenance,
        )

    async def _fetch_metadata(
        self, mints: list[str]
    ) -> tuple[dict[str, TokenMetadata], Optional[str]]:
        """One batched exact-match lookup for all mints.

        A failed lookup is returned as an error string so that every holding
        can carry it instead of failing the report.
        """
        if not mints:
            return {}, None

        try:
            records = await self.metadata_client.search(
                ",".join(mints),
                exact_match=True,
                limit=len(mints),
            )
        except UpstreamError as e:
            logger.warning(f"Token metadata lookup failed for {len(mints)} mint(s): {e.message}")
            return {}, e.message

        lookup: dict[str, TokenMetadata] = {}
        for record in records:
            lookup.setdefault(record.address, record)
        return lookup, None

    def _join(
        self,
        holding: TokenHolding,
        lookup: dict[str, TokenMetadata],
        lookup_error: Optional[str],
    ) -> EnrichedHolding:
        if lookup_error is not None:
            return EnrichedHolding.failed(holding, lookup_error)

        try:
            metadata = lookup.get(holding.mint)
            if metadata is None or not metadata.has_price:
                return EnrichedHolding(holding=holding, status=JoinStatus.NO_PRICE)
            return self._matched(holding, metadata)
        except Exception as e:
            logger.warning(f"Error processing token {holding.mint}: {e}")
            return EnrichedHolding.failed(holding, f"Failed to process token metadata: {e}")

    def _matched(self, holding: TokenHolding, metadata: TokenMetadata) -> EnrichedHolding:
        return EnrichedHolding(
            holding=holding,
            status=JoinStatus.MATCHED,
            symbol=metadata.symbol or UNKNOWN_SYMBOL,
            name=metadata.name or metadata.symbol or UNKNOWN_NAME,
            icon=metadata.icon,
            tags=list(metadata.tags),
            price=Decimal(metadata.price),
            verified=metadata.verified,
        )

    def _native(self, holding: TokenHolding, lookup: dict[str, TokenMetadata]) -> EnrichedHolding:
        wrapped = lookup.get(NATIVE_MINT)
        return EnrichedHolding(
            holding=holding,
            status=JoinStatus.MATCHED,
            symbol=NATIVE_SYMBOL,
            name=NATIVE_NAME,
            icon=NATIVE_ICON,
            tags=["native"],
            price=wrapped.price if wrapped is not None else None,
            verified=True,
        )

    @staticmethod
    def _summarize(enriched: list[EnrichedHolding]) -> ReportSummary:
        native = next((h for h in enriched if h.holding.is_native), None)
        verified = sum(1 for h in enriched if h.verified)
        return ReportSummary(
            native_balance=native.holding.ui_amount if native else Decimal("0"),
            spl_tokens_count=sum(1 for h in enriched if not h.holding.is_native),
            verified_tokens_count=verified,
            unverified_tokens_count=len(enriched) - verified,
            total_tokens=len(enriched),
        )
