"""Wallet holdings endpoint."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from jupswap.errors import ValidationError
from jupswap.services.balance_aggregator import ReportOptions
from jupswap.utils.validation import parse_bool, validate_rpc_url
from jupswap.web.contracts.wallet import WalletTokensResponse
from jupswap.web.services import ServiceContainer, get_services

router = APIRouter(tags=["wallet"])


@router.get(
    "/wallet-tokens",
    response_model=WalletTokensResponse,
    response_model_exclude_none=True,
)
async def wallet_tokens(
    address: Optional[str] = Query(None, description="Wallet address"),
    rpc_url: Optional[str] = Query(None, alias="rpcUrl", description="Solana RPC URL"),
    include_logo: Optional[str] = Query(None, alias="includeLogo"),
    include_tags: Optional[str] = Query(None, alias="includeTags"),
    services: ServiceContainer = Depends(get_services),
) -> WalletTokensResponse:
    """SOL and SPL token holdings of a wallet, joined with price metadata.

    Tokens without a known USD price are left out of the report. Tokens whose
    metadata lookup failed are reported as unverified "UNKNOWN" tokens.
    """
    if not address or not address.strip():
        raise ValidationError("Missing required parameter: address")

    rpc_url = validate_rpc_url(rpc_url or services.settings.solana_rpc_url, "rpcUrl")
    options = ReportOptions(
        include_logo=parse_bool(include_logo, default=True),
        include_tags=parse_bool(include_tags, default=False),
    )

    report = await services.aggregator.build_report(address.strip(), rpc_url, options)
    return WalletTokensResponse.from_report(report, rpc_url)
