"""Token metadata search endpoint."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from jupswap.errors import ValidationError
from jupswap.utils.validation import parse_bool
from jupswap.web.contracts.tokens import SearchMetadata, TokenMetadataResponse, TokenRecord
from jupswap.web.services import ServiceContainer, get_services

router = APIRouter(tags=["tokens"])

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def parse_limit(value: Optional[str]) -> int:
    if value is None or value == "":
        return DEFAULT_LIMIT
    try:
        limit = int(value)
    except ValueError:
        limit = 0
    if not 1 <= limit <= MAX_LIMIT:
        raise ValidationError(f"Invalid limit: must be an integer between 1 and {MAX_LIMIT}")
    return limit


@router.get("/token-metadata", response_model=TokenMetadataResponse)
async def token_metadata(
    query: Optional[str] = Query(None, description="Mint address, symbol or name"),
    exact_match: Optional[str] = Query(None, alias="exactMatch"),
    limit: Optional[str] = Query(None, description=f"1..{MAX_LIMIT}, default {DEFAULT_LIMIT}"),
    services: ServiceContainer = Depends(get_services),
) -> TokenMetadataResponse:
    """Search token metadata and prices. Upstream failures answer 500."""
    if not query or not query.strip():
        raise ValidationError("Missing required parameter: query")

    exact = parse_bool(exact_match, default=False)
    limit_value = parse_limit(limit)
    client = services.metadata_client

    tokens = await client.search(query.strip(), exact_match=exact, limit=limit_value)

    return TokenMetadataResponse(
        metadata=SearchMetadata(
            query=query.strip(),
            exact_match=exact,
            limit=limit_value,
            count=len(tokens),
            source=client.search_url,
        ),
        tokens=[TokenRecord.from_metadata(t) for t in tokens],
    )
