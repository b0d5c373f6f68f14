"""Token metadata search contracts."""

from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import Field

from jupswap.providers.metadata import TokenMetadata
from jupswap.web.contracts.common import ApiModel, as_number


class TokenRecord(ApiModel):
    address: str
    symbol: str
    name: str
    logo_uri: Optional[str] = Field(None, alias="logoURI")
    decimals: Optional[int] = None
    tags: list[str] = Field(default_factory=list)
    price: Optional[Union[int, float]] = None
    verified: bool = False

    @classmethod
    def from_metadata(cls, token: TokenMetadata) -> "TokenRecord":
        return cls(
            address=token.address,
            symbol=token.symbol,
            name=token.name,
            logo_uri=token.icon,
            decimals=token.decimals,
            tags=list(token.tags),
            price=as_number(token.price),
            verified=token.verified,
        )


class SearchMetadata(ApiModel):
    query: str
    exact_match: bool
    limit: int
    count: int
    source: str
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class TokenMetadataResponse(ApiModel):
    """Body of GET /token-metadata."""

    success: bool = True
    metadata: SearchMetadata
    tokens: list[TokenRecord]
