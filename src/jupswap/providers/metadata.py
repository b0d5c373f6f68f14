"""Token metadata and price search.

Queries the token search service (Jupiter Tokens API by default) for symbol,
name, icon, tags and USD price by mint address, symbol or name.
"""

import logging
from decimal import Decimal
from typing import Any, Optional

import httpx
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as SchemaError

from jupswap.errors import UpstreamError

logger = logging.getLogger(__name__)

TOKEN_SEARCH_URL = "https://lite-api.jup.ag/tokens/v2/search"
METADATA_TIMEOUT = 10.0


class TokenMetadata(BaseModel):
    """A token record from the search service."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    address: str = Field(..., validation_alias=AliasChoices("id", "address", "mint"))
    symbol: str = ""
    name: str = ""
    icon: Optional[str] = Field(None, validation_alias=AliasChoices("icon", "logoURI"))
    decimals: Optional[int] = None
    tags: list[str] = Field(default_factory=list)
    price: Optional[Decimal] = Field(
        None, validation_alias=AliasChoices("usdPrice", "price")
    )
    verified: bool = Field(False, validation_alias=AliasChoices("isVerified", "verified"))

    @property
    def has_price(self) -> bool:
        """False when the service knows no market price for the token."""
        return self.price is not None


_records = TypeAdapter(list[TokenMetadata])


class MetadataClient:
    """Client for the token metadata/price search service."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        search_url: str = TOKEN_SEARCH_URL,
        timeout: float = METADATA_TIMEOUT,
    ):
        self._http = http_client
        self.search_url = search_url
        self.timeout = timeout

    async def search(
        self,
        query: str,
        exact_match: bool = False,
        limit: int = 10,
    ) -> list[TokenMetadata]:
        """Search tokens by mint, symbol or name.

        Args:
            query: Search text; several mints may be joined with commas
            exact_match: Ask the service for exact matches only
            limit: Maximum number of records returned

        Raises:
            UpstreamError: on network error, non-2xx status or unexpected payload
        """
        params = {
            "query": query,
            "exactMatch": "true" if exact_match else "false",
            "limit": str(limit),
        }

        try:
            response = await self._http.get(
                self.search_url,
                params=params,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            logger.warning(f"Token metadata request failed: {e}")
            raise UpstreamError(f"Token metadata request failed: {e}", url=self.search_url) from e

        if not response.is_success:
            body = response.text[:500]
            logger.warning(f"Token metadata API error: {response.status_code} - {body}")
            raise UpstreamError(
                f"Token metadata API error {response.status_code}",
                url=str(response.request.url),
                status=response.status_code,
                body=body,
            )

        tokens = self._parse(response)
        logger.debug(f"Token metadata search '{query[:60]}' returned {len(tokens)} record(s)")
        return tokens[:limit]

    def _parse(self, response: httpx.Response) -> list[TokenMetadata]:
        try:
            data: Any = response.json()
            return _records.validate_python(data)
        except (ValueError, SchemaError) as e:
            raise UpstreamError(
                "Unexpected token metadata response",
                url=str(response.request.url),
                status=response.status_code,
                body=response.text[:500],
            ) from e
