"""External data providers."""

from jupswap.providers.metadata import MetadataClient, TokenMetadata

__all__ = ["MetadataClient", "TokenMetadata"]
