"""Process-scoped service wiring.

One ServiceContainer is built per process in the application lifespan. The
httpx client it owns is shared by every upstream HTTP client; ledger access
is opened per request because the RPC endpoint comes from the caller.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx
from fastapi import Request

from jupswap.config import Settings
from jupswap.providers.metadata import MetadataClient
from jupswap.routing.jupiter import QuoteClient, TransactionBuilder
from jupswap.services.balance_aggregator import BalanceAggregator
from jupswap.services.swap_orchestrator import SwapOrchestrator

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Shared clients and services, immutable after startup."""

    settings: Settings
    orchestrator: SwapOrchestrator
    aggregator: BalanceAggregator
    metadata_client: MetadataClient
    http_client: Optional[httpx.AsyncClient] = None

    @classmethod
    def build(
        cls,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "ServiceContainer":
        """Wire every service around one shared httpx client."""
        http_client = http_client or httpx.AsyncClient(timeout=settings.http_timeout)

        quote_client = QuoteClient(
            http_client,
            base_url=settings.jupiter_api_url,
            api_key=settings.jupiter_api_key,
            timeout=settings.http_timeout,
        )
        transaction_builder = TransactionBuilder(
            http_client,
            base_url=settings.jupiter_api_url,
            api_key=settings.jupiter_api_key,
            timeout=settings.http_timeout,
        )
        metadata_client = MetadataClient(
            http_client,
            search_url=settings.token_search_url,
            timeout=settings.metadata_timeout,
        )

        return cls(
            settings=settings,
            orchestrator=SwapOrchestrator.with_sleep(
                quote_client,
                transaction_builder,
                settings.confirm_sleep_seconds,
            ),
            aggregator=BalanceAggregator(metadata_client),
            metadata_client=metadata_client,
            http_client=http_client,
        )

    async def close(self) -> None:
        if self.http_client is not None:
            await self.http_client.aclose()
            logger.info("HTTP client closed")


def get_services(request: Request) -> ServiceContainer:
    """FastAPI dependency returning the app's ServiceContainer."""
    return request.app.state.services
