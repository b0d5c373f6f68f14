"""Service wiring for the web layer."""

from jupswap.web.services.container import ServiceContainer, get_services

__all__ = [
    "ServiceContainer",
    "get_services",
]
