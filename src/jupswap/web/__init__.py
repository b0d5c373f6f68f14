"""Web boundary layer.

- contracts/: pydantic request and response models
- controllers/: FastAPI routers, one per concern
- services/: process-scoped service wiring
"""

__all__ = [
    "contracts",
    "services",
    "controllers",
]
