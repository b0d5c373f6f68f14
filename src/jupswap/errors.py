"""Exception taxonomy shared by the swap and wallet paths.

Every error carries the HTTP status the API layer answers with:

- ValidationError: missing or malformed caller input (400)
- DecodeError: malformed key material (400)
- UpstreamError: aggregator, metadata or ledger call failed (500)
- InternalError: anything unexpected (500)
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure category reported on result objects."""

    VALIDATION = "validation"
    DECODE = "decode"
    UPSTREAM = "upstream"
    INTERNAL = "internal"


class JupswapError(Exception):
    """Base exception for all service errors."""

    status_code: int = 500
    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        """Response body for this error."""
        return {"success": False, "error": self.message}


class ValidationError(JupswapError):
    """Caller input is missing or malformed."""

    status_code = 400
    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, required: Optional[list[str]] = None):
        super().__init__(message)
        self.required = required

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.required:
            data["required"] = self.required
        return data


class DecodeError(JupswapError):
    """Key material could not be decoded into a signing keypair."""

    status_code = 400
    kind = ErrorKind.DECODE


class UpstreamError(JupswapError):
    """A call to the aggregator, metadata service or ledger failed.

    Attributes:
        url: URL (or RPC method) that failed
        status: HTTP status code, if a response was received
        body: Response body, truncated, if a response was received
    """

    kind = ErrorKind.UPSTREAM

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.url = url
        self.status = status
        self.body = body

    def __repr__(self) -> str:
        return f"UpstreamError({self.message!r}, url={self.url!r}, status={self.status})"


class InternalError(JupswapError):
    """Unexpected failure."""

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
