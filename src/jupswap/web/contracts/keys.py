"""Key validation contracts."""

from typing import Optional

from jupswap.web.contracts.common import ApiModel


class ValidateKeyResponse(ApiModel):
    """Body of GET /validate-key.

    ``public_key`` is the empty string whenever validation fails.
    """

    success: bool
    public_key: str = ""
    message: Optional[str] = None
    error: Optional[str] = None
