"""Private key validation endpoint."""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from jupswap.errors import DecodeError
from jupswap.signing.local import decode_keypair
from jupswap.web.contracts.keys import ValidateKeyResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["keys"])


@router.get(
    "/validate-key",
    response_model=ValidateKeyResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ValidateKeyResponse}},
)
async def validate_key(
    private_key: Optional[str] = Query(None, alias="privateKey"),
) -> Union[ValidateKeyResponse, JSONResponse]:
    """Decode a base58 secret key and return its public address.

    Malformed input always answers 400 with an empty ``publicKey``.
    """
    try:
        keypair = decode_keypair(private_key)
    except DecodeError as e:
        logger.info(f"Key validation failed: {e.message}")
        invalid = ValidateKeyResponse(success=False, error=e.message)
        return JSONResponse(
            status_code=400,
            content=invalid.model_dump(by_alias=True, exclude_none=True),
        )

    return ValidateKeyResponse(
        success=True,
        public_key=str(keypair.pubkey()),
        message="Private key is valid",
    )
