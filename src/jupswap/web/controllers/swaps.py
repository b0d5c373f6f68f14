"""Swap execution endpoints.

POST /swap runs one quote -> build -> sign -> submit -> confirm attempt with
the caller's key. /jupswap is kept as an alias for existing clients.
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from jupswap.errors import ErrorKind
from jupswap.web.contracts.swaps import (
    SwapFailedResponse,
    SwapRejectedResponse,
    SwapRequestBody,
    SwapResponse,
    SwapUsageResponse,
)
from jupswap.web.services import ServiceContainer, get_services

router = APIRouter(tags=["swaps"])

REJECTED_KINDS = (ErrorKind.VALIDATION, ErrorKind.DECODE)


@router.post(
    "/swap",
    response_model=SwapResponse,
    responses={400: {"model": SwapRejectedResponse}, 500: {"model": SwapFailedResponse}},
)
@router.post("/jupswap", response_model=SwapResponse, include_in_schema=False)
async def execute_swap(
    body: Optional[SwapRequestBody] = None,
    services: ServiceContainer = Depends(get_services),
) -> Union[SwapResponse, JSONResponse]:
    """Execute a swap on Jupiter and wait for it to be processed.

    Returns 400 when the request is refused before any upstream call
    (missing or malformed fields, undecodable signer key) and 500 when the
    attempt fails after reaching an upstream. The reported ``outAmount`` is
    the quoted amount, not the settled one.
    """
    result = await services.orchestrator.execute((body or SwapRequestBody()).to_request())

    if result.success:
        return SwapResponse.from_result(result)

    if result.error_kind in REJECTED_KINDS:
        rejected = SwapRejectedResponse(error=result.error, required=result.required)
        return JSONResponse(
            status_code=400,
            content=rejected.model_dump(by_alias=True, exclude_none=True),
        )

    failed = SwapFailedResponse(error=result.error)
    return JSONResponse(status_code=500, content=failed.model_dump(by_alias=True))


@router.get("/swap", response_model=SwapUsageResponse)
@router.get("/jupswap", response_model=SwapUsageResponse, include_in_schema=False)
async def swap_usage() -> SwapUsageResponse:
    """Usage and an example request body."""
    return SwapUsageResponse()
