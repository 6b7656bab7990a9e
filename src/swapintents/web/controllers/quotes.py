"""Price and quote API endpoints."""

from fastapi import APIRouter, HTTPException, Request

from swapintents.errors import IntentsError
from swapintents.web.contracts.quotes import (
    AggregationResponse,
    PriceRequest,
    ProtocolInfo,
    QuoteRequest,
)
from swapintents.web.services.quote_service import QuoteService

router = APIRouter(prefix="/quotes", tags=["quotes"])


def get_quote_service(request: Request) -> QuoteService:
    """Quote service attached to the application at startup."""
    service = getattr(request.app.state, "quote_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Quote service not available")
    return service


@router.post("/price", response_model=AggregationResponse)
async def get_price(body: PriceRequest, request: Request) -> AggregationResponse:
    """Get the aggregated price for a route.

    Returns 200 even when no protocol succeeded (``success`` is False);
    400 when no protocol serves the route at all.
    """
    try:
        return await get_quote_service(request).get_price(body)
    except IntentsError as e:
        raise HTTPException(status_code=400, detail=e.to_dict())


@router.post("/quote", response_model=AggregationResponse)
async def get_quote(body: QuoteRequest, request: Request) -> AggregationResponse:
    """Get the aggregated executable quote for a route.

    This is a READ-ONLY operation - no transactions are signed or sent.
    """
    try:
        return await get_quote_service(request).get_quote(body)
    except IntentsError as e:
        raise HTTPException(status_code=400, detail=e.to_dict())


@router.get("/protocols", response_model=list[ProtocolInfo])
async def list_protocols(request: Request) -> list[ProtocolInfo]:
    """List registered protocols with their chains and route flags."""
    return get_quote_service(request).list_protocols()
