from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from app.api.deps import get_attribution_service, get_cookie_store
from app.core.config import settings
from app.core.cookies import CookieStore
from app.core.rate_limit import limiter
from app.schemas.attribution import (
    ClearAttributionResponse,
    GetAttributionResponse,
    ServiceHealthResponse,
    SetAttributionResponse,
    UTMQueryParams,
)
from app.services.attribution_service import AttributionService

router = APIRouter(prefix="/utm", tags=["UTM Attribution"])


@router.api_route(
    "/set",
    methods=["GET", "POST"],
    response_model=SetAttributionResponse,
    response_model_exclude_unset=True,
)
@limiter.limit(settings.ATTRIBUTION_SET_RATE_LIMIT)
async def set_attribution(
    request: Request,
    response: Response,
    params: Annotated[UTMQueryParams, Query()],
    store: CookieStore = Depends(get_cookie_store),
    service: AttributionService = Depends(get_attribution_service),
) -> SetAttributionResponse:
    """Record the visitor's attribution from the landing page's UTM params.

    Landing pages call this on every visit, either as a ``POST`` or as a
    plain ``GET`` for redirect flows.  Sponsored attribution is never
    replaced; organic attribution yields to any campaign.
    """
    result = await service.set_attribution(params.to_record(), store)
    store.commit()
    return result


@router.get("/get", response_model=GetAttributionResponse)
async def get_attribution(
    store: CookieStore = Depends(get_cookie_store),
    service: AttributionService = Depends(get_attribution_service),
) -> GetAttributionResponse:
    """Current attribution cookies and their classification."""
    return await service.get_attribution(store)


@router.delete("/clear", response_model=ClearAttributionResponse)
async def clear_attribution(
    store: CookieStore = Depends(get_cookie_store),
    service: AttributionService = Depends(get_attribution_service),
) -> ClearAttributionResponse:
    """Remove every attribution cookie so the next visit starts fresh."""
    result = await service.clear_attribution(store)
    store.commit()
    return result


@router.get("/health", response_model=ServiceHealthResponse)
async def attribution_health() -> ServiceHealthResponse:
    return ServiceHealthResponse(
        success=True,
        message="UTM Cookie service is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
        endpoints=[
            "POST /utm/set - Set UTM cookies",
            "GET /utm/set - Set UTM cookies (alternative)",
            "GET /utm/get - Get current UTM cookies",
            "DELETE /utm/clear - Clear all UTM cookies",
        ],
    )
