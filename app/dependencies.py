from fastapi import Request, Response

from app.core.config import settings
from app.core.cookies import CookieStore
from app.services.attribution_service import AttributionService

# ---------------------------------------------------------------------------
# Cookie store factory (one per request, bound to its request / response)
# ---------------------------------------------------------------------------

async def get_cookie_store(request: Request, response: Response) -> CookieStore:
    """Build a :class:`CookieStore` over the current request's cookie jar."""
    return CookieStore(request, response, settings=settings)

# ---------------------------------------------------------------------------
# Service factory functions
# ---------------------------------------------------------------------------

async def get_attribution_service() -> AttributionService:
    """Build an :class:`AttributionService` with application settings."""
    return AttributionService(settings=settings)
