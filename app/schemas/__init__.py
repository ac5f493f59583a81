"""Pydantic schemas package – re-exports for convenience."""

# Common enums
from app.schemas.common import (
    AttributionAction as AttributionAction,
    AttributionType as AttributionType,
    SuccessResponse as SuccessResponse,
)

# Attribution schemas
from app.schemas.attribution import (
    AttributionRecord as AttributionRecord,
    UTMQueryParams as UTMQueryParams,
    SetAttributionResponse as SetAttributionResponse,
    GetAttributionResponse as GetAttributionResponse,
    ClearAttributionResponse as ClearAttributionResponse,
    ServiceHealthResponse as ServiceHealthResponse,
)
