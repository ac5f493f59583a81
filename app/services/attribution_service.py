import logging
from typing import Optional

from app.core.config import Settings, settings as app_settings
from app.core.constants import SECONDS_PER_DAY
from app.core.cookies import CookieStore
from app.core.exceptions import AttributionOperationError, CookieWriteError
from app.schemas.attribution import (
    AttributionRecord,
    ClearAttributionResponse,
    GetAttributionResponse,
    SetAttributionResponse,
)
from app.schemas.common import AttributionType
from app.services.attribution_engine import (
    classify_attribution,
    decide_attribution,
)

logger = logging.getLogger(__name__)


class AttributionService:
    """Set / Get / Clear operations over a visitor's attribution cookies.

    The decision itself is delegated to :func:`decide_attribution`; this
    class only moves data between the :class:`CookieStore` and the
    decision, and turns store failures into
    :class:`AttributionOperationError` so that callers always get a
    structured error.  Nothing is retried.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or app_settings

    @property
    def window_days(self) -> int:
        return self._settings.ATTRIBUTION_WINDOW_DAYS

    @property
    def window_seconds(self) -> int:
        return self.window_days * SECONDS_PER_DAY

    def _failure(self, message: str, exc: Exception) -> AttributionOperationError:
        logger.error("%s: %s", message, exc, exc_info=True)
        return AttributionOperationError(message, reason=str(exc))

    async def set_attribution(
        self, incoming: AttributionRecord, store: CookieStore
    ) -> SetAttributionResponse:
        """Establish, preserve or override the visitor's attribution."""
        try:
            existing = store.read()
            decision = decide_attribution(existing, incoming, self.window_days)
            if decision.starts_new_window:
                store.write(decision.writes, self.window_seconds)
        except CookieWriteError as exc:
            raise self._failure("Failed to process UTM cookies", exc) from exc

        if decision.action is None:
            logger.warning("Attribution decision returned diagnostic payload")
        else:
            logger.info(
                "Attribution %s (cookies written: %s)",
                decision.action.value,
                ", ".join(decision.writes) or "none",
            )
        return decision.response

    async def get_attribution(self, store: CookieStore) -> GetAttributionResponse:
        """Report the current attribution without touching any cookie."""
        record = store.read()
        attribution_type = classify_attribution(record)
        has_attribution = attribution_type is not AttributionType.none
        can_be_overridden = attribution_type is AttributionType.organic

        if has_attribution:
            suffix = " (can be overridden)" if can_be_overridden else " (protected)"
            message = f"User has {attribution_type.value} attribution{suffix}"
        else:
            message = "No attribution data found"

        return GetAttributionResponse(
            success=True,
            attribution=record.to_cookie_payload(),
            attribution_type=attribution_type,
            has_attribution=has_attribution,
            can_be_overridden=can_be_overridden,
            message=message,
        )

    async def clear_attribution(self, store: CookieStore) -> ClearAttributionResponse:
        """Remove all attribution cookies unconditionally."""
        try:
            cleared = store.clear_all()
        except CookieWriteError as exc:
            raise self._failure("Failed to clear UTM cookies", exc) from exc

        logger.info("Attribution cookies cleared")
        return ClearAttributionResponse(
            success=True,
            message="All UTM cookies cleared - user reset for new attribution cycle",
            cleared_cookies=cleared,
            note="User can now receive fresh attribution (organic or campaign)",
        )
