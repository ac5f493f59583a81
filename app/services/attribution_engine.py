import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from app.core.config import settings
from app.core.constants import (
    COOKIE_NAMES,
    DEFAULT_ORGANIC_ATTRIBUTION,
    ORGANIC_CAMPAIGN_MARKER,
    ORGANIC_LABEL,
)
from app.schemas.attribution import AttributionRecord, SetAttributionResponse
from app.schemas.common import AttributionAction, AttributionType

logger = logging.getLogger(__name__)


def is_organic_attribution(record: AttributionRecord) -> bool:
    """Return ``True`` if *record* counts as organic traffic.

    Three independent signals, checked in order and short-circuited:
    ``source == "Organic"``, ``medium == "Organic"``, or a campaign name
    containing the case-sensitive marker ``"organic"``.  A single
    matching signal is enough; mismatched siblings do not matter.
    """
    if record.source == ORGANIC_LABEL:
        return True
    if record.medium == ORGANIC_LABEL:
        return True
    return bool(record.campaign) and ORGANIC_CAMPAIGN_MARKER in record.campaign


def classify_attribution(record: AttributionRecord) -> AttributionType:
    """Classify a record as none / organic / sponsored from its values alone."""
    if record.is_empty:
        return AttributionType.none
    if is_organic_attribution(record):
        return AttributionType.organic
    return AttributionType.sponsored


@dataclass(frozen=True)
class AttributionDecision:
    """Result of :func:`decide_attribution`.

    ``writes`` maps cookie names to values and is empty for every
    preserving transition.  ``response`` is the payload returned to the
    client as-is.
    """

    action: Optional[AttributionAction]
    response: SetAttributionResponse
    writes: Dict[str, str] = field(default_factory=dict)

    @property
    def starts_new_window(self) -> bool:
        return self.action is not None and self.action.writes_cookies


def _window_note(window_days: int) -> str:
    return f"{window_days} days from now"


def _preserve_sponsored(
    existing: AttributionRecord, incoming: AttributionRecord
) -> AttributionDecision:
    ignored = incoming.to_query_params() if not incoming.is_empty else None
    return AttributionDecision(
        action=AttributionAction.preserved_sponsored_attribution,
        response=SetAttributionResponse(
            success=True,
            action=AttributionAction.preserved_sponsored_attribution,
            message="Sponsored attribution preserved - no override allowed",
            existing_attribution=existing.as_payload(),
            ignored_new_params=ignored,
            note="Sponsored campaigns maintain first-touch priority with original expiration",
        ),
    )


def _override_organic(
    existing: AttributionRecord, incoming: AttributionRecord, window_days: int
) -> AttributionDecision:
    return AttributionDecision(
        action=AttributionAction.organic_overridden_by_campaign,
        response=SetAttributionResponse(
            success=True,
            action=AttributionAction.organic_overridden_by_campaign,
            message="Organic attribution overridden by sponsored campaign",
            previous_attribution=existing.as_payload(),
            new_attribution=incoming.as_payload(blank=""),
            expires_in=f"{_window_note(window_days)} (fresh expiration)",
            note=f"Sponsored campaign override successful - new {window_days}-day cycle started",
        ),
        writes=incoming.to_cookies(),
    )


def _preserve_organic(existing: AttributionRecord) -> AttributionDecision:
    return AttributionDecision(
        action=AttributionAction.preserved_organic_attribution,
        response=SetAttributionResponse(
            success=True,
            action=AttributionAction.preserved_organic_attribution,
            message="Existing organic attribution preserved",
            existing_attribution=existing.as_payload(),
            note="Organic attribution maintained with original expiration",
        ),
    )


def _new_campaign(incoming: AttributionRecord, window_days: int) -> AttributionDecision:
    return AttributionDecision(
        action=AttributionAction.new_campaign_attribution,
        response=SetAttributionResponse(
            success=True,
            action=AttributionAction.new_campaign_attribution,
            message="New campaign attribution set",
            attribution=incoming.as_payload(blank=""),
            expires_in=_window_note(window_days),
            note="First-touch campaign attribution established",
        ),
        writes=incoming.to_cookies(),
    )


def _new_organic(window_days: int) -> AttributionDecision:
    default = AttributionRecord(**DEFAULT_ORGANIC_ATTRIBUTION)
    return AttributionDecision(
        action=AttributionAction.new_organic_attribution,
        response=SetAttributionResponse(
            success=True,
            action=AttributionAction.new_organic_attribution,
            message="New organic attribution set",
            attribution={
                key: default.as_payload()[key] for key in ("source", "medium", "campaign")
            },
            expires_in=_window_note(window_days),
            note="First-touch organic attribution established",
        ),
        writes=default.to_cookies(),
    )


def _unexpected_state(
    existing: AttributionRecord,
    incoming: AttributionRecord,
    state: object,
    has_new_params: bool,
) -> AttributionDecision:
    logger.error(
        "Attribution decision fell through: state=%r has_new_params=%s",
        state,
        has_new_params,
    )
    return AttributionDecision(
        action=None,
        response=SetAttributionResponse(
            success=False,
            message="Unexpected state in UTM logic",
            debug={
                "state": str(state),
                "hasNewParams": has_new_params,
                "existingCookies": {
                    name: getattr(existing, key) for key, name in COOKIE_NAMES.items()
                },
                "newParams": incoming.as_payload(),
            },
        ),
    )


def decide_attribution(
    existing: AttributionRecord,
    incoming: AttributionRecord,
    window_days: Optional[int] = None,
) -> AttributionDecision:
    """Decide the single transition for one landing request.

    Sponsored beats organic, but a sponsored record never loses to
    another touch.  Only the two "new" transitions and the organic
    override produce cookie writes; preserved records keep their
    original expiration.  On override only the supplied fields are
    written, so untouched organic fields stay in place.
    """
    if window_days is None:
        window_days = settings.ATTRIBUTION_WINDOW_DAYS
    state = classify_attribution(existing)
    has_new_params = not incoming.is_empty

    if state is AttributionType.sponsored:
        return _preserve_sponsored(existing, incoming)
    if state is AttributionType.organic and has_new_params:
        return _override_organic(existing, incoming, window_days)
    if state is AttributionType.organic:
        return _preserve_organic(existing)
    if state is AttributionType.none and has_new_params:
        return _new_campaign(incoming, window_days)
    if state is AttributionType.none:
        return _new_organic(window_days)

    return _unexpected_state(existing, incoming, state, has_new_params)
