from typing import Dict, Tuple

# Record field -> cookie name
COOKIE_NAMES: Dict[str, str] = {
    "campaign": "utmcampaign",
    "medium": "utmmedium",
    "source": "utmsource",
    "term": "utmterm",
    "content": "utmcontent",
    "srd": "srd",
}

# Record field -> inbound query parameter name
QUERY_PARAM_NAMES: Dict[str, str] = {
    "source": "utm_source",
    "medium": "utm_medium",
    "campaign": "utm_campaign",
    "term": "utm_term",
    "content": "utm_content",
    "srd": "srd",
}

ATTRIBUTION_FIELDS: Tuple[str, ...] = (
    "source",
    "medium",
    "campaign",
    "term",
    "content",
    "srd",
)

# Order matters: it is echoed back by the Clear operation
ATTRIBUTION_COOKIES: Tuple[str, ...] = tuple(COOKIE_NAMES.values())

MAX_PARAM_LENGTH: int = 255

ORGANIC_LABEL: str = "Organic"
ORGANIC_CAMPAIGN_MARKER: str = "organic"

# Attribution written for a first visit that carries no campaign parameters
DEFAULT_ORGANIC_ATTRIBUTION: Dict[str, str] = {
    "campaign": "aparna-indi-orga-organic-organic-20181227-5833195",
    "medium": ORGANIC_LABEL,
    "source": ORGANIC_LABEL,
}

SECONDS_PER_DAY: int = 24 * 60 * 60
