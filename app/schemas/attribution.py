from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.constants import (
    ATTRIBUTION_FIELDS,
    COOKIE_NAMES,
    MAX_PARAM_LENGTH,
    QUERY_PARAM_NAMES,
)
from app.schemas.common import (
    AttributionAction,
    AttributionType,
    CamelModel,
    SuccessResponse,
)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class AttributionRecord(BaseModel):
    """Six independently optional attribution values.

    Empty and whitespace-only values are normalised to ``None`` on
    construction so that "present" always means "non-empty".
    """

    model_config = ConfigDict(frozen=True)

    source: Optional[str] = None
    medium: Optional[str] = None
    campaign: Optional[str] = None
    term: Optional[str] = None
    content: Optional[str] = None
    srd: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        return _clean(value) if isinstance(value, str) else value

    @classmethod
    def from_cookies(cls, cookies: Mapping[str, str]) -> "AttributionRecord":
        return cls(**{field: cookies.get(name) for field, name in COOKIE_NAMES.items()})

    @property
    def is_empty(self) -> bool:
        return not any(getattr(self, field) for field in ATTRIBUTION_FIELDS)

    def present_fields(self) -> Dict[str, str]:
        """Return only the fields that carry a value, keyed by field name."""
        return {
            field: getattr(self, field)
            for field in ATTRIBUTION_FIELDS
            if getattr(self, field)
        }

    def to_cookies(self) -> Dict[str, str]:
        """Present fields keyed by cookie name, in cookie-name order."""
        present = self.present_fields()
        return {
            name: present[field] for field, name in COOKIE_NAMES.items() if field in present
        }

    def to_cookie_payload(self) -> Dict[str, Optional[str]]:
        """All six values keyed by cookie name, absent ones as ``None``."""
        return {name: getattr(self, field) for field, name in COOKIE_NAMES.items()}

    def to_query_params(self) -> Dict[str, str]:
        present = self.present_fields()
        return {
            QUERY_PARAM_NAMES[field]: value for field, value in present.items()
        }

    def as_payload(self, blank: Optional[str] = None) -> Dict[str, Optional[str]]:
        """All six fields by name; absent ones become *blank*."""
        return {
            field: getattr(self, field) if getattr(self, field) else blank
            for field in ATTRIBUTION_FIELDS
        }


class UTMQueryParams(BaseModel):
    """Campaign parameters accepted by the Set endpoint."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    utm_source: Optional[str] = Field(None, max_length=MAX_PARAM_LENGTH)
    utm_medium: Optional[str] = Field(None, max_length=MAX_PARAM_LENGTH)
    utm_campaign: Optional[str] = Field(None, max_length=MAX_PARAM_LENGTH)
    utm_term: Optional[str] = Field(None, max_length=MAX_PARAM_LENGTH)
    utm_content: Optional[str] = Field(None, max_length=MAX_PARAM_LENGTH)
    srd: Optional[str] = Field(None, max_length=MAX_PARAM_LENGTH)

    def to_record(self) -> AttributionRecord:
        return AttributionRecord(
            **{field: getattr(self, name) for field, name in QUERY_PARAM_NAMES.items()}
        )


class SetAttributionResponse(CamelModel):
    """Outcome of a Set call.

    Which optional blocks are populated depends on ``action``; the
    endpoint serialises with ``exclude_unset`` so untouched blocks are
    omitted entirely.
    """

    success: bool
    action: Optional[AttributionAction] = None
    message: str
    attribution: Optional[Dict[str, Optional[str]]] = None
    existing_attribution: Optional[Dict[str, Optional[str]]] = None
    ignored_new_params: Optional[Dict[str, str]] = None
    previous_attribution: Optional[Dict[str, Optional[str]]] = None
    new_attribution: Optional[Dict[str, Optional[str]]] = None
    expires_in: Optional[str] = None
    note: Optional[str] = None
    debug: Optional[Dict[str, Any]] = None


class GetAttributionResponse(SuccessResponse):
    attribution: Dict[str, Optional[str]]
    attribution_type: AttributionType
    has_attribution: bool
    can_be_overridden: bool
    message: str


class ClearAttributionResponse(SuccessResponse):
    message: str
    cleared_cookies: List[str] = Field(default_factory=list)
    note: Optional[str] = None


class ServiceHealthResponse(SuccessResponse):
    message: str
    timestamp: str
    endpoints: List[str] = Field(default_factory=list)
