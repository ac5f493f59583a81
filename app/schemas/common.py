from enum import Enum
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AttributionAction(str, Enum):
    """The five outcomes of a Set call."""

    new_campaign_attribution = "new_campaign_attribution"
    new_organic_attribution = "new_organic_attribution"
    organic_overridden_by_campaign = "organic_overridden_by_campaign"
    preserved_organic_attribution = "preserved_organic_attribution"
    preserved_sponsored_attribution = "preserved_sponsored_attribution"

    @property
    def writes_cookies(self) -> bool:
        return self in _WRITING_ACTIONS


_WRITING_ACTIONS = frozenset(
    {
        AttributionAction.new_campaign_attribution,
        AttributionAction.new_organic_attribution,
        AttributionAction.organic_overridden_by_campaign,
    }
)


class AttributionType(str, Enum):
    none = "none"
    organic = "organic"
    sponsored = "sponsored"


class CamelModel(BaseModel):
    """Response base that serialises field names in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SuccessResponse(CamelModel):
    """Generic success response base."""

    success: bool = True
