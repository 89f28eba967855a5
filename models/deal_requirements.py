"""
Request and response envelopes for the deal requirements card.
"""

from pydantic import AliasChoices, Field, field_validator
from typing import Any, Optional

from models.base import CamelSchema
from models.deal_property import MatchedProduct


def _object_id_to_string(v: Any) -> Any:
    if isinstance(v, int) and not isinstance(v, bool):
        return str(v)
    return v


class PropertiesToSend(CamelSchema):
    """CRM record context sent by the card."""

    object_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("objectId", "hs_object_id", "object_id"),
        description="Deal record ID"
    )

    @field_validator("object_id", mode="before")
    @classmethod
    def coerce_object_id(cls, v: Any) -> Any:
        """HubSpot sends hs_object_id as a number."""
        return _object_id_to_string(v)


class DealRequirementsRequest(CamelSchema):
    """Input envelope: {"propertiesToSend": {"objectId": "..."}}"""
    properties_to_send: PropertiesToSend


class MatchDebug(CamelSchema):
    """Diagnostics returned when nothing matched."""
    line_items_count: int
    requirements_count: int
    line_items_skus: list[Optional[str]] = Field(alias="lineItemsSKUs")
    requirements_skus: list[str] = Field(alias="requirementsSKUs")


class DealRequirementsResponse(CamelSchema):
    """
    Output envelope.

    Exactly one shape is populated:
        - {hasMatches: true, matchedProducts: [...]}
        - {hasMatches: false, error: "..."}
        - {hasMatches: false, debug: {...}}
        - {hasMatches: false, error: "...", stack: "..."}
    """
    has_matches: bool
    matched_products: Optional[list[MatchedProduct]] = None
    error: Optional[str] = None
    stack: Optional[str] = None
    debug: Optional[MatchDebug] = None

    def to_envelope(self) -> dict:
        """JSON-ready dict without the unset keys."""
        return self.model_dump(by_alias=True, exclude_none=True)


class UpdateDealPropertiesRequest(CamelSchema):
    """Input for a bulk deal property write."""

    object_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("objectId", "hs_object_id", "object_id"),
    )
    properties: dict[str, Any] = Field(
        ...,
        description="Property name -> new value"
    )

    @field_validator("object_id", mode="before")
    @classmethod
    def coerce_object_id(cls, v: Any) -> Any:
        """HubSpot sends hs_object_id as a number."""
        return _object_id_to_string(v)


class UpdateDealPropertiesResponse(CamelSchema):
    """Result of a bulk deal property write."""
    success: bool
    updated: list[str]
