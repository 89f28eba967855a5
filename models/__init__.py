"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema, CamelSchema
from models.lookup import LookupResult
from models.line_item import LineItem
from models.requirement import RequirementRecord, RequirementsCatalogResponse
from models.match import MatchResult, MatchStrategyName
from models.deal_property import (
    PropertyOption,
    PropertyMetadata,
    PropertyDescriptor,
    MatchedProduct,
)
from models.deal_requirements import (
    PropertiesToSend,
    DealRequirementsRequest,
    DealRequirementsResponse,
    MatchDebug,
    UpdateDealPropertiesRequest,
    UpdateDealPropertiesResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "CamelSchema",
    "LookupResult",

    # Catalog & matching
    "LineItem",
    "RequirementRecord",
    "RequirementsCatalogResponse",
    "MatchResult",
    "MatchStrategyName",

    # Deal properties
    "PropertyOption",
    "PropertyMetadata",
    "PropertyDescriptor",
    "MatchedProduct",

    # Envelopes
    "PropertiesToSend",
    "DealRequirementsRequest",
    "DealRequirementsResponse",
    "MatchDebug",
    "UpdateDealPropertiesRequest",
    "UpdateDealPropertiesResponse",
]
