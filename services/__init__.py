"""
Business logic services.

Each service handles one step of the deal requirements flow.
"""

from services.requirement_catalog_service import RequirementCatalog, get_requirement_catalog
from services.sku_matcher import SkuMatcher, MatchStrategy, get_sku_matcher
from services.property_assembler_service import PropertyAssembler, get_property_assembler
from services.deal_requirements_service import DealRequirementsService, get_deal_requirements_service
from services.deal_update_service import DealUpdateService, get_deal_update_service

__all__ = [
    "RequirementCatalog",
    "get_requirement_catalog",
    "SkuMatcher",
    "MatchStrategy",
    "get_sku_matcher",
    "PropertyAssembler",
    "get_property_assembler",
    "DealRequirementsService",
    "get_deal_requirements_service",
    "DealUpdateService",
    "get_deal_update_service",
]
