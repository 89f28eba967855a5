"""
Deal requirements flow.

Line items + requirement catalog -> SKU matches -> deal properties.
This is the response boundary: expected empty conditions come back as
structured envelopes, and anything unexpected is caught here and
reported with its stack trace instead of raising.
"""

import traceback
from typing import Protocol
import structlog

from integrations.hubspot import HubSpotClient
from models.deal_requirements import DealRequirementsResponse, MatchDebug
from models.line_item import LineItem
from services.property_assembler_service import PropertyAssembler, get_property_assembler
from services.requirement_catalog_service import RequirementCatalog, get_requirement_catalog
from services.sku_matcher import SkuMatcher, get_sku_matcher

logger = structlog.get_logger(__name__)


NO_REQUIREMENTS_ERROR = "No requirements loaded from GitHub"


class LineItemSource(Protocol):
    """Supplies a deal's line items (HubSpotClient in production)."""

    def get_deal_line_items(self, deal_id: str) -> list[LineItem]:
        ...


class DealRequirementsService:
    """
    Orchestrates one deal requirements request.

    All collaborators are injected; build a new instance per request.
    """

    def __init__(
        self,
        line_items: LineItemSource,
        catalog: RequirementCatalog,
        matcher: SkuMatcher,
        assembler: PropertyAssembler
    ):
        self.line_items = line_items
        self.catalog = catalog
        self.matcher = matcher
        self.assembler = assembler

    def get_requirements(self, object_id: str) -> DealRequirementsResponse:
        """
        Build the editor payload for a deal.

        Args:
            object_id: Deal record ID

        Returns:
            DealRequirementsResponse, one of:
                - matched products
                - "no requirements loaded" error
                - no-match debug counts
                - unexpected error with stack trace
        """
        logger.info("deal_requirements_started", object_id=object_id)

        try:
            line_items = self.line_items.get_deal_line_items(object_id)
            logger.info("line_items_found", object_id=object_id, count=len(line_items))

            requirements = self.catalog.load()
            if not requirements:
                logger.error("no_requirements_loaded", url=self.catalog.url)
                return DealRequirementsResponse(has_matches=False, error=NO_REQUIREMENTS_ERROR)

            matches = self.matcher.match(line_items, requirements)
            if not matches:
                logger.info(
                    "no_matches_found",
                    object_id=object_id,
                    line_items=len(line_items),
                    requirements=len(requirements)
                )
                return DealRequirementsResponse(
                    has_matches=False,
                    debug=MatchDebug(
                        line_items_count=len(line_items),
                        requirements_count=len(requirements),
                        line_items_skus=[item.sku_code for item in line_items],
                        requirements_skus=[record.sku for record in requirements]
                    )
                )

            products = self.assembler.assemble(object_id, matches)

            logger.info("deal_requirements_complete", object_id=object_id, products=len(products))
            return DealRequirementsResponse(has_matches=True, matched_products=products)

        except Exception as e:
            logger.error(
                "deal_requirements_failed",
                object_id=object_id,
                error=str(e),
                error_type=type(e).__name__
            )
            return DealRequirementsResponse(
                has_matches=False,
                error=str(e) or type(e).__name__,
                stack=traceback.format_exc()
            )


def get_deal_requirements_service(crm: HubSpotClient) -> DealRequirementsService:
    """Wire the flow around one CRM client."""
    return DealRequirementsService(
        line_items=crm,
        catalog=get_requirement_catalog(),
        matcher=get_sku_matcher(),
        assembler=get_property_assembler(crm)
    )
