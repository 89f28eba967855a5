"""
Deal property updates posted by the editor.
"""

from typing import Any, Protocol
import structlog

from integrations.hubspot import HubSpotClient
from models.deal_requirements import UpdateDealPropertiesResponse
from utils.text_utils import normalize_property_value

logger = structlog.get_logger(__name__)


class DealPropertyWriter(Protocol):
    """Persists deal properties (HubSpotClient in production)."""

    def update_deal_properties(self, deal_id: str, properties: dict[str, str]) -> dict:
        ...


class DealUpdateService:
    """
    Writes edited deal properties in one bulk call.

    Write failures are not caught: the editor must learn that the save
    did not happen.
    """

    def __init__(self, writer: DealPropertyWriter):
        self.writer = writer

    def update_properties(
        self,
        object_id: str,
        properties: dict[str, Any]
    ) -> UpdateDealPropertiesResponse:
        """
        Update deal properties.

        Args:
            object_id: Deal record ID
            properties: Property name -> edited value

        Returns:
            UpdateDealPropertiesResponse listing the written names

        Raises:
            HubSpotError: If the CRM write fails
        """
        payload = {name: normalize_property_value(value) for name, value in properties.items()}

        logger.info("deal_update_requested", object_id=object_id, properties=list(payload))
        self.writer.update_deal_properties(object_id, payload)

        return UpdateDealPropertiesResponse(success=True, updated=list(payload))


def get_deal_update_service(crm: HubSpotClient) -> DealUpdateService:
    """Create an update service bound to a CRM client."""
    return DealUpdateService(writer=crm)
