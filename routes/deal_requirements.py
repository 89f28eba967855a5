"""
Deal requirements API routes.

Called by the CRM deal card to get the editable properties for the
products on a deal.
"""

from fastapi import APIRouter, Depends
import structlog

from integrations.hubspot import HubSpotClient, get_hubspot_client
from models.deal_requirements import DealRequirementsRequest, DealRequirementsResponse
from services.deal_requirements_service import (
    DealRequirementsService,
    get_deal_requirements_service
)

logger = structlog.get_logger(__name__)

router = APIRouter()


def get_service(crm: HubSpotClient = Depends(get_hubspot_client)) -> DealRequirementsService:
    """Per-request service (override in tests)."""
    return get_deal_requirements_service(crm)


# ===================
# ROUTES
# ===================

@router.post("", response_model=DealRequirementsResponse, response_model_exclude_none=True)
def get_deal_requirements(
    data: DealRequirementsRequest,
    service: DealRequirementsService = Depends(get_service)
):
    """
    Match the deal's line items to requirements and return their properties.

    Body: {"propertiesToSend": {"objectId": "<deal id>"}}

    Always 200: empty and failure conditions are reported in the envelope
    (hasMatches false plus error or debug).
    """
    return service.get_requirements(data.properties_to_send.object_id)


@router.get("/{object_id}", response_model=DealRequirementsResponse, response_model_exclude_none=True)
def get_deal_requirements_by_id(
    object_id: str,
    service: DealRequirementsService = Depends(get_service)
):
    """Same as POST, with the deal ID in the path."""
    return service.get_requirements(object_id)
