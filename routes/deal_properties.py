"""
Deal property update routes.

The only endpoint that reports a CRM failure as an HTTP error: the
editor must know when a save did not go through.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import structlog

from exceptions import AppError
from integrations.hubspot import HubSpotClient, get_hubspot_client
from models.deal_requirements import UpdateDealPropertiesRequest, UpdateDealPropertiesResponse
from services.deal_update_service import DealUpdateService, get_deal_update_service

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


def get_service(crm: HubSpotClient = Depends(get_hubspot_client)) -> DealUpdateService:
    """Per-request service (override in tests)."""
    return get_deal_update_service(crm)


# ===================
# ROUTES
# ===================

@router.post("/update", response_model=UpdateDealPropertiesResponse)
def update_deal_properties(
    data: UpdateDealPropertiesRequest,
    service: DealUpdateService = Depends(get_service)
):
    """
    Write edited properties to the deal.

    Body: {"objectId": "<deal id>", "properties": {"name": "value", ...}}

    Raises:
        422: Malformed request body
        503: CRM write failed
    """
    try:
        return service.update_properties(data.object_id, data.properties)

    except Exception as e:
        logger.error("deal_update_failed", object_id=data.object_id, error=str(e))
        return handle_error(e)
