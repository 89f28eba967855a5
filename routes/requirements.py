"""
Requirement catalog inspection route.
"""

from fastapi import APIRouter, Depends
import structlog

from models.requirement import RequirementsCatalogResponse
from services.requirement_catalog_service import RequirementCatalog, get_requirement_catalog

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=RequirementsCatalogResponse)
def list_requirements(catalog: RequirementCatalog = Depends(get_requirement_catalog)):
    """
    Load the remote catalog and return what was understood.

    Useful to check SKUs when a deal shows no matches.
    """
    requirements = catalog.load()
    logger.info("requirements_listed", count=len(requirements))

    return RequirementsCatalogResponse(
        count=len(requirements),
        skus=[record.sku for record in requirements],
        requirements=requirements
    )
