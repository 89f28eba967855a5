"""
Requirement catalog records.
"""

from pydantic import ConfigDict, Field

from models.base import CamelSchema


class RequirementRecord(CamelSchema):
    """
    Catalog entry mapping a SKU to the deal properties it exposes.

    JSON form: {"sku": "DOCU-GRAL-123", "propsDeal": ["prop_a", "prop_b"]}
    """

    model_config = ConfigDict(frozen=True)

    sku: str = Field(..., description="Catalog SKU, possibly category-prefixed")
    props_deal: tuple[str, ...] = Field(
        default=(),
        description="Deal property names, in display order"
    )


class RequirementsCatalogResponse(CamelSchema):
    """Catalog inspection payload."""

    count: int
    skus: list[str]
    requirements: list[RequirementRecord]
