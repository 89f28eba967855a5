"""
Deal line item as read from the CRM.
"""

from pydantic import ConfigDict, Field, field_validator
from typing import Any, Optional

from models.base import CamelSchema


class LineItem(CamelSchema):
    """
    A product line on a deal.

    sku_code may be missing or blank; such items are never matched.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="CRM line item ID")
    sku_code: Optional[str] = Field(None, description="Identifying product code")
    display_name: Optional[str] = Field(None, description="Line item name")

    @field_validator("id", "sku_code", mode="before")
    @classmethod
    def coerce_to_string(cls, v: Any) -> Any:
        """CRM IDs sometimes arrive as numbers."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @property
    def has_sku(self) -> bool:
        return bool(self.sku_code and self.sku_code.strip())
