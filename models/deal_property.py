"""
Deal property schemas: values plus the metadata the editor needs
to render each field.
"""

from pydantic import Field
from typing import Any

from models.base import CamelSchema


class PropertyOption(CamelSchema):
    """Option of an enumeration property."""
    label: str
    value: str


class PropertyMetadata(CamelSchema):
    """
    Field metadata for a deal property.

    Mirrors the subset of the CRM property definition used by the editor.
    """

    type: str = Field("string", description="CRM data type (string, enumeration, bool, ...)")
    field_type: str = Field("text", description="CRM field widget (text, select, booleancheckbox, ...)")
    options: list[PropertyOption] = Field(default_factory=list)
    label: str
    description: str = ""

    @classmethod
    def default_for(cls, name: str) -> "PropertyMetadata":
        """Metadata used when the CRM lookup fails."""
        return cls(
            type="string",
            field_type="text",
            options=[],
            label=name,
            description=""
        )

    @classmethod
    def from_crm(cls, name: str, data: dict[str, Any]) -> "PropertyMetadata":
        """
        Build metadata from a CRM property definition.

        Labels fall back to displayName, then to the raw value / name.
        """
        options = [
            PropertyOption(
                label=str(option.get("label") or option.get("displayName") or option.get("value") or ""),
                value=str(option.get("value") or "")
            )
            for option in (data.get("options") or [])
        ]
        return cls(
            type=data.get("type") or "string",
            field_type=data.get("fieldType") or "text",
            options=options,
            label=data.get("label") or data.get("displayName") or name,
            description=data.get("description") or ""
        )


class PropertyDescriptor(CamelSchema):
    """A deal property with its current value and metadata."""
    name: str
    value: str = ""
    metadata: PropertyMetadata


class MatchedProduct(CamelSchema):
    """Editable properties for one matched product."""
    product_name: str
    sku: str
    properties: list[PropertyDescriptor]
