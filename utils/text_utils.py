"""
Text utilities for SKU codes and deal property values.

The CRM card shows boolean fields as Portuguese labels (Sim / Não);
they are converted back to CRM booleans before saving.
"""

from typing import Any, Optional


BOOLEAN_LABELS = {
    "Sim": "true",
    "Não": "false",
}


def clean_sku(code: Optional[str]) -> Optional[str]:
    """
    Return the SKU code unchanged, or None if it is empty/whitespace-only.

    The code itself is not stripped: catalog comparison is verbatim.

    Args:
        code: Raw SKU code from the CRM

    Returns:
        The code, or None when there is nothing to match
    """
    if code is None:
        return None
    if not code.strip():
        return None
    return code


def normalize_property_value(value: Any) -> str:
    """
    Convert an edited field value to the string form the CRM stores.

    - "Sim" / "Não" → "true" / "false" (exact labels only)
    - True / False → "true" / "false"
    - None → ""
    - anything else → str(value)

    Args:
        value: Value posted by the editor

    Returns:
        CRM property value string
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return BOOLEAN_LABELS.get(value, value)
    return str(value)
