"""
HubSpot CRM integration.

Reads deal line items and deal properties, reads property definitions,
and writes deal property updates through the CRM v3 REST API.
"""

from typing import Any, Iterable, Optional
from urllib.parse import quote
import requests
import structlog

from config import settings
from exceptions import HubSpotError, HubSpotNotConfiguredError
from models.line_item import LineItem

logger = structlog.get_logger(__name__)


# Association key spellings seen in deal responses
LINE_ITEM_ASSOCIATION_KEYS = ("line items", "line_items")

# HubSpot batch read limit
BATCH_READ_LIMIT = 100


class HubSpotClient:
    """
    Thin HubSpot CRM client.

    Every method raises HubSpotError on transport or HTTP failure; callers
    decide whether to degrade or propagate.
    """

    def __init__(
        self,
        access_token: Optional[str],
        api_base: str = "https://api.hubapi.com",
        timeout: float = 10,
        sku_property: str = "hs_product_id",
        session: Optional[requests.Session] = None
    ):
        self.access_token = access_token
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.sku_property = sku_property
        self.session = session or requests.Session()

    # ===================
    # TRANSPORT
    # ===================

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        json: Optional[dict] = None
    ) -> dict:
        if not self.access_token:
            raise HubSpotNotConfiguredError()

        url = f"{self.api_base}{path}"
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }

        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error(
                "hubspot_http_error",
                method=method,
                path=path,
                status=status,
                error=str(e)
            )
            raise HubSpotError(f"HubSpot {method} {path} failed: {e}", status=status) from e
        except requests.exceptions.RequestException as e:
            logger.error("hubspot_request_failed", method=method, path=path, error=str(e))
            raise HubSpotError(f"HubSpot {method} {path} failed: {e}") from e

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise HubSpotError(f"HubSpot {method} {path} returned invalid JSON") from e

    # ===================
    # LINE ITEMS
    # ===================

    def get_line_item_ids(self, deal_id: str) -> list[str]:
        """
        Get IDs of the line items associated with a deal.

        Args:
            deal_id: Deal record ID

        Returns:
            Line item IDs in association order (empty if none)
        """
        data = self._request(
            "GET",
            f"/crm/v3/objects/deals/{quote(deal_id, safe='')}",
            params={"associations": "line_items", "archived": "false"}
        )

        associations = data.get("associations") or {}
        association = None
        for key in LINE_ITEM_ASSOCIATION_KEYS:
            if associations.get(key):
                association = associations[key]
                break

        if not association or not association.get("results"):
            return []

        ids = [str(item["id"]) for item in association["results"] if item.get("id") is not None]
        # Paired associations can list the same item twice
        return list(dict.fromkeys(ids))

    def batch_read_line_items(self, line_item_ids: Iterable[str]) -> list[LineItem]:
        """
        Read name and SKU of line items in batches.

        Args:
            line_item_ids: Line item IDs

        Returns:
            LineItem list in response order
        """
        ids = list(line_item_ids)
        line_items: list[LineItem] = []

        for start in range(0, len(ids), BATCH_READ_LIMIT):
            chunk = ids[start:start + BATCH_READ_LIMIT]
            data = self._request(
                "POST",
                "/crm/v3/objects/line_items/batch/read",
                json={
                    "inputs": [{"id": line_item_id} for line_item_id in chunk],
                    "properties": ["name", self.sku_property],
                }
            )
            for row in data.get("results") or []:
                properties = row.get("properties") or {}
                line_items.append(
                    LineItem(
                        id=row.get("id"),
                        sku_code=properties.get(self.sku_property),
                        display_name=properties.get("name")
                    )
                )

        return line_items

    def get_deal_line_items(self, deal_id: str) -> list[LineItem]:
        """
        Get the line items of a deal.

        Args:
            deal_id: Deal record ID

        Returns:
            LineItem list (empty if the deal has none)

        Raises:
            HubSpotError: If a CRM call fails
        """
        line_item_ids = self.get_line_item_ids(deal_id)
        logger.info("deal_line_item_ids", deal_id=deal_id, count=len(line_item_ids))

        if not line_item_ids:
            return []

        line_items = self.batch_read_line_items(line_item_ids)
        logger.info(
            "deal_line_items_read",
            deal_id=deal_id,
            count=len(line_items),
            skus=[item.sku_code for item in line_items]
        )
        return line_items

    # ===================
    # DEAL PROPERTIES
    # ===================

    def get_deal_properties(self, deal_id: str, names: list[str]) -> dict[str, Optional[str]]:
        """
        Read current values of deal properties in one call.

        Args:
            deal_id: Deal record ID
            names: Property names

        Returns:
            Mapping of property name to value (None when unset)
        """
        if not names:
            return {}

        data = self._request(
            "GET",
            f"/crm/v3/objects/deals/{quote(deal_id, safe='')}",
            params={"properties": ",".join(names)}
        )
        return dict(data.get("properties") or {})

    def get_property_metadata(self, name: str, object_type: str = "deals") -> dict[str, Any]:
        """
        Read a property definition (type, fieldType, options, label...).

        Args:
            name: Property name
            object_type: CRM object type

        Returns:
            Raw property definition
        """
        return self._request(
            "GET",
            f"/crm/v3/properties/{object_type}/{quote(name, safe='')}"
        )

    def update_deal_properties(self, deal_id: str, properties: dict[str, str]) -> dict[str, Any]:
        """
        Write deal properties in one call.

        Args:
            deal_id: Deal record ID
            properties: Property name -> value

        Returns:
            Updated deal record

        Raises:
            HubSpotError: If the write fails
        """
        logger.info("updating_deal_properties", deal_id=deal_id, properties=list(properties))
        result = self._request(
            "PATCH",
            f"/crm/v3/objects/deals/{quote(deal_id, safe='')}",
            json={"properties": properties}
        )
        logger.info("deal_properties_updated", deal_id=deal_id)
        return result


def get_hubspot_client() -> HubSpotClient:
    """Create a HubSpot client from settings (one per request)."""
    if not settings.hubspot_configured:
        logger.warning("hubspot_not_configured")

    return HubSpotClient(
        access_token=settings.hubspot_access_token,
        api_base=settings.hubspot_api_base,
        timeout=settings.hubspot_timeout_seconds,
        sku_property=settings.line_item_sku_property
    )
