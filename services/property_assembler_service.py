"""
Deal property assembly for matched products.

Given SKU matches, reads the current deal values for every property the
matched requirements list, plus each property's CRM definition, and groups
them per product for the editor. Read-only: nothing is written here.
"""

from concurrent.futures import ThreadPoolExecutor, wait
from typing import Optional, Protocol, Sequence
import structlog

from config import settings
from integrations.hubspot import HubSpotClient
from models.deal_property import MatchedProduct, PropertyDescriptor, PropertyMetadata
from models.lookup import LookupResult
from models.match import MatchResult

logger = structlog.get_logger(__name__)


class DealPropertySource(Protocol):
    """CRM calls the assembler depends on (HubSpotClient in production)."""

    def get_deal_properties(self, deal_id: str, names: list[str]) -> dict[str, Optional[str]]:
        ...

    def get_property_metadata(self, name: str, object_type: str = "deals") -> dict:
        ...


def collect_property_names(matches: Sequence[MatchResult]) -> list[str]:
    """Order-preserving union of propsDeal across all matches."""
    names: dict[str, None] = {}
    for match in matches:
        for name in match.requirement.props_deal:
            names.setdefault(name, None)
    return list(names)


class PropertyAssembler:
    """
    Builds MatchedProduct groups from matches.

    Metadata lookups run concurrently; each one that fails or times out
    falls back to PropertyMetadata.default_for(name) on its own.
    """

    def __init__(
        self,
        crm: DealPropertySource,
        max_workers: int = 8,
        metadata_timeout: float = 15
    ):
        self.crm = crm
        self.max_workers = max_workers
        self.metadata_timeout = metadata_timeout

    # ===================
    # VALUES
    # ===================

    def resolve_values(self, object_id: str, names: list[str]) -> LookupResult[dict[str, str]]:
        """
        Read current values for all names in one CRM call.

        Unset values become "". A failed call gives empty values for
        every name.
        """
        try:
            raw = self.crm.get_deal_properties(object_id, names)
        except Exception as e:
            logger.error(
                "deal_properties_fallback",
                object_id=object_id,
                properties=len(names),
                error=str(e)
            )
            return LookupResult.fallback({name: "" for name in names}, str(e))

        values = {name: _as_value(raw.get(name)) for name in names}
        return LookupResult.success(values)

    # ===================
    # METADATA
    # ===================

    def lookup_metadata(self, name: str) -> LookupResult[PropertyMetadata]:
        """Resolve one property definition, degrading to the default."""
        try:
            data = self.crm.get_property_metadata(name, "deals")
            return LookupResult.success(PropertyMetadata.from_crm(name, data or {}))
        except Exception as e:
            logger.warning("property_metadata_fallback", property=name, error=str(e))
            return LookupResult.fallback(PropertyMetadata.default_for(name), str(e))

    def resolve_metadata(self, names: list[str]) -> dict[str, LookupResult[PropertyMetadata]]:
        """
        Resolve metadata for all names concurrently.

        Lookups still running after metadata_timeout get the default.
        """
        if not names:
            return {}

        executor = ThreadPoolExecutor(max_workers=min(self.max_workers, len(names)))
        try:
            futures = {name: executor.submit(self.lookup_metadata, name) for name in names}
            done, _ = wait(futures.values(), timeout=self.metadata_timeout)

            results = {}
            for name, future in futures.items():
                if future in done:
                    results[name] = future.result()
                else:
                    logger.warning(
                        "property_metadata_timeout",
                        property=name,
                        timeout=self.metadata_timeout
                    )
                    results[name] = LookupResult.fallback(
                        PropertyMetadata.default_for(name),
                        f"Metadata lookup timed out after {self.metadata_timeout}s"
                    )
            return results
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    # ===================
    # ASSEMBLY
    # ===================

    def assemble(self, object_id: str, matches: Sequence[MatchResult]) -> list[MatchedProduct]:
        """
        Build one MatchedProduct per match.

        Args:
            object_id: Deal record ID
            matches: SKU matches

        Returns:
            Groups in match order, properties in each requirement's propsDeal order
        """
        names = collect_property_names(matches)
        logger.info("assembling_deal_properties", object_id=object_id, properties=names)

        values = self.resolve_values(object_id, names).value
        metadata = self.resolve_metadata(names)

        fallbacks = [name for name, result in metadata.items() if result.used_default]
        if fallbacks:
            logger.warning("property_metadata_defaults_used", properties=fallbacks)

        products = [
            MatchedProduct(
                product_name=match.product_name,
                sku=match.requirement.sku,
                properties=[
                    PropertyDescriptor(
                        name=name,
                        value=values.get(name, ""),
                        metadata=metadata[name].value
                    )
                    for name in match.requirement.props_deal
                ]
            )
            for match in matches
        ]

        logger.info("deal_properties_assembled", object_id=object_id, products=len(products))
        return products


def _as_value(value) -> str:
    if value is None:
        return ""
    return str(value)


def get_property_assembler(crm: HubSpotClient) -> PropertyAssembler:
    """Create an assembler bound to a CRM client."""
    return PropertyAssembler(
        crm=crm,
        max_workers=settings.metadata_max_workers,
        metadata_timeout=settings.metadata_timeout_seconds
    )
