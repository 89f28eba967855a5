"""
Requirement catalog loading and normalization.

The catalog is a remote JSON file shaped as an array of arrays of
{"sku": str, "propsDeal": [str, ...]} objects. Loading never raises:
any transport or parse failure yields an empty catalog, which callers
report as "no requirements loaded".
"""

import json
from collections.abc import Mapping
from typing import Any, Optional
import requests
import structlog

from config import settings
from exceptions import RequirementsSourceError
from models.lookup import LookupResult
from models.requirement import RequirementRecord

logger = structlog.get_logger(__name__)


# ===================
# NORMALIZATION
# ===================

def flatten_groups(raw: Any) -> list[Any]:
    """
    Flatten the top-level array of arrays by exactly one level.

    Non-array top-level elements are skipped. A non-array top level
    gives an empty list.
    """
    if not isinstance(raw, list):
        return []

    candidates: list[Any] = []
    for group in raw:
        if isinstance(group, list):
            candidates.extend(group)
    return candidates


def to_requirement(candidate: Any) -> Optional[RequirementRecord]:
    """
    Build a record from one candidate, or None if its shape is invalid.

    Valid means: a mapping with a string "sku" and a list "propsDeal".
    Non-string property names are dropped from propsDeal.
    """
    if not isinstance(candidate, Mapping):
        return None

    sku = candidate.get("sku")
    props_deal = candidate.get("propsDeal")
    if not isinstance(sku, str) or not isinstance(props_deal, list):
        return None

    return RequirementRecord(
        sku=sku,
        props_deal=tuple(name for name in props_deal if isinstance(name, str))
    )


def normalize_requirements(raw: Any) -> list[RequirementRecord]:
    """
    Turn the parsed catalog JSON into an ordered list of records.

    Invalid records are dropped; duplicate SKUs are kept in order.

    Args:
        raw: Parsed JSON value

    Returns:
        RequirementRecord list (possibly empty)
    """
    candidates = flatten_groups(raw)
    requirements = []
    dropped = 0

    for candidate in candidates:
        record = to_requirement(candidate)
        if record is None:
            dropped += 1
            continue
        requirements.append(record)

    if dropped:
        logger.warning("invalid_requirements_dropped", dropped=dropped, kept=len(requirements))

    return requirements


def parse_catalog_text(text: str, source: str = "") -> list[RequirementRecord]:
    """
    Parse raw catalog text.

    Args:
        text: Downloaded catalog body
        source: Catalog URL, for error details

    Returns:
        RequirementRecord list (possibly empty after filtering)

    Raises:
        RequirementsSourceError: If the body is empty, not JSON, or not an array
    """
    if not text or not text.strip():
        raise RequirementsSourceError(source, "Requirements body is empty")

    try:
        raw = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise RequirementsSourceError(source, f"Requirements body is not valid JSON: {e}") from e

    if not isinstance(raw, list):
        raise RequirementsSourceError(
            source,
            f"Requirements JSON must be an array, got {type(raw).__name__}"
        )

    return normalize_requirements(raw)


# ===================
# CATALOG
# ===================

class RequirementCatalog:
    """
    Requirement catalog backed by a single remote JSON file.

    A fresh instance is built per request; nothing is cached.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10,
        session: Optional[requests.Session] = None
    ):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_text(self) -> str:
        """
        Download the raw catalog text.

        Raises:
            RequirementsSourceError: On transport failure or non-2xx status
        """
        logger.info("fetching_requirements", url=self.url)

        try:
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise RequirementsSourceError(self.url, f"Failed to fetch requirements: {e}") from e

        text = response.text
        logger.info("requirements_downloaded", characters=len(text))
        return text

    def load_result(self) -> LookupResult[list[RequirementRecord]]:
        """
        Load the catalog, recording whether the empty fallback was used.

        Returns:
            LookupResult with the records; used_default is True when the
            download failed or the body could not be parsed
        """
        try:
            text = self.fetch_text()
        except RequirementsSourceError as e:
            logger.error("requirements_fetch_failed", url=self.url, error=e.message)
            return LookupResult.fallback([], e.message)

        try:
            requirements = parse_catalog_text(text, self.url)
        except RequirementsSourceError as e:
            logger.error("requirements_parse_failed", url=self.url, error=e.message)
            return LookupResult.fallback([], e.message)

        logger.info(
            "requirements_loaded",
            count=len(requirements),
            skus=[record.sku for record in requirements]
        )
        return LookupResult.success(requirements)

    def load(self) -> list[RequirementRecord]:
        """
        Load the catalog.

        Never raises; returns an empty list on any failure.
        """
        return self.load_result().value


def get_requirement_catalog() -> RequirementCatalog:
    """Create a catalog for the configured URL."""
    return RequirementCatalog(
        url=settings.requirements_url,
        timeout=settings.requirements_timeout_seconds
    )
