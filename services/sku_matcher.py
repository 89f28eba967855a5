"""
SKU matching between deal line items and the requirement catalog.

Line item codes come from the CRM product catalog (bare codes like "123"),
requirement SKUs from the requirements file (often category-prefixed like
"DOCU-GRAL-123"). Each line item is resolved by trying strategies in
priority order:

    1. exact        requirement.sku == code
    2. suffix       requirement.sku ends with code
    3. bare_number  requirement.sku minus its leading [A-Z-]+ run == code
    4. substring    code appears anywhere in requirement.sku (opt-in)

The first strategy satisfied by any catalog record wins, and within it the
first record in catalog order wins. Catalog authors control precedence by
ordering the file.
"""

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence
import structlog

from config import settings
from models.line_item import LineItem
from models.match import MatchResult, MatchStrategyName
from models.requirement import RequirementRecord
from utils.text_utils import clean_sku

logger = structlog.get_logger(__name__)


CATEGORY_PREFIX = re.compile(r"^[A-Z-]+")


def strip_category_prefix(sku: str) -> str:
    """'SERV-45' -> '45', 'DOCU-GRAL-123' -> '123', '45' -> '45'."""
    return CATEGORY_PREFIX.sub("", sku, count=1)


# ===================
# STRATEGIES
# ===================

@dataclass(frozen=True)
class MatchStrategy:
    """A named predicate over (requirement SKU, line item code)."""

    name: MatchStrategyName
    predicate: Callable[[str, str], bool]

    def matches(self, requirement: RequirementRecord, code: str) -> bool:
        return self.predicate(requirement.sku, code)

    def first_match(
        self,
        code: str,
        catalog: Iterable[RequirementRecord]
    ) -> Optional[RequirementRecord]:
        """First record in catalog order satisfying this strategy."""
        return next((record for record in catalog if self.matches(record, code)), None)


EXACT = MatchStrategy(
    MatchStrategyName.EXACT,
    lambda sku, code: sku == code
)
SUFFIX = MatchStrategy(
    MatchStrategyName.SUFFIX,
    lambda sku, code: sku.endswith(code)
)
BARE_NUMBER = MatchStrategy(
    MatchStrategyName.BARE_NUMBER,
    lambda sku, code: strip_category_prefix(sku) == code
)
SUBSTRING = MatchStrategy(
    MatchStrategyName.SUBSTRING,
    lambda sku, code: code in sku
)

DEFAULT_STRATEGIES: tuple[MatchStrategy, ...] = (EXACT, SUFFIX, BARE_NUMBER)


# ===================
# MATCHER
# ===================

class SkuMatcher:
    """
    Resolves line items to requirement records.

    Deterministic, never mutates its inputs, never raises for bad data:
    items without a code or without a matching record are skipped.
    """

    def __init__(
        self,
        strategies: Sequence[MatchStrategy] = DEFAULT_STRATEGIES,
        placeholder_name: str = "Produto sem nome"
    ):
        self.strategies = tuple(strategies)
        self.placeholder_name = placeholder_name

    @classmethod
    def with_substring_fallback(cls, placeholder_name: str = "Produto sem nome") -> "SkuMatcher":
        """Matcher with the substring strategy appended at lowest priority."""
        return cls(DEFAULT_STRATEGIES + (SUBSTRING,), placeholder_name)

    def find_requirement(
        self,
        code: Optional[str],
        catalog: Sequence[RequirementRecord]
    ) -> Optional[tuple[RequirementRecord, MatchStrategy]]:
        """
        Resolve a single code.

        Args:
            code: Line item SKU code
            catalog: Requirement records in catalog order

        Returns:
            (record, strategy) for the first strategy that matches, or None
        """
        code = clean_sku(code)
        if code is None:
            return None

        for strategy in self.strategies:
            record = strategy.first_match(code, catalog)
            if record is not None:
                return record, strategy
        return None

    def match(
        self,
        line_items: Sequence[LineItem],
        catalog: Sequence[RequirementRecord]
    ) -> list[MatchResult]:
        """
        Match every line item against the catalog.

        Args:
            line_items: Deal line items in CRM order
            catalog: Requirement records in catalog order

        Returns:
            At most one MatchResult per line item, in line item order
        """
        logger.info(
            "sku_matching_started",
            line_items=len(line_items),
            requirements=len(catalog),
            strategies=[strategy.name.value for strategy in self.strategies]
        )

        matches = []
        for line_item in line_items:
            if not line_item.has_sku:
                logger.info("line_item_without_sku", line_item_id=line_item.id)
                continue

            found = self.find_requirement(line_item.sku_code, catalog)
            if found is None:
                logger.info(
                    "sku_unmatched",
                    line_item_id=line_item.id,
                    sku=line_item.sku_code
                )
                continue

            record, strategy = found
            logger.info(
                "sku_match_found",
                line_item_id=line_item.id,
                sku=line_item.sku_code,
                requirement_sku=record.sku,
                strategy=strategy.name.value
            )
            matches.append(
                MatchResult(
                    line_item=line_item,
                    requirement=record,
                    product_name=line_item.display_name or self.placeholder_name,
                    strategy=strategy.name
                )
            )

        logger.info("sku_matching_complete", matches=len(matches))
        return matches


def get_sku_matcher() -> SkuMatcher:
    """Create a matcher from settings."""
    if settings.sku_substring_fallback:
        return SkuMatcher.with_substring_fallback(settings.product_name_placeholder)
    return SkuMatcher(placeholder_name=settings.product_name_placeholder)
