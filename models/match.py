"""
SKU match results.
"""

from enum import Enum
from pydantic import ConfigDict

from models.base import CamelSchema
from models.line_item import LineItem
from models.requirement import RequirementRecord


class MatchStrategyName(str, Enum):
    """Strategies in priority order."""
    EXACT = "exact"
    SUFFIX = "suffix"
    BARE_NUMBER = "bare_number"
    SUBSTRING = "substring"


class MatchResult(CamelSchema):
    """One line item paired with the requirement it resolved to."""

    model_config = ConfigDict(frozen=True)

    line_item: LineItem
    requirement: RequirementRecord
    product_name: str
    strategy: MatchStrategyName
