"""
Result type for external lookups that degrade to a default.

Catalog downloads, bulk deal reads and property metadata lookups never
raise past their call site. Instead they return a LookupResult, so
"used the default because the lookup failed" is a value the caller can
inspect and test rather than only a log line.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class LookupResult(Generic[T]):
    """Value of an external lookup plus whether it came from the fallback."""

    value: T
    used_default: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return not self.used_default

    @classmethod
    def success(cls, value: T) -> "LookupResult[T]":
        return cls(value=value)

    @classmethod
    def fallback(cls, value: T, error: str) -> "LookupResult[T]":
        return cls(value=value, used_default=True, error=error)
