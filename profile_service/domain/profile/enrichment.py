"""
Enrichment results.

An enrichment stage either obtains its value from a store or falls back
to a safe default. Both outcomes are carried as an EnrichmentResult so
the fallback policy stays explicit instead of hiding in except blocks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class EnrichmentResult(Generic[T]):
    """
    Value obtained from a store, or degraded default.

    Example:
        >>> EnrichmentResult.ok(3).degraded
        False
        >>> result = EnrichmentResult.fallback(0, RuntimeError("down"))
        >>> result.degraded, result.value
        (True, 0)
    """

    value: T
    error: Optional[BaseException] = None

    @property
    def degraded(self) -> bool:
        return self.error is not None

    @classmethod
    def ok(cls, value: T) -> EnrichmentResult[T]:
        return cls(value=value)

    @classmethod
    def fallback(cls, default: T, error: BaseException) -> EnrichmentResult[T]:
        return cls(value=default, error=error)


async def attempt(call: Callable[[], Awaitable[T]], default: T) -> EnrichmentResult[T]:
    """Run a store call, turning any failure into a degraded result.

    Args:
        call: Zero-argument callable returning the awaitable to run
        default: Value used when the call fails

    Returns:
        EnrichmentResult with the store value or the default
    """
    try:
        value = await call()
    except Exception as e:
        return EnrichmentResult.fallback(default, e)
    return EnrichmentResult.ok(value)
