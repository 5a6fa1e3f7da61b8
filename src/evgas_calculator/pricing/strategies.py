"""Fallback strategy chain — try each price source in order, first hit wins.

Three kinds of tier:
  - ``LiveStrategy``: wraps a network source; consults the cache first and
    stores fresh results.  Upstream failures are logged and become None.
  - ``StaticTableStrategy``: per-state averages embedded in the package.
  - ``ConstantStrategy``: national default; always succeeds, so every
    chain ends with one.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Protocol, Sequence, TypeVar

import httpx

from evgas_calculator.models.prices import RegionInfo
from evgas_calculator.pricing.cache import RegionPriceCache

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Everything a flaky upstream can throw at us: transport errors, bad JSON,
# unexpected payload shapes.
UPSTREAM_ERRORS = (
    httpx.HTTPError, ValueError, KeyError, IndexError, TypeError, AttributeError,
)


def json_object(value: Any, what: str) -> dict:
    """Return ``value`` if it is a JSON object, else raise ``ValueError``."""
    if not isinstance(value, dict):
        raise ValueError(f"{what}: expected a JSON object, got {type(value).__name__}")
    return value


class PriceStrategy(Protocol[T]):
    name: str

    async def resolve(self, region: RegionInfo | None) -> T | None: ...


class LiveSource(Protocol[T]):
    """A network-backed price source."""

    name: str

    def cache_key(self, region: RegionInfo | None) -> str | None:
        """Key to cache under, or None when this source cannot serve ``region``."""
        ...

    async def fetch(self, region: RegionInfo | None) -> T | None: ...


class LiveStrategy(Generic[T]):
    """Cache → live fetch → cache write."""

    def __init__(
        self,
        source: LiveSource[T],
        cache: RegionPriceCache | None = None,
        namespace: str = "",
    ) -> None:
        self.name = source.name
        self._source = source
        self._cache = cache
        self._namespace = namespace or source.name

    async def resolve(self, region: RegionInfo | None) -> T | None:
        key = self._source.cache_key(region)
        if key is None:
            return None

        if self._cache is not None:
            cached = self._cache.get(self._namespace, key)
            if cached is not None:
                logger.debug("%s: cache hit for %s", self.name, key)
                return cached

        try:
            result = await self._source.fetch(region)
        except UPSTREAM_ERRORS as exc:
            logger.warning("%s: live fetch failed for %s: %s", self.name, key, exc)
            return None

        if result is None:
            logger.debug("%s: no usable data for %s", self.name, key)
            return None

        if self._cache is not None:
            self._cache.put(self._namespace, key, result)
        return result


class StaticTableStrategy(Generic[T]):
    """Per-state table lookup keyed by the geocoded state code."""

    def __init__(
        self,
        name: str,
        table: dict[str, Any],
        build: Callable[[str, Any], T],
    ) -> None:
        self.name = name
        self._table = table
        self._build = build

    async def resolve(self, region: RegionInfo | None) -> T | None:
        if region is None or not region.state_code:
            return None
        code = region.state_code.upper()
        entry = self._table.get(code)
        if entry is None:
            return None
        return self._build(code, entry)


class ConstantStrategy(Generic[T]):
    """Hardcoded default — the tier that cannot fail."""

    def __init__(self, name: str, value: T) -> None:
        self.name = name
        self._value = value

    async def resolve(self, region: RegionInfo | None) -> T | None:
        return self._value


async def run_chain(
    strategies: Sequence[PriceStrategy[T]],
    region: RegionInfo | None,
) -> T:
    """Return the first non-None result from ``strategies``."""
    for strategy in strategies:
        result = await strategy.resolve(region)
        if result is not None:
            logger.debug(
                "Resolved %s via %s",
                region.state_code if region and region.state_code else "national",
                strategy.name,
            )
            return result
    raise RuntimeError("Price chain exhausted without a constant fallback tier")
