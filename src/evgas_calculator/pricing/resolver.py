"""Price resolver — ZIP → region → electricity / gas / fast-charging prices.

Per lookup:
  1. validate the ZIP (the only error callers ever see)
  2. geocode once; a failed geocode just means "national"
  3. run each requested kind's strategy chain concurrently

Chains (first non-None wins):
  gas:           AAA state (cached) → state table → AAA national (cached) → constant
  electricity:   EIA (cached, needs key) → state table → constant
  fast_charging: NREL nearby stations (cached per grid cell) → longitude band → constant
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import threading
from typing import Iterable

import httpx

from evgas_calculator.config.settings import Settings, get_settings
from evgas_calculator.models.prices import (
    ALL_PRICE_KINDS,
    PriceKind,
    PriceLookupResult,
    PriceResult,
)
from evgas_calculator.pricing.cache import RegionPriceCache
from evgas_calculator.pricing.charging import (
    FAST_CHARGING_FALLBACK,
    NRELChargingSource,
    RegionalChargingEstimate,
)
from evgas_calculator.pricing.electricity import (
    NATIONAL_ELECTRICITY_FALLBACK,
    STATIC_STATE_ELECTRICITY_RATES,
    EIAElectricitySource,
    static_state_electricity_rate,
)
from evgas_calculator.pricing.gas import (
    NATIONAL_GAS_FALLBACK,
    STATIC_STATE_GAS_PRICES,
    AAANationalGasSource,
    AAAStateGasSource,
    static_state_gas_price,
)
from evgas_calculator.pricing.geocode import ZipGeocoder, reverse_geocode
from evgas_calculator.pricing.strategies import (
    ConstantStrategy,
    LiveStrategy,
    PriceStrategy,
    StaticTableStrategy,
    run_chain,
)
from evgas_calculator.pricing.validation import validate_zip_code

logger = logging.getLogger(__name__)


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """Shared async client with the configured timeout and User-Agent."""
    return httpx.AsyncClient(
        timeout=settings.http_timeout_seconds,
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    )


class LookupSequencer:
    """Last-request-wins guard.

    Every lookup takes a ticket; when its response arrives it may only be
    applied if no newer ticket has been issued since.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()

    def next_ticket(self) -> int:
        with self._lock:
            self._latest = next(self._counter)
            return self._latest

    def is_current(self, ticket: int) -> bool:
        with self._lock:
            return ticket == self._latest


class PriceResolver:
    """Resolves ZIP codes to energy prices through tiered fallbacks.

    Owns no global state: the cache is injected (one per process in
    production, one per test otherwise) and the HTTP client is either
    injected or built from settings and closed by ``aclose()``.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        cache: RegionPriceCache | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        if cache is None:
            cache = RegionPriceCache(
                ttl_seconds=self.settings.cache_ttl_seconds,
                max_entries=self.settings.cache_max_entries,
            )
        self.cache = cache
        self._owns_client = client is None
        self._client = client if client is not None else build_http_client(self.settings)
        self.sequencer = LookupSequencer()

        self._geocoder = ZipGeocoder(self._client, self.settings)

        national_gas = LiveStrategy(
            AAANationalGasSource(self._client, self.settings), self.cache, namespace="gas",
        )
        self._national_gas_chain: list[PriceStrategy] = [
            national_gas,
            ConstantStrategy("National gas constant", NATIONAL_GAS_FALLBACK),
        ]
        self._chains: dict[str, list[PriceStrategy]] = {
            "gas": [
                LiveStrategy(
                    AAAStateGasSource(self._client, self.settings), self.cache, namespace="gas",
                ),
                StaticTableStrategy(
                    "State gas table", STATIC_STATE_GAS_PRICES, static_state_gas_price,
                ),
                *self._national_gas_chain,
            ],
            "electricity": [
                LiveStrategy(
                    EIAElectricitySource(self._client, self.settings),
                    self.cache,
                    namespace="electricity",
                ),
                StaticTableStrategy(
                    "State electricity table",
                    STATIC_STATE_ELECTRICITY_RATES,
                    static_state_electricity_rate,
                ),
                ConstantStrategy("National electricity constant", NATIONAL_ELECTRICITY_FALLBACK),
            ],
            "fast_charging": [
                LiveStrategy(
                    NRELChargingSource(self._client, self.settings),
                    self.cache,
                    namespace="fast_charging",
                ),
                RegionalChargingEstimate(),
                ConstantStrategy("Fast charging constant", FAST_CHARGING_FALLBACK),
            ],
        }

    # ── lifecycle ──────────────────────────────────────────────────────

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> PriceResolver:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ── lookups ────────────────────────────────────────────────────────

    async def lookup(
        self,
        zip_code: str,
        kinds: Iterable[PriceKind] = ALL_PRICE_KINDS,
    ) -> PriceLookupResult:
        """Resolve the requested price kinds for a ZIP.

        Raises ``ZipCodeValidationError`` before any network call when the
        ZIP is malformed.  Never raises for upstream failures.
        """
        zip_code = validate_zip_code(zip_code)
        requested = list(dict.fromkeys(kinds))
        unknown = [k for k in requested if k not in self._chains]
        if unknown:
            raise ValueError(f"Unknown price kind(s): {', '.join(unknown)}")

        region = await self._geocoder.lookup(zip_code)
        if region is None or region.state_code is None:
            logger.info("No region for ZIP %s; using national prices", zip_code)

        resolved = await asyncio.gather(
            *(run_chain(self._chains[kind], region) for kind in requested)
        )
        return PriceLookupResult(
            zip_code=zip_code,
            region=region.state_code if region else None,
            **dict(zip(requested, resolved)),
        )

    async def lookup_latest(
        self,
        zip_code: str,
        kinds: Iterable[PriceKind] = ALL_PRICE_KINDS,
    ) -> PriceLookupResult | None:
        """Like ``lookup`` but returns None if a newer lookup started meanwhile."""
        ticket = self.sequencer.next_ticket()
        result = await self.lookup(zip_code, kinds)
        if not self.sequencer.is_current(ticket):
            logger.debug("Discarding superseded lookup for %s (ticket %d)", zip_code, ticket)
            return None
        return result

    async def national_gas_prices(self) -> PriceResult:
        return await run_chain(self._national_gas_chain, None)

    async def zip_from_coordinates(self, latitude: float, longitude: float) -> str | None:
        """Reverse-geocode a browser location to a ZIP for the next lookup."""
        return await reverse_geocode(self._client, self.settings, latitude, longitude)
