"""Gas prices — AAA state/national averages with static fallbacks.

AAA publishes a "Current Avg." row per state at
``gasprices.aaa.com/?state=XX``; the national page uses the same table
layout.  When scraping fails we drop to a per-state table, then to a
national constant.
"""

from __future__ import annotations

import logging
import math
import re

import httpx
from bs4 import BeautifulSoup, Tag

from evgas_calculator.config.settings import Settings
from evgas_calculator.models.prices import PriceResult, RegionInfo
from evgas_calculator.pricing.cache import NATIONAL_KEY

logger = logging.getLogger(__name__)

NATIONAL_GAS_FALLBACK = PriceResult(
    regular=3.50,
    premium=4.00,
    source="National average (fallback)",
)

_HTML_ACCEPT = (
    "text/html,application/xhtml+xml,application/xml;q=0.9,"
    "image/avif,image/webp,*/*;q=0.8"
)

# (regular, premium) $/gal, periodic snapshot of state averages
STATIC_STATE_GAS_PRICES: dict[str, tuple[float, float]] = {
    "AL": (3.20, 3.70), "AK": (4.10, 4.60), "AZ": (3.60, 4.10), "AR": (3.15, 3.65),
    "CA": (4.80, 5.20), "CO": (3.40, 3.90), "CT": (3.50, 4.00), "DE": (3.30, 3.80),
    "FL": (3.40, 3.90), "GA": (3.25, 3.75), "HI": (4.80, 5.30), "ID": (3.60, 4.10),
    "IL": (3.70, 4.20), "IN": (3.50, 4.00), "IA": (3.30, 3.80), "KS": (3.20, 3.70),
    "KY": (3.30, 3.80), "LA": (3.10, 3.60), "ME": (3.40, 3.90), "MD": (3.50, 4.00),
    "MA": (3.50, 4.00), "MI": (3.50, 4.00), "MN": (3.40, 3.90), "MS": (3.15, 3.65),
    "MO": (3.20, 3.70), "MT": (3.50, 4.00), "NE": (3.30, 3.80), "NV": (4.20, 4.70),
    "NH": (3.40, 3.90), "NJ": (3.40, 3.90), "NM": (3.30, 3.80), "NY": (3.60, 4.10),
    "NC": (3.30, 3.80), "ND": (3.40, 3.90), "OH": (3.40, 3.90), "OK": (3.10, 3.60),
    "OR": (4.00, 4.50), "PA": (3.60, 4.10), "RI": (3.50, 4.00), "SC": (3.25, 3.75),
    "SD": (3.30, 3.80), "TN": (3.20, 3.70), "TX": (3.10, 3.60), "UT": (3.50, 4.00),
    "VT": (3.40, 3.90), "VA": (3.40, 3.90), "WA": (4.20, 4.70), "WV": (3.30, 3.80),
    "WI": (3.40, 3.90), "WY": (3.40, 3.90), "DC": (3.70, 4.20),
}


def static_state_gas_price(state_code: str, prices: tuple[float, float]) -> PriceResult:
    regular, premium = prices
    return PriceResult(
        regular=regular,
        premium=premium,
        source=f"State fallback average for {state_code}",
    )


# ═══════════════════════════════════════════════════════════════════════════
# AAA page parsing
# ═══════════════════════════════════════════════════════════════════════════

def parse_price(value: str | None) -> float | None:
    """'$3.459' → 3.459; None for blanks or junk."""
    if not value:
        return None
    normalized = re.sub(r"[^0-9.]", "", value)
    if not normalized:
        return None
    try:
        parsed = float(normalized)
    except ValueError:
        return None
    return parsed if math.isfinite(parsed) else None


def _is_current_average(label: str) -> bool:
    return label.replace(".", "").strip().lower() == "current avg"


def _first_cell_text(row: Tag) -> str:
    cell = row.find("td")
    return cell.get_text(strip=True) if cell else ""


def _find_price_table(soup: BeautifulSoup) -> Tag | None:
    heading = soup.select_one("h1.nati")
    if heading is not None:
        wrapper = heading.find_next_sibling("div", class_="tblwrap")
        if wrapper is not None:
            table = wrapper.select_one("table.table-mob")
            if table is not None:
                return table

    for table in soup.select("table.table-mob"):
        first_row = table.select_one("tbody tr")
        if first_row is not None and _is_current_average(_first_cell_text(first_row)):
            return table
    return None


def parse_aaa_table(html: str, region_label: str) -> PriceResult | None:
    """Pull regular/premium from the "Current Avg." row of an AAA page."""
    soup = BeautifulSoup(html, "html.parser")

    region_name = ""
    heading = soup.select_one("h1.nati")
    if heading is not None:
        span = heading.find("span")
        if span is not None:
            region_name = span.get_text(strip=True)
    region_name = region_name or region_label or "Regional"

    table = _find_price_table(soup)
    if table is None:
        logger.warning("AAA: could not locate price table for %s", region_label)
        return None

    header_row = table.select_one("thead tr")
    headers = (
        [th.get_text(strip=True).lower() for th in header_row.find_all("th")]
        if header_row is not None
        else []
    )

    current_row = next(
        (row for row in table.select("tbody tr") if _is_current_average(_first_cell_text(row))),
        None,
    )
    if current_row is None:
        logger.warning('AAA: missing "Current Avg." row for %s', region_label)
        return None

    regular_text: str | None = None
    premium_text: str | None = None
    for index, cell in enumerate(current_row.find_all("td")):
        header = headers[index] if index < len(headers) else ""
        if header in ("regular", "regular unleaded"):
            regular_text = cell.get_text(strip=True)
        elif header == "premium":
            premium_text = cell.get_text(strip=True)

    regular = parse_price(regular_text)
    premium = parse_price(premium_text)
    if regular is None or premium is None:
        logger.warning("AAA: unable to parse regular/premium prices for %s", region_label)
        return None

    return PriceResult(
        regular=regular,
        premium=premium,
        source=f"AAA {region_name} average",
    )


# ═══════════════════════════════════════════════════════════════════════════
# Live sources
# ═══════════════════════════════════════════════════════════════════════════

class _AAASource:
    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = client
        self._base_url = settings.aaa_base_url

    async def _fetch_page(self, params: dict[str, str] | None, label: str) -> PriceResult | None:
        resp = await self._client.get(
            self._base_url,
            params=params,
            headers={"Accept": _HTML_ACCEPT},
        )
        resp.raise_for_status()
        return parse_aaa_table(resp.text, label)


class AAAStateGasSource(_AAASource):
    """Scrapes one state's average from AAA."""

    name = "AAA state average"

    def cache_key(self, region: RegionInfo | None) -> str | None:
        if region is None or not region.state_code:
            return None
        return region.state_code.upper()

    async def fetch(self, region: RegionInfo | None) -> PriceResult | None:
        state = self.cache_key(region)
        if state is None:
            return None
        return await self._fetch_page({"state": state}, state)


class AAANationalGasSource(_AAASource):
    """Scrapes the national average from the AAA front page."""

    name = "AAA national average"

    def cache_key(self, region: RegionInfo | None) -> str | None:
        return NATIONAL_KEY

    async def fetch(self, region: RegionInfo | None) -> PriceResult | None:
        return await self._fetch_page(None, "National")
