"""Tests for pricing/cache.py."""

from __future__ import annotations

import threading

import pytest

from evgas_calculator.models.prices import PriceResult
from evgas_calculator.pricing.cache import NATIONAL_KEY, RegionPriceCache

CA = PriceResult(regular=4.81, premium=5.20, source="AAA California average")


def test_miss_returns_none(cache: RegionPriceCache):
    assert cache.get("gas", "CA") is None


def test_hit_within_ttl(cache: RegionPriceCache, clock):
    cache.put("gas", "CA", CA)
    clock.advance(12 * 60 * 60 - 1)
    assert cache.get("gas", "CA") == CA


def test_stale_after_ttl(cache: RegionPriceCache, clock):
    cache.put("gas", "CA", CA)
    clock.advance(12 * 60 * 60)
    assert cache.get("gas", "CA") is None


def test_overwrite_resets_timestamp(cache: RegionPriceCache, clock):
    cache.put("gas", "CA", CA)
    clock.advance(11 * 60 * 60)
    newer = CA.model_copy(update={"regular": 4.70})
    cache.put("gas", "CA", newer)
    clock.advance(2 * 60 * 60)
    assert cache.get("gas", "CA") == newer
    assert len(cache) == 1


def test_keys_normalised_and_namespaced(cache: RegionPriceCache):
    cache.put("gas", " ca ", CA)
    assert cache.get("gas", "CA") == CA
    assert cache.get("electricity", "CA") is None


def test_national_key(cache: RegionPriceCache):
    cache.put("gas", NATIONAL_KEY, CA)
    assert cache.get("gas", NATIONAL_KEY) == CA
    assert cache.get("gas", "NATIONAL") is None


def test_clear(cache: RegionPriceCache):
    cache.put("gas", "CA", CA)
    cache.clear()
    assert len(cache) == 0


def test_concurrent_writers_leave_consistent_entries():
    cache = RegionPriceCache(ttl_seconds=60)

    def writer(i: int) -> None:
        for _ in range(200):
            cache.put("gas", f"S{i % 5}", i)

    threads = [threading.Thread(target=writer, args=(i,)) for i in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(cache) == 5
    for i in range(5):
        assert cache.get("gas", f"S{i}") % 5 == i


def test_stale_entry_removed_on_read(cache: RegionPriceCache, clock):
    cache.put("gas", "CA", CA)
    clock.advance(12 * 60 * 60)
    assert cache.get("gas", "CA") is None
    assert len(cache) == 0


def test_write_sweeps_expired_entries(cache: RegionPriceCache, clock):
    for i in range(200):
        cache.put("fast_charging", f"CA@{i}", CA)
    clock.advance(12 * 60 * 60)
    cache.put("gas", "CA", CA)
    assert len(cache) == 1


def test_size_capped_oldest_first(clock):
    cache = RegionPriceCache(ttl_seconds=60, clock=clock, max_entries=3)
    for region in ("CA", "NY", "TX", "WA"):
        cache.put("gas", region, region)
        clock.advance(1)
    assert len(cache) == 3
    assert cache.get("gas", "CA") is None
    assert cache.get("gas", "WA") == "WA"


def test_rewrite_refreshes_position(clock):
    cache = RegionPriceCache(ttl_seconds=60, clock=clock, max_entries=2)
    cache.put("gas", "CA", 1)
    cache.put("gas", "NY", 2)
    cache.put("gas", "CA", 3)
    cache.put("gas", "TX", 4)
    assert cache.get("gas", "NY") is None
    assert cache.get("gas", "CA") == 3


def test_max_entries_must_be_positive():
    with pytest.raises(ValueError):
        RegionPriceCache(max_entries=0)
