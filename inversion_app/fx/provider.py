"""
FX rate provider: fetches ARS/USD quotes and owns the snapshot cache.

The provider is the only component that talks to the network. It keeps the
last good snapshot in an explicit ``RateCache`` whose freshness is judged
against an injectable clock, so staleness can be simulated in tests without
sleeping.
"""

import socket
from dataclasses import dataclass
from datetime import datetime
from http.client import HTTPException
from typing import Any, Callable, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..config.defaults import FallbackRates, FxParams
from ..data.models import FxRatesSnapshot
from ..data.parsers import parse_dolarapi_rates, parse_json_payload, snapshot_from_fallback
from ..errors import MalformedDataError, RateFetchError
from ..logging.config import get_fx_logger, log_rate_fetch
from ..utils.time import Clock, elapsed_seconds, utc_now

logger = get_fx_logger(__name__)

Fetcher = Callable[[datetime], FxRatesSnapshot]


@dataclass
class RateCache:
    """Last successfully fetched snapshot and when it was fetched."""
    snapshot: Optional[FxRatesSnapshot] = None
    fetched_at: Optional[datetime] = None

    def is_fresh(self, now: datetime, ttl_seconds: float) -> bool:
        """True while the cached snapshot is younger than the TTL."""
        if self.snapshot is None or self.fetched_at is None:
            return False
        return elapsed_seconds(self.fetched_at, now) < ttl_seconds

    def store(self, snapshot: FxRatesSnapshot, now: datetime) -> None:
        """Replace the cached snapshot; snapshots never merge."""
        self.snapshot = snapshot
        self.fetched_at = now

    def clear(self) -> None:
        self.snapshot = None
        self.fetched_at = None


class DolarApiFetcher:
    """Fetches the ``/v1/dolares`` quote list from dolarapi.com."""

    def __init__(self, url: str, timeout_seconds: float = 5,
                 fallback: Optional[FallbackRates] = None):
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.fallback = _fallback_mapping(fallback or FallbackRates())

    def __call__(self, now: datetime) -> FxRatesSnapshot:
        """
        Fetch and parse current quotes.

        Args:
            now: Capture time stamped on the snapshot

        Raises:
            RateFetchError: On HTTP errors, network errors or an unreadable body
        """
        req = Request(
            self.url,
            headers={"Accept": "application/json", "User-Agent": "inversion-app/1.0"},
            method="GET",
        )

        try:
            with urlopen(req, timeout=self.timeout_seconds) as response:
                status = response.getcode()
                body = response.read()

        except HTTPError as e:
            raise RateFetchError(f"HTTP {e.code}: {e.reason}", source=self.url,
                                 status=e.code) from e

        except (OSError, URLError, socket.timeout, HTTPException) as e:
            raise RateFetchError(f"Network error: {e}", source=self.url) from e

        if not 200 <= status < 300:
            raise RateFetchError(f"API responded with status {status}", source=self.url,
                                 status=status)

        try:
            return parse_dolarapi_rates(parse_json_payload(body), self.fallback, now)
        except MalformedDataError as e:
            raise RateFetchError(f"Unreadable rate feed: {e}", source=self.url,
                                 status=status) from e


def _fallback_mapping(fallback: FallbackRates) -> dict[str, float]:
    return {
        "blue": fallback.blue,
        "official": fallback.official,
        "stock_exchange": fallback.stock_exchange,
        "cash_settlement": fallback.cash_settlement,
        "card": fallback.card,
        "wholesale": fallback.wholesale,
    }


class FxRateProvider:
    """
    Supplies the current FX snapshot, or None when rates are unavailable.

    Resolution order on each request:
    1. Cached snapshot younger than the TTL
    2. Freshly fetched snapshot (cached on success)
    3. Stale cached snapshot, if the fetch failed
    4. Fallback snapshot, if fallback rates are enabled
    5. None
    """

    def __init__(self,
                 fetcher: Optional[Fetcher] = None,
                 clock: Optional[Clock] = None,
                 ttl_seconds: float = 300,
                 fallback: Optional[FallbackRates] = None,
                 use_fallback_rates: bool = True,
                 source: str = "dolarapi"):
        self.fallback = fallback or FallbackRates()
        params = FxParams()
        self.fetcher: Fetcher = fetcher or DolarApiFetcher(
            params.api_url, params.timeout_seconds, self.fallback
        )
        self.clock: Clock = clock or utc_now
        self.ttl_seconds = ttl_seconds
        self.use_fallback_rates = use_fallback_rates
        self.source = source
        self.cache = RateCache()

    @classmethod
    def from_config(cls, config: dict[str, Any],
                    clock: Optional[Clock] = None,
                    fetcher: Optional[Fetcher] = None) -> "FxRateProvider":
        """Create a provider from the ``fx`` section of a merged config dict."""
        defaults = FxParams()
        fallback = FallbackRates(**config.get("fallback", {}))
        url = config.get("api_url", defaults.api_url)
        return cls(
            fetcher=fetcher or DolarApiFetcher(
                url, config.get("timeout_seconds", defaults.timeout_seconds), fallback
            ),
            clock=clock,
            ttl_seconds=config.get("cache_ttl_seconds", defaults.cache_ttl_seconds),
            fallback=fallback,
            use_fallback_rates=config.get("use_fallback_rates", True),
            source=url,
        )

    def current_snapshot(self) -> Optional[FxRatesSnapshot]:
        """Current rates; never raises on upstream failure."""
        now = self.clock()

        if self.cache.is_fresh(now, self.ttl_seconds):
            logger.debug("Serving cached FX rates", served="cached")
            return self.cache.snapshot

        try:
            snapshot = self.fetcher(now)
        except RateFetchError as e:
            return self._degraded_snapshot(now, e)

        self.cache.store(snapshot, now)
        log_rate_fetch(logger, self.source, success=True, served="fresh")
        return snapshot

    def invalidate(self) -> None:
        """Drop the cached snapshot so the next request fetches."""
        self.cache.clear()

    def _degraded_snapshot(self, now: datetime,
                           error: RateFetchError) -> Optional[FxRatesSnapshot]:
        context = {"error": str(error), "status": error.status}

        if self.cache.snapshot is not None:
            log_rate_fetch(logger, self.source, success=False, served="stale", context=context)
            return self.cache.snapshot

        if self.use_fallback_rates:
            log_rate_fetch(logger, self.source, success=False, served="fallback", context=context)
            return snapshot_from_fallback(_fallback_mapping(self.fallback), now)

        log_rate_fetch(logger, self.source, success=False, served="none", context=context)
        return None
