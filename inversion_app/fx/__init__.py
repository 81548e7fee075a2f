"""
FX rate provider module.

Fetches ARS/USD quotes from the external source and hands out point-in-time
snapshots, degrading to stale, fallback or no rates when the source is down.
"""
from .provider import DolarApiFetcher, FxRateProvider, RateCache

__all__ = ["DolarApiFetcher", "FxRateProvider", "RateCache"]
