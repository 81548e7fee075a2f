"""Portfolio computations: conversion, rate resolution, totals and benchmark projection"""

from .aggregator import aggregate
from .benchmark import DAYS_PER_YEAR, compound, project
from .conversion import build_transaction, to_usd_equivalent
from .fx_resolver import resolve_rate
from .summary import summarize

__all__ = [
    "DAYS_PER_YEAR",
    "aggregate",
    "build_transaction",
    "compound",
    "project",
    "resolve_rate",
    "summarize",
    "to_usd_equivalent",
]
