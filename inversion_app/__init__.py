"""
Inversion App - Real-Estate Contribution Tracker

Tracks USD and ARS contributions and withdrawals for a real-estate
investment, freezes ARS entries into USD at the FX rate active when they
are recorded, and compares the invested capital against the compounded
growth of a benchmark index.
"""

__version__ = "0.1.0"
__author__ = "Inversion Team"
