"""
Result models module.

Immutable value objects produced by the portfolio computations.
"""
