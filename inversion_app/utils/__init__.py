"""
Utility functions module.

Time Semantics:
- Transaction dates are calendar days with no time component
- A calendar day is anchored at its midnight in UTC when measured against an instant
- Callers pass "now" explicitly; only the default clock reads the wall clock
"""
