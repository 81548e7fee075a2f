"""
Data models, parsing and boundary validation module.

Turns wire payloads into validated, immutable records and holds the static
benchmark catalog and the settings model.
"""
