"""
Shared utilities module.

Number parsing and display helpers used by the ranking view-model and the
agent session.
"""

from .formatters import (
    format_asset_type,
    parse_decimal,
    parse_leading_number,
)

__all__ = [
    "parse_decimal",
    "parse_leading_number",
    "format_asset_type",
]
