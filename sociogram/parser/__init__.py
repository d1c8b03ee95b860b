"""
Parser module for Sociogram.

This module converts pasted "Name: Friend1, Friend2" text into
relationship data and rejects malformed input.
"""

from sociogram.parser.text import (
    DataFormatError,
    format_relationships,
    parse_line,
    parse_relationships,
)

__all__ = [
    "DataFormatError",
    "format_relationships",
    "parse_line",
    "parse_relationships",
]
