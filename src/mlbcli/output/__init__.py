"""Output formatting for mlb-cli commands."""

from .formatter import Formatter, OutputFormat, format_table, parse_format

__all__ = [
    "Formatter",
    "OutputFormat",
    "format_table",
    "parse_format",
]
