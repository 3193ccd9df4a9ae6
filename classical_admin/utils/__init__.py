"""Utility modules for formatting and input normalization."""

from .formatting import clean_text, extract_year, format_life, initials, sanitize_key

__all__ = [
    "clean_text",
    "extract_year",
    "format_life",
    "initials",
    "sanitize_key",
]
