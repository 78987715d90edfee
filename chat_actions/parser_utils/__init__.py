"""Shared helper utilities for command parsing."""

from .text import collapse_whitespace, contains_keyword, first_keyword, split_name_list
from .datetime import find_date_in_text, find_datetime_in_text
from .names import extract_mentions, name_variants, resolve_names, strip_honorifics

__all__ = [
    "collapse_whitespace",
    "contains_keyword",
    "extract_mentions",
    "find_date_in_text",
    "find_datetime_in_text",
    "first_keyword",
    "name_variants",
    "resolve_names",
    "split_name_list",
    "strip_honorifics",
]
