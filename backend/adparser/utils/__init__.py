"""Shared utilities for the listing parser."""

from .normalizers import (
    normalize_text,
    resolve_url,
)
from .extractors import (
    extract_float,
    extract_int,
    contains_any,
    parse_published_at,
)
from .selectors import (
    select_all,
    select_first,
    select_text,
    select_attr,
    split_attribute_selector,
)

__all__ = [
    'normalize_text',
    'resolve_url',
    'extract_float',
    'extract_int',
    'contains_any',
    'parse_published_at',
    'select_all',
    'select_first',
    'select_text',
    'select_attr',
    'split_attribute_selector',
]
