"""
Listing parser for real-estate result pages.

This module provides a generic extraction engine driven by per-site
profiles:
- Static HTML sites (httpx)
- JavaScript-rendered sites (Playwright)
"""

from .base import (
    ExtractionFailure,
    FieldName,
    ListingRecord,
    ParseResult,
    ScraperType,
    SiteProfile,
)
from .config import SITES, get_site_config, get_enabled_sites
from .exceptions import (
    ConfigurationError,
    NoItemsFoundError,
    ParseError,
    RequiredFieldError,
)
from .manager import ScraperManager
from .parser import ListingParser, parse

__all__ = [
    'ExtractionFailure',
    'FieldName',
    'ListingRecord',
    'ParseResult',
    'ScraperType',
    'SiteProfile',
    'SITES',
    'get_site_config',
    'get_enabled_sites',
    'ConfigurationError',
    'NoItemsFoundError',
    'ParseError',
    'RequiredFieldError',
    'ScraperManager',
    'ListingParser',
    'parse',
]
