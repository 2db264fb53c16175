"""
Core data structures for the listing parser.

This module defines the site profile consumed by the generic engine and
the records it produces. Per-site variation lives in SiteProfile values,
not in subclasses.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from .exceptions import ConfigurationError


# ANSI color codes for terminal output
class Colors:
    """ANSI color codes for colorized logging."""
    RESET = '\033[0m'
    BOLD = '\033[1m'

    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    CYAN = '\033[96m'
    GRAY = '\033[90m'

    @staticmethod
    def green(text):
        return f"{Colors.GREEN}{text}{Colors.RESET}"

    @staticmethod
    def yellow(text):
        return f"{Colors.YELLOW}{text}{Colors.RESET}"

    @staticmethod
    def red(text):
        return f"{Colors.RED}{text}{Colors.RESET}"

    @staticmethod
    def cyan(text):
        return f"{Colors.CYAN}{text}{Colors.RESET}"

    @staticmethod
    def gray(text):
        return f"{Colors.GRAY}{text}{Colors.RESET}"

    @staticmethod
    def bold(text):
        return f"{Colors.BOLD}{text}{Colors.RESET}"


class ScraperType(Enum):
    """Which page client a site needs."""
    STATIC = "static"           # httpx (no rendering)
    JAVASCRIPT = "javascript"   # Playwright (JS rendering)


class FieldName(str, Enum):
    """Selector keys understood by the engine."""
    AD_WRAPPER = "ad_wrapper"
    NEXT_PAGE_URL = "next_page_url"
    EXTERNAL_ID = "external_id"
    URL = "url"
    PRICE = "price"
    AREA = "area"
    ROOMS_COUNT = "rooms_count"
    LOCATION = "location"
    PUBLISHED_AT = "published_at"
    TITLE = "title"
    DESCRIPTION = "description"
    PHOTO = "photo"
    REAL_ESTATE_AGENT = "real_estate_agent"
    NEW_BUILD = "new_build"


REQUIRED_SELECTORS = (
    FieldName.URL,
    FieldName.PRICE,
    FieldName.AREA,
    FieldName.ROOMS_COUNT,
    FieldName.AD_WRAPPER,
)


@dataclass(frozen=True)
class SiteProfile:
    """
    Configuration for one target site.

    Selectors are CSS selectors evaluated inside one item wrapper (except
    ad_wrapper and next_page_url, which are evaluated against the page).
    An empty selector means the site does not expose that field.
    """
    site_id: str                                 # Unique key (e.g., 'seloger')
    name: str                                    # Full display name
    selectors: Mapping[Union[FieldName, str], str] = field(default_factory=dict)
    published_at_format: str = ''                # PHP date() tokens, e.g. 'd/m/Y'
    start_url: str = ''                          # First result page
    base_url: str = ''                           # For relative links
    scraper_type: ScraperType = ScraperType.STATIC
    enabled: bool = True                         # Whether to include in scrape_all

    def __post_init__(self):
        if not self.site_id or not self.site_id.strip():
            raise ConfigurationError("Site profile needs a non-empty site_id")

        normalized = {}
        for key, selector in dict(self.selectors).items():
            try:
                name = FieldName(key)
            except ValueError:
                raise ConfigurationError(
                    f"Unknown selector '{key}' in profile '{self.site_id}'"
                ) from None
            normalized[name.value] = (selector or '').strip()

        missing = [f.value for f in REQUIRED_SELECTORS if not normalized.get(f.value)]
        if missing:
            raise ConfigurationError(
                f"Profile '{self.site_id}' is missing required selectors: {', '.join(missing)}"
            )

        object.__setattr__(self, 'selectors', MappingProxyType(normalized))

    def selector(self, name: Union[FieldName, str]) -> str:
        """Selector configured for a field, or '' when unsupported."""
        return self.selectors.get(FieldName(name).value, '')


@dataclass(frozen=True)
class ListingRecord:
    """One parsed property ad."""
    site: str
    url: str
    price: float
    area: float
    rooms_count: int
    external_id: Optional[str] = None
    location: Optional[str] = None
    published_at: Optional[datetime] = None
    title: Optional[str] = None
    description: Optional[str] = None
    photo: Optional[str] = None
    real_estate_agent: Optional[str] = None
    new_build: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'site': self.site,
            'external_id': self.external_id,
            'url': self.url,
            'price': self.price,
            'area': self.area,
            'rooms_count': self.rooms_count,
            'location': self.location,
            'published_at': self.published_at.isoformat() if self.published_at else None,
            'title': self.title,
            'description': self.description,
            'photo': self.photo,
            'real_estate_agent': self.real_estate_agent,
            'new_build': self.new_build,
        }


@dataclass(frozen=True)
class ExtractionFailure:
    """An item that could not be turned into a ListingRecord."""
    site: str
    index: int                     # Wrapper position on its page
    error: str
    field: Optional[str] = None    # Required field that failed, if known


@dataclass
class ParseResult:
    """Statistics of one parse run."""
    site: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    pages: int = 0
    total: int = 0
    parsed: int = 0
    errors: int = 0
    error_details: List[Dict] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.errors == 0

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.completed_at and self.started_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    def to_dict(self) -> Dict:
        return {
            'site': self.site,
            'started_at': self.started_at.isoformat(),
            'completed_at': self.completed_at.isoformat() if self.completed_at else None,
            'duration_seconds': self.duration_seconds,
            'pages': self.pages,
            'total': self.total,
            'parsed': self.parsed,
            'errors': self.errors,
            'error_details': self.error_details[:10],  # Limit error details
            'success': self.success,
        }
