"""
Per-field extraction functions.

Every function takes the DOM scope of one item wrapper and the site
profile. Required fields raise RequiredFieldError; optional fields
resolve to None whenever the site does not expose them or the lookup
fails.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from bs4 import Tag

from .base import FieldName, ListingRecord, SiteProfile
from .exceptions import RequiredFieldError, SelectorError
from .utils.extractors import contains_any, extract_float, extract_int, parse_published_at
from .utils.normalizers import normalize_text, resolve_url
from .utils.selectors import select_all, select_attr, select_text, split_attribute_selector

# Site-language terms meaning "new", "delivery", "off-plan program"
NEW_BUILD_KEYWORDS = ('neuf', 'livraison', 'programme')


@dataclass(frozen=True)
class FieldResult:
    """Outcome of one field lookup: a value, an explicit absence, or an error."""
    value: Any = None
    error: Optional[str] = None

    @classmethod
    def of(cls, value: Any) -> 'FieldResult':
        return cls(value=value)

    @classmethod
    def absent(cls) -> 'FieldResult':
        return cls()

    @classmethod
    def failed(cls, error: str) -> 'FieldResult':
        return cls(error=error)

    @property
    def found(self) -> bool:
        return self.error is None and self.value is not None

    def map(self, func: Callable[[Any], Any]) -> 'FieldResult':
        """Apply func to a found value; a ValueError becomes a failed result."""
        if not self.found:
            return self
        try:
            return FieldResult.of(func(self.value))
        except ValueError as e:
            return FieldResult.failed(str(e))

    def required(self, field: str) -> Any:
        if self.error is not None:
            raise RequiredFieldError(field, self.error)
        if self.value is None:
            raise RequiredFieldError(field, "no selector configured")
        return self.value

    def optional(self) -> Any:
        return self.value if self.found else None


def lookup_text(scope: Tag, profile: SiteProfile, name: FieldName) -> FieldResult:
    selector = profile.selector(name)
    if not selector:
        return FieldResult.absent()
    try:
        text = normalize_text(select_text(scope, selector))
    except SelectorError as e:
        return FieldResult.failed(str(e))
    if not text:
        return FieldResult.failed(f"Selector '{selector}' matched an empty node")
    return FieldResult.of(text)


def lookup_attr(scope: Tag, selector: str, attribute: str) -> FieldResult:
    try:
        return FieldResult.of(select_attr(scope, selector, attribute))
    except SelectorError as e:
        return FieldResult.failed(str(e))


# ============================================================
# REQUIRED FIELDS
# ============================================================

def extract_url(scope: Tag, profile: SiteProfile) -> str:
    selector = profile.selector(FieldName.URL)
    result = lookup_attr(scope, selector, 'href') if selector else FieldResult.absent()
    return result.map(lambda href: resolve_url(href, profile.base_url)).required(FieldName.URL.value)


def extract_price(scope: Tag, profile: SiteProfile) -> float:
    return lookup_text(scope, profile, FieldName.PRICE).map(extract_float).required(FieldName.PRICE.value)


def extract_area(scope: Tag, profile: SiteProfile) -> float:
    return lookup_text(scope, profile, FieldName.AREA).map(extract_float).required(FieldName.AREA.value)


def extract_rooms_count(scope: Tag, profile: SiteProfile) -> int:
    return lookup_text(scope, profile, FieldName.ROOMS_COUNT).map(extract_int).required(
        FieldName.ROOMS_COUNT.value
    )


# ============================================================
# OPTIONAL FIELDS
# ============================================================

def extract_external_id(scope: Tag, profile: SiteProfile) -> Optional[str]:
    """
    Read the site's own ad identifier.

    The selector packs a locator and the attribute holding the id, e.g.
    "article[data-id]". "[data-id]" reads the attribute from the wrapper.
    """
    selector = profile.selector(FieldName.EXTERNAL_ID)
    if not selector:
        return None
    locator, attribute = split_attribute_selector(selector)
    if not attribute:
        return None
    return lookup_attr(scope, locator, attribute).optional()


def extract_location(scope: Tag, profile: SiteProfile) -> Optional[str]:
    return lookup_text(scope, profile, FieldName.LOCATION).optional()


def extract_published_at(scope: Tag, profile: SiteProfile) -> Optional[datetime]:
    fmt = profile.published_at_format
    return lookup_text(scope, profile, FieldName.PUBLISHED_AT).map(
        lambda text: parse_published_at(text, fmt)
    ).optional()


def extract_title(scope: Tag, profile: SiteProfile) -> Optional[str]:
    return lookup_text(scope, profile, FieldName.TITLE).optional()


def extract_description(scope: Tag, profile: SiteProfile) -> Optional[str]:
    return lookup_text(scope, profile, FieldName.DESCRIPTION).optional()


def extract_photo(scope: Tag, profile: SiteProfile) -> Optional[str]:
    selector = profile.selector(FieldName.PHOTO)
    if not selector:
        return None
    # Lazy-loaded images keep the real URL in data-src
    for attribute in ('src', 'data-src'):
        result = lookup_attr(scope, selector, attribute)
        if result.found:
            return result.map(lambda src: resolve_url(src, profile.base_url)).optional()
    return None


def extract_real_estate_agent(scope: Tag, profile: SiteProfile) -> Optional[str]:
    return lookup_text(scope, profile, FieldName.REAL_ESTATE_AGENT).optional()


def is_new_build(scope: Tag, profile: SiteProfile) -> bool:
    """
    Classify the ad as a new build.

    With a dedicated selector this is a presence test. Otherwise title and
    description, concatenated as-is, are searched for NEW_BUILD_KEYWORDS,
    which is only an approximation.
    """
    selector = profile.selector(FieldName.NEW_BUILD)
    if selector:
        try:
            return len(select_all(scope, selector)) > 0
        except SelectorError:
            return False

    text = f"{extract_title(scope, profile) or ''}{extract_description(scope, profile) or ''}"
    return contains_any(text, NEW_BUILD_KEYWORDS)


def build_listing(scope: Tag, profile: SiteProfile) -> ListingRecord:
    """
    Build a record from one item wrapper.

    Raises:
        RequiredFieldError: On the first required field that cannot be extracted
    """
    return ListingRecord(
        site=profile.site_id,
        external_id=extract_external_id(scope, profile),
        url=extract_url(scope, profile),
        price=extract_price(scope, profile),
        area=extract_area(scope, profile),
        rooms_count=extract_rooms_count(scope, profile),
        location=extract_location(scope, profile),
        published_at=extract_published_at(scope, profile),
        title=extract_title(scope, profile),
        description=extract_description(scope, profile),
        photo=extract_photo(scope, profile),
        real_estate_agent=extract_real_estate_agent(scope, profile),
        new_build=is_new_build(scope, profile),
    )
