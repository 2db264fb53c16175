"""
Ad extraction pipeline.

Turns one page document into an ordered list of listing records, one per
item wrapper. A broken item is logged and replaced by an ExtractionFailure;
only a wrapper selector that cannot be evaluated stops the run.
"""

import logging
from typing import Iterable, List, Optional, Union

from bs4 import BeautifulSoup

from .base import Colors, ExtractionFailure, FieldName, ListingRecord, SiteProfile
from .exceptions import NoItemsFoundError, RequiredFieldError, SelectorError
from .fields import build_listing
from .utils.selectors import select_all

ItemResult = Union[ListingRecord, ExtractionFailure]


def site_logger(profile: SiteProfile) -> logging.Logger:
    """Logger dedicated to one site."""
    return logging.getLogger(f"adparser.site.{profile.site_id}")


def extract_items(
    document: BeautifulSoup,
    profile: SiteProfile,
    logger: Optional[logging.Logger] = None
) -> List[ItemResult]:
    """
    Extract every item wrapper of a page.

    Args:
        document: Parsed page
        profile: Site profile
        logger: Logger for per-item failures (defaults to the site logger)

    Returns:
        One ListingRecord or ExtractionFailure per wrapper, in document order

    Raises:
        NoItemsFoundError: If the ad_wrapper selector cannot be evaluated
    """
    logger = logger or site_logger(profile)
    selector = profile.selector(FieldName.AD_WRAPPER)

    try:
        wrappers = select_all(document, selector)
    except SelectorError as e:
        raise NoItemsFoundError(f"No property ads found: {e}") from e

    logger.debug(f"Found {len(wrappers)} ad wrappers")

    results: List[ItemResult] = []
    for index, wrapper in enumerate(wrappers):
        try:
            results.append(build_listing(wrapper, profile))
        except Exception as e:
            logger.error(
                f"   {Colors.red('[ERR]')} Error while parsing a property ad: {e}",
                extra={'site': profile.site_id},
            )
            results.append(ExtractionFailure(
                site=profile.site_id,
                index=index,
                error=str(e),
                field=e.field if isinstance(e, RequiredFieldError) else None,
            ))

    return results


def successful(results: Iterable[ItemResult]) -> List[ListingRecord]:
    """Keep only the records, dropping failures."""
    return [item for item in results if isinstance(item, ListingRecord)]
