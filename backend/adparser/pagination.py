"""
Pagination traversal.

Walks a multi-page result set by following the profile's "next page" link
through a page client. Each advance of the generator performs one blocking
navigation, so the sequence can only be consumed once.
"""

import logging
from typing import Iterator, Optional, Protocol

from bs4 import BeautifulSoup

from .base import FieldName, SiteProfile
from .exceptions import SelectorError
from .utils.normalizers import resolve_url
from .utils.selectors import select_attr

logger = logging.getLogger(__name__)


class PageClient(Protocol):
    """What the traversal needs from a page client."""

    def fetch(self, url: str) -> str:
        ...


def make_document(html: str, parser: str = 'html.parser') -> BeautifulSoup:
    """Parse page source into a document."""
    return BeautifulSoup(html, parser)


def get_next_page_url(
    document: BeautifulSoup,
    profile: SiteProfile,
    current_url: Optional[str] = None
) -> Optional[str]:
    """
    Resolve the next page link of a document.

    Returns:
        Absolute URL when possible, or None when the site has no pagination
        selector or the page has no next link
    """
    selector = profile.selector(FieldName.NEXT_PAGE_URL)
    if not selector:
        return None

    try:
        href = select_attr(document, selector, 'href')
    except SelectorError:
        return None

    return resolve_url(href, current_url or profile.base_url)


def traverse(
    initial_document: BeautifulSoup,
    profile: SiteProfile,
    client: PageClient,
    current_url: Optional[str] = None,
    max_pages: Optional[int] = None,
    parser: str = 'html.parser'
) -> Iterator[BeautifulSoup]:
    """
    Yield the initial document and every following page.

    Args:
        initial_document: First page, already parsed
        profile: Site profile
        client: Page client used for subsequent pages
        current_url: URL of the initial page, for resolving relative links
        max_pages: Stop after this many pages (None for no limit)
        parser: BeautifulSoup tree builder for fetched pages
    """
    document = initial_document
    page = 1

    while True:
        yield document

        if max_pages is not None and page >= max_pages:
            logger.info(f"[{profile.site_id}] Reached page limit ({max_pages})")
            return

        next_url = get_next_page_url(document, profile, current_url)
        if next_url is None:
            return

        page += 1
        logger.info(f"[{profile.site_id}] Fetching page {page}: {next_url}")
        document = make_document(client.fetch(next_url), parser)
        current_url = next_url
