"""
Parse orchestrator.

Drives pagination to completion, feeds every page through the extraction
pipeline and aggregates the successfully built records in document order.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, ContextManager, List, Optional

from .base import Colors, ExtractionFailure, ListingRecord, ParseResult, SiteProfile
from .crawlers import create_client
from .exceptions import NoItemsFoundError, ParseError
from .pagination import PageClient, make_document, traverse
from .pipeline import extract_items, site_logger, successful
from .settings import Settings, settings as default_settings

ClientFactory = Callable[[SiteProfile], ContextManager[PageClient]]


class ListingParser:
    """
    Generic listing parser driven by a SiteProfile.

    Usage:
        parser = ListingParser(get_site_config('pap'))

        # Parse a first page already in hand
        listings = parser.parse(html)

        # Or fetch the profile's start URL first
        listings = parser.scrape()

        # Statistics of the last run
        parser.result.to_dict()
    """

    def __init__(
        self,
        profile: SiteProfile,
        client_factory: Optional[ClientFactory] = None,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the parser.

        Args:
            profile: Site profile
            client_factory: Builds the page client for one run (defaults to
                crawlers.create_client)
            settings: Parser settings
            logger: Logger for this site (defaults to adparser.site.<site_id>)
        """
        self.profile = profile
        self.settings = settings or default_settings
        self.client_factory = client_factory or self._default_client_factory
        self.logger = logger or site_logger(profile)
        self.result = self._new_result()

    def _default_client_factory(self, profile: SiteProfile):
        return create_client(profile, self.settings)

    def _new_result(self) -> ParseResult:
        return ParseResult(site=self.profile.site_id, started_at=datetime.now(timezone.utc))

    def parse(self, initial_html: str, url: Optional[str] = None) -> List[ListingRecord]:
        """
        Parse a first result page and every page after it.

        Args:
            initial_html: Source of the first page
            url: URL of the first page, for resolving relative links

        Returns:
            Records of all pages, page by page, in wrapper order

        Raises:
            NoItemsFoundError: If a page's item wrappers cannot be located
        """
        self.result = self._new_result()
        with self.client_factory(self.profile) as client:
            return self.parse_with(client, initial_html, url)

    def scrape(self, url: Optional[str] = None) -> List[ListingRecord]:
        """
        Fetch the first page through the page client, then parse like parse().

        Raises:
            ParseError: If no URL is given and the profile has no start_url
        """
        url = url or self.profile.start_url
        if not url:
            raise ParseError(f"No start URL configured for '{self.profile.site_id}'")

        self.result = self._new_result()
        with self.client_factory(self.profile) as client:
            self.logger.info(f"Fetching first page from {url}")
            return self.parse_with(client, client.fetch(url), url)

    def parse_with(
        self,
        client: PageClient,
        initial_html: str,
        url: Optional[str] = None
    ) -> List[ListingRecord]:
        """Run the parse with a client the caller already holds open."""
        self.logger.info(f"Starting parse for {self.profile.name}")
        records: List[ListingRecord] = []

        pages = traverse(
            make_document(initial_html, self.settings.html_parser),
            self.profile,
            client,
            current_url=url,
            max_pages=self.settings.max_pages,
            parser=self.settings.html_parser,
        )

        try:
            for document in pages:
                self.result.pages += 1
                items = extract_items(document, self.profile, self.logger)
                self.result.total += len(items)

                for item in items:
                    if isinstance(item, ExtractionFailure):
                        self.result.errors += 1
                        self.result.error_details.append({
                            'page': self.result.pages,
                            'index': item.index,
                            'field': item.field,
                            'error': item.error,
                        })
                records.extend(successful(items))

                self.logger.info(
                    f"{Colors.bold(f'[page {self.result.pages}]')} {len(items)} ads, "
                    f"{Colors.green(f'{len(records)} parsed so far')}"
                )

        except NoItemsFoundError as e:
            self.result.errors += 1
            self.result.error_details.append({'page': self.result.pages, 'error': str(e)})
            self.result.completed_at = datetime.now(timezone.utc)
            self.logger.error(f"Parse failed on page {self.result.pages}: {e}")
            raise

        self.result.parsed = len(records)
        self.result.completed_at = datetime.now(timezone.utc)
        duration = self.result.duration_seconds or 0
        self.logger.info(
            f"✅ Parse complete in {duration:.1f}s: {self.result.parsed} ads from "
            f"{self.result.pages} page(s), {self.result.errors} errors"
        )
        return records


def parse(
    initial_html: str,
    profile: SiteProfile,
    client: PageClient,
    url: Optional[str] = None
) -> List[ListingRecord]:
    """
    Parse with an already open page client.

    The caller owns the client and is responsible for closing it.
    """
    return ListingParser(profile).parse_with(client, initial_html, url)
