"""
Scraper Manager - runs the listing parser for one or several sites.

Sites are processed one after the other; a site that fails as a whole is
recorded in its result and does not stop the others.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .base import ListingRecord, ParseResult
from .config import get_enabled_sites, get_site_config, get_site_summary
from .exceptions import NoItemsFoundError
from .parser import ClientFactory, ListingParser
from .settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class ScrapeResult(ParseResult):
    """ParseResult plus the records it produced."""
    listings: List[ListingRecord] = field(default_factory=list)

    def to_dict(self) -> Dict:
        data = super().to_dict()
        data['listings'] = len(self.listings)
        return data


class ScraperManager:
    """
    Manages parser runs across sites.

    Usage:
        manager = ScraperManager()

        # Run single site
        result = manager.scrape_site('pap')

        # Run all enabled sites
        results = manager.scrape_all()
    """

    def __init__(
        self,
        client_factory: Optional[ClientFactory] = None,
        settings: Optional[Settings] = None
    ):
        self.client_factory = client_factory
        self.settings = settings
        self.results: Dict[str, ScrapeResult] = {}

    def get_parser(self, site_key: str) -> ListingParser:
        """Build a parser for a site (ValueError for an unknown key)."""
        return ListingParser(
            get_site_config(site_key),
            client_factory=self.client_factory,
            settings=self.settings,
        )

    def scrape_site(self, site_key: str, html: Optional[str] = None) -> ScrapeResult:
        """
        Run the parser for a single site.

        Args:
            site_key: Site identifier
            html: First page source; when omitted the site's start URL is fetched

        Returns:
            ScrapeResult with statistics and records
        """
        parser = self.get_parser(site_key)
        logger.info(f"Starting scrape for {parser.profile.name} ({site_key})")

        try:
            listings = parser.parse(html) if html is not None else parser.scrape()
        except Exception as e:
            logger.error(f"Scraper failed for {site_key}: {e}")
            listings = []
            # NoItemsFoundError is already recorded by the parser
            if not isinstance(e, NoItemsFoundError):
                parser.result.errors += 1
                parser.result.error_details.append({'error': str(e)})
            parser.result.completed_at = parser.result.completed_at or datetime.now(timezone.utc)

        result = ScrapeResult(**vars(parser.result), listings=listings)
        self.results[site_key] = result
        return result

    def scrape_all(self, site_keys: Optional[List[str]] = None) -> Dict[str, ScrapeResult]:
        """
        Run the parser for several sites, sequentially.

        Args:
            site_keys: Sites to scrape (defaults to all enabled)
        """
        if site_keys is None:
            site_keys = list(get_enabled_sites().keys())

        logger.info(f"Starting scrape for {len(site_keys)} sites: {site_keys}")
        for key in site_keys:
            self.scrape_site(key)

        return self.results

    def list_scrapers(self) -> List[Dict]:
        """List all configured sites."""
        return get_site_summary()

    def get_results_summary(self) -> Dict:
        """Summary of all scrape results."""
        successful = sum(1 for r in self.results.values() if r.success)
        return {
            'total_sites': len(self.results),
            'successful': successful,
            'failed': len(self.results) - successful,
            'total_listings': sum(len(r.listings) for r in self.results.values()),
            'errors': sum(r.errors for r in self.results.values()),
            'sites': {k: v.to_dict() for k, v in self.results.items()},
        }
