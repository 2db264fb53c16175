#!/usr/bin/env python3
"""
Developer script for the listing parser.

Usage:
    cd backend
    python -m adparser.run_parser [site_key]

Examples:
    python -m adparser.run_parser --list                 # List all sites
    python -m adparser.run_parser pap --html page.html   # Parse a saved page
    python -m adparser.run_parser pap --limit 5          # Scrape the live start URL
"""

import argparse
import json
import logging
from pathlib import Path

from .config import get_site_config, get_site_summary
from .logging_config import configure_logging
from .manager import ScraperManager

logger = logging.getLogger(__name__)


def list_sites():
    """List all configured sites."""
    print(f"\n{'='*60}")
    print("Available Sites")
    print(f"{'='*60}\n")

    for site in get_site_summary():
        status = "✅" if site['enabled'] else "⏳"
        print(f"{status} {site['key']:12} - {site['name']}")
        print(f"              Type: {site['type']}")
        print(f"              URL:  {site['url']}")
        print()


def run(site_key: str, html_path: str = None, limit: int = 10) -> int:
    """Parse one site and print the records. Returns a process exit code."""
    profile = get_site_config(site_key)
    print(f"\n{'='*60}")
    print(f"Parsing: {profile.name} ({profile.scraper_type.value})")
    print(f"{'='*60}\n")

    html = Path(html_path).read_text(encoding='utf-8') if html_path else None
    result = ScraperManager().scrape_site(site_key, html=html)

    for i, listing in enumerate(result.listings[:limit]):
        print(f"{i+1}. {json.dumps(listing.to_dict(), ensure_ascii=False, indent=2)}")

    if len(result.listings) > limit:
        print(f"... and {len(result.listings) - limit} more listings")

    print(json.dumps(result.to_dict(), indent=2, default=str))
    return 0 if result.listings or result.success else 1


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Run the listing parser')
    parser.add_argument('site_key', nargs='?', help='Site key to parse (e.g., pap)')
    parser.add_argument('--list', action='store_true', help='List all sites')
    parser.add_argument('--html', type=str, help='Parse a saved first page instead of fetching it')
    parser.add_argument('--limit', type=int, default=10, help='Number of listings to print')

    args = parser.parse_args(argv)

    if args.list:
        list_sites()
        return 0

    if not args.site_key:
        parser.print_help()
        print("\nExample: python -m adparser.run_parser pap --html page.html")
        return 2

    configure_logging()
    return run(args.site_key.lower(), args.html, args.limit)


if __name__ == '__main__':
    raise SystemExit(main())
