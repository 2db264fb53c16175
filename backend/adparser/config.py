"""
Site profiles for all supported listing sources.

Each site has a SiteProfile that defines:
- CSS selectors for the item wrapper, the next page link and every field
- The publication date format
- Which page client to use (static or javascript)

Profiles are validated when this module is imported, so a profile missing
a required selector fails at startup rather than during a parse.
"""

from .base import FieldName, ScraperType, SiteProfile


# ============================================================
# SITE PROFILES
# ============================================================

SITES = {
    # ========== STATIC ==========
    # Result pages are served fully rendered

    'pap': SiteProfile(
        site_id='pap',
        name='PAP',
        start_url='https://www.pap.fr/annonce/vente-appartements',
        base_url='https://www.pap.fr/',
        scraper_type=ScraperType.STATIC,
        published_at_format='d/m/Y',
        selectors={
            FieldName.AD_WRAPPER: 'div.search-list-item-alt',
            FieldName.NEXT_PAGE_URL: 'ul.pagination li.next a',
            FieldName.EXTERNAL_ID: '[data-annonce-id]',
            FieldName.URL: 'a.item-title',
            FieldName.PRICE: 'span.item-price',
            FieldName.AREA: 'ul.item-tags li:nth-of-type(3)',
            FieldName.ROOMS_COUNT: 'ul.item-tags li:nth-of-type(1)',
            FieldName.LOCATION: 'a.item-title span.h1',
            FieldName.PUBLISHED_AT: 'p.item-date',
            FieldName.TITLE: 'a.item-title',
            FieldName.DESCRIPTION: 'p.item-description',
            FieldName.PHOTO: 'div.item-photo img',
        },
    ),

    'logicimmo': SiteProfile(
        site_id='logicimmo',
        name='Logic-Immo',
        start_url='https://www.logic-immo.com/vente-immobilier.htm',
        base_url='https://www.logic-immo.com/',
        scraper_type=ScraperType.STATIC,
        published_at_format='d/m/Y',
        selectors={
            FieldName.AD_WRAPPER: 'div.offer-block',
            FieldName.NEXT_PAGE_URL: 'a.pagination-next',
            FieldName.EXTERNAL_ID: 'div.offer-block-content[data-offer-id]',
            FieldName.URL: 'a.offer-link',
            FieldName.PRICE: 'p.offer-price',
            FieldName.AREA: 'span.offer-area-number',
            FieldName.ROOMS_COUNT: 'span.offer-details-caracteristik--rooms',
            FieldName.LOCATION: 'div.offer-details-location',
            FieldName.PUBLISHED_AT: 'span.offer-update',
            FieldName.TITLE: 'h2.offer-details-type',
            FieldName.DESCRIPTION: 'div.offer-description',
            FieldName.PHOTO: 'img.offer-picture',
            FieldName.REAL_ESTATE_AGENT: 'p.offer-agency-name',
            FieldName.NEW_BUILD: 'span.offer-tag--new-build',
        },
    ),

    'ouestfrance': SiteProfile(
        site_id='ouestfrance',
        name='Ouest-France Immo',
        start_url='https://www.ouestfrance-immo.com/acheter/appartement/',
        base_url='https://www.ouestfrance-immo.com/',
        scraper_type=ScraperType.STATIC,
        published_at_format='d/m/y',
        selectors={
            FieldName.AD_WRAPPER: 'div.annLink',
            FieldName.NEXT_PAGE_URL: 'a.pagination-next',
            FieldName.EXTERNAL_ID: '[data-id]',
            FieldName.URL: 'a.annLinkTitle',
            FieldName.PRICE: 'span.annPrix',
            FieldName.AREA: 'span.annSurface',
            FieldName.ROOMS_COUNT: 'span.annNbPieces',
            FieldName.LOCATION: 'span.annVille',
            FieldName.PUBLISHED_AT: 'span.annDebAff',
            FieldName.TITLE: 'span.annTitre',
            FieldName.DESCRIPTION: 'p.annTexte',
            FieldName.PHOTO: 'img.annPhoto',
            FieldName.REAL_ESTATE_AGENT: 'span.annAgence',
        },
        enabled=False,
    ),

    # ========== JAVASCRIPT ==========
    # Listings are rendered client-side

    'seloger': SiteProfile(
        site_id='seloger',
        name='SeLoger',
        start_url='https://www.seloger.com/list.htm?projects=2&types=1',
        base_url='https://www.seloger.com/',
        scraper_type=ScraperType.JAVASCRIPT,
        published_at_format='',
        selectors={
            FieldName.AD_WRAPPER: 'div[data-testid="sl.explore.card-container"]',
            FieldName.NEXT_PAGE_URL: 'a[data-testid="gsl.uilib.Paging.nextButton"]',
            FieldName.EXTERNAL_ID: 'a[data-listing-id]',
            FieldName.URL: 'a[data-testid="sl.explore.coveringLink"]',
            FieldName.PRICE: 'div[data-test="sl.price-label"]',
            FieldName.AREA: 'ul[data-test="sl.tags"] li:nth-of-type(3)',
            FieldName.ROOMS_COUNT: 'ul[data-test="sl.tags"] li:nth-of-type(1)',
            FieldName.LOCATION: 'div[data-testid="sl.explore.card-address"]',
            FieldName.TITLE: 'div[data-test="sl.title"]',
            FieldName.DESCRIPTION: 'div[data-testid="sl.explore.card-description"]',
            FieldName.PHOTO: 'div[data-testid="sl.explore.card-slider"] img',
            FieldName.REAL_ESTATE_AGENT: 'div[data-testid="sl.explore.card-agency"]',
            FieldName.NEW_BUILD: 'span[data-test="sl.new-build-tag"]',
        },
    ),

    'leboncoin': SiteProfile(
        site_id='leboncoin',
        name='Leboncoin',
        start_url='https://www.leboncoin.fr/recherche?category=9&real_estate_type=2',
        base_url='https://www.leboncoin.fr/',
        scraper_type=ScraperType.JAVASCRIPT,
        published_at_format='d/m/Y H:i',
        selectors={
            FieldName.AD_WRAPPER: 'li[data-qa-id="aditem_container"]',
            FieldName.NEXT_PAGE_URL: 'a[data-spark-component="pagination-next-trigger"]',
            FieldName.EXTERNAL_ID: 'a[data-ad-id]',
            FieldName.URL: 'a[data-test-id="ad"]',
            FieldName.PRICE: 'p[data-test-id="price"]',
            FieldName.AREA: 'p[data-test-id="ad-params-labels"] span:nth-of-type(2)',
            FieldName.ROOMS_COUNT: 'p[data-test-id="ad-params-labels"] span:nth-of-type(1)',
            FieldName.LOCATION: 'p[aria-label*="Située à"]',
            FieldName.PUBLISHED_AT: 'p[aria-label*="Date de dépôt"]',
            FieldName.TITLE: 'p[data-test-id="adcard-title"]',
            FieldName.PHOTO: 'picture img',
        },
    ),

    'bienici': SiteProfile(
        site_id='bienici',
        name="Bien'ici",
        start_url='https://www.bienici.com/recherche/achat/france/appartement',
        base_url='https://www.bienici.com/',
        scraper_type=ScraperType.JAVASCRIPT,
        published_at_format='',
        selectors={
            FieldName.AD_WRAPPER: 'article.search-results-list__ad-overview',
            FieldName.NEXT_PAGE_URL: 'a.pagination__go-forward-button',
            FieldName.EXTERNAL_ID: 'article[data-id]',
            FieldName.URL: 'a.detailedSheetLink',
            FieldName.PRICE: 'span.ad-price__the-price',
            FieldName.AREA: 'span.ad-overview-details__area',
            FieldName.ROOMS_COUNT: 'span.ad-overview-details__ad-title',
            FieldName.LOCATION: 'span.ad-overview-details__address-title',
            FieldName.TITLE: 'h3.ad-overview-details__ad-title',
            FieldName.DESCRIPTION: 'div.ad-overview-description',
            FieldName.PHOTO: 'img.img__image',
            FieldName.REAL_ESTATE_AGENT: 'div.ad-overview-details__agency-name',
        },
        enabled=False,
    ),
}


# ============================================================
# HELPER FUNCTIONS
# ============================================================

def get_site_config(site_key: str) -> SiteProfile:
    """
    Get the profile of a site by its key.

    Args:
        site_key: Site identifier (e.g., 'pap', 'seloger')

    Returns:
        SiteProfile for the site

    Raises:
        ValueError: If site_key is not found
    """
    if site_key not in SITES:
        valid_keys = ', '.join(sorted(SITES.keys()))
        raise ValueError(f"Unknown site: '{site_key}'. Valid sites: {valid_keys}")
    return SITES[site_key]


def get_sites_by_type(scraper_type: ScraperType) -> dict:
    """Get all sites of a specific scraper type."""
    return {k: v for k, v in SITES.items() if v.scraper_type == scraper_type}


def get_enabled_sites() -> dict:
    """Get all enabled sites."""
    return {k: v for k, v in SITES.items() if v.enabled}


def list_sites() -> list:
    """List all site keys."""
    return list(SITES.keys())


def get_site_summary() -> list:
    """Get a summary of all sites for display."""
    summary = []
    for key, profile in SITES.items():
        summary.append({
            'key': key,
            'name': profile.name,
            'type': profile.scraper_type.value,
            'enabled': profile.enabled,
            'url': profile.start_url,
        })
    return summary
