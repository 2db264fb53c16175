"""
Pytest configuration and fixtures for listing parser tests.
"""

import pytest

from adparser.base import FieldName, ScraperType, SiteProfile
from adparser.settings import Settings


BASE_SELECTORS = {
    FieldName.AD_WRAPPER: 'div.ad',
    FieldName.NEXT_PAGE_URL: 'a.next',
    FieldName.EXTERNAL_ID: '[data-id]',
    FieldName.URL: 'a.link',
    FieldName.PRICE: 'span.price',
    FieldName.AREA: 'span.area',
    FieldName.ROOMS_COUNT: 'span.rooms',
    FieldName.LOCATION: 'span.city',
    FieldName.PUBLISHED_AT: 'span.date',
    FieldName.TITLE: 'h2.title',
    FieldName.DESCRIPTION: 'p.desc',
    FieldName.PHOTO: 'img.photo',
    FieldName.REAL_ESTATE_AGENT: 'span.agent',
}


class StubClient:
    """Page client serving fixed HTML, recording fetches and closure."""

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.fetched = []
        self.entered = False
        self.closed = False

    def fetch(self, url):
        self.fetched.append(url)
        return self.pages[url]

    def __enter__(self):
        self.entered = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.closed = True


@pytest.fixture
def make_profile():
    """Build a test profile; keyword selectors override the defaults ('' disables)."""
    def _make(published_at_format='d/m/Y', **selectors):
        merged = {k.value: v for k, v in BASE_SELECTORS.items()}
        merged.update(selectors)
        return SiteProfile(
            site_id='testsite',
            name='Test Site',
            selectors=merged,
            published_at_format=published_at_format,
            start_url='https://example.fr/annonces',
            base_url='https://example.fr/',
            scraper_type=ScraperType.STATIC,
        )
    return _make


@pytest.fixture
def profile(make_profile):
    """Default test profile (no dedicated new-build selector)."""
    return make_profile()


@pytest.fixture
def ad_html():
    """Render one ad wrapper."""
    def _render(
        url='/annonces/1',
        price='250 000 €',
        area='45 m²',
        rooms='2 pièces',
        ad_id='1',
        city='Paris 11e',
        date='14/03/2023',
        title='Appartement lumineux',
        description=None,
        photo='/img/1.jpg',
        agent=None,
        extra='',
    ):
        parts = ['<div class="ad"' + (f' data-id="{ad_id}"' if ad_id else '') + '>']
        if url is not None:
            parts.append(f'<a class="link" href="{url}">Voir</a>')
        if title is not None:
            parts.append(f'<h2 class="title">{title}</h2>')
        if price is not None:
            parts.append(f'<span class="price">{price}</span>')
        if area is not None:
            parts.append(f'<span class="area">{area}</span>')
        if rooms is not None:
            parts.append(f'<span class="rooms">{rooms}</span>')
        if city is not None:
            parts.append(f'<span class="city">{city}</span>')
        if date is not None:
            parts.append(f'<span class="date">{date}</span>')
        if description is not None:
            parts.append(f'<p class="desc">{description}</p>')
        if photo is not None:
            parts.append(f'<img class="photo" src="{photo}">')
        if agent is not None:
            parts.append(f'<span class="agent">{agent}</span>')
        parts.append(extra)
        parts.append('</div>')
        return ''.join(parts)
    return _render


@pytest.fixture
def page_html():
    """Render a result page from ad wrappers and an optional next link."""
    def _render(ads, next_href=None):
        pagination = f'<a class="next" href="{next_href}">Suivant</a>' if next_href else ''
        return (
            '<html><body><div class="results">'
            + ''.join(ads)
            + f'</div><nav>{pagination}</nav></body></html>'
        )
    return _render


@pytest.fixture
def stub_client():
    """Factory for StubClient instances."""
    return StubClient


@pytest.fixture
def test_settings():
    """Settings isolated from the environment."""
    return Settings(max_pages=None, html_parser='html.parser')
