"""
Tests for the parse orchestrator.
"""

import logging

import pytest

from adparser.exceptions import NoItemsFoundError, ParseError
from adparser.parser import ListingParser, parse
from adparser.settings import Settings


@pytest.fixture
def multi_page(page_html, ad_html):
    """Two result pages; the first links to the second."""
    first = page_html(
        [ad_html(ad_id='1', url='/a/1'), ad_html(ad_id='2', url='/a/2')],
        next_href='/annonces?page=2',
    )
    second = page_html([ad_html(ad_id='3', url='/a/3'), ad_html(ad_id='4', url='/a/4')])
    return first, {'https://example.fr/annonces?page=2': second}


def make_parser(profile, client, settings=None):
    return ListingParser(profile, client_factory=lambda p: client, settings=settings)


class TestParse:
    """Test ListingParser.parse."""

    def test_single_page_without_next_selector(self, make_profile, page_html, ad_html, stub_client):
        profile = make_profile(next_page_url='')
        client = stub_client()
        parser = make_parser(profile, client)
        records = parser.parse(page_html([ad_html()], next_href='/p2'))
        assert len(records) == 1
        assert client.fetched == []
        assert parser.result.pages == 1

    def test_document_order_across_pages(self, profile, multi_page, stub_client):
        first, pages = multi_page
        records = make_parser(profile, stub_client(pages)).parse(first)
        assert [r.external_id for r in records] == ['1', '2', '3', '4']
        assert records[2].url == 'https://example.fr/a/3'

    def test_failed_items_are_dropped(self, profile, page_html, ad_html, stub_client, caplog):
        html = page_html([ad_html(ad_id='1'), ad_html(ad_id='2', price=None), ad_html(ad_id='3')])
        parser = make_parser(profile, stub_client())
        records = parser.parse(html)

        assert [r.external_id for r in records] == ['1', '3']
        assert len([r for r in caplog.records if r.levelno >= logging.ERROR]) == 1
        assert parser.result.total == 3
        assert parser.result.parsed == 2
        assert parser.result.errors == 1
        assert parser.result.error_details[0]['field'] == 'price'

    def test_malformed_links_do_not_abort(self, profile, page_html, ad_html, stub_client):
        html = page_html([
            ad_html(ad_id='1'),
            ad_html(ad_id='2', url='http://[bad'),
            ad_html(ad_id='3', photo='http://[bad'),
        ])
        parser = make_parser(profile, stub_client())
        records = parser.parse(html)

        assert [r.external_id for r in records] == ['1', '3']
        assert records[1].photo is None
        assert parser.result.errors == 1
        assert parser.result.error_details[0]['field'] == 'url'

    def test_empty_page_is_valid(self, profile, page_html, stub_client):
        parser = make_parser(profile, stub_client())
        assert parser.parse(page_html([])) == []
        assert parser.result.success

    def test_malformed_wrapper_is_fatal(self, make_profile, page_html, ad_html, stub_client):
        """Test that a wrapper selector that cannot be evaluated stops the run."""
        profile = make_profile(ad_wrapper='div.ad:nth-child(')
        client = stub_client({'https://example.fr/p2': page_html([ad_html()])})
        parser = make_parser(profile, client)

        with pytest.raises(NoItemsFoundError):
            parser.parse(page_html([ad_html()], next_href='/p2'))
        assert client.closed

    def test_fatal_after_successful_page(self, profile, page_html, ad_html, stub_client, monkeypatch):
        """Test that no partial results escape when page 2 cannot be read."""
        from adparser import parser as parser_module
        from adparser.pipeline import extract_items as real_extract_items

        calls = []

        def flaky_extract_items(document, profile, logger=None):
            calls.append(document)
            if len(calls) == 2:
                raise NoItemsFoundError("No property ads found: layout changed")
            return real_extract_items(document, profile, logger)

        monkeypatch.setattr(parser_module, 'extract_items', flaky_extract_items)
        client = stub_client({'https://example.fr/p2': page_html([ad_html(ad_id='2')])})
        parser = make_parser(profile, client)

        result = None
        with pytest.raises(ParseError):
            result = parser.parse(page_html([ad_html(ad_id='1')], next_href='/p2'))
        assert result is None
        assert parser.result.pages == 2
        assert client.closed

    def test_client_released_on_success(self, profile, multi_page, stub_client):
        first, pages = multi_page
        client = stub_client(pages)
        make_parser(profile, client).parse(first)
        assert client.entered
        assert client.closed

    def test_client_released_on_fetch_error(self, profile, page_html, ad_html, stub_client):
        client = stub_client()
        with pytest.raises(KeyError):
            make_parser(profile, client).parse(page_html([ad_html()], next_href='/missing'))
        assert client.closed

    def test_idempotent(self, profile, multi_page, stub_client):
        first, pages = multi_page
        once = make_parser(profile, stub_client(pages)).parse(first)
        twice = make_parser(profile, stub_client(pages)).parse(first)
        assert once == twice

    def test_max_pages_setting(self, profile, multi_page, stub_client):
        first, pages = multi_page
        client = stub_client(pages)
        records = make_parser(profile, client, Settings(max_pages=1)).parse(first)
        assert len(records) == 2
        assert client.fetched == []


class TestScrape:
    """Test ListingParser.scrape."""

    def test_fetches_start_url(self, profile, multi_page, stub_client):
        first, pages = multi_page
        client = stub_client({'https://example.fr/annonces': first, **pages})
        records = make_parser(profile, client).scrape()
        assert len(records) == 4
        assert client.fetched[0] == 'https://example.fr/annonces'
        assert client.closed

    def test_relative_links_resolve_against_page_url(self, profile, page_html, ad_html, stub_client):
        client = stub_client({
            'https://example.fr/annonces/paris': page_html([ad_html()], next_href='?page=2'),
            'https://example.fr/annonces/paris?page=2': page_html([ad_html(ad_id='2')]),
        })
        records = make_parser(profile, client).scrape('https://example.fr/annonces/paris')
        assert [r.external_id for r in records] == ['1', '2']

    def test_no_start_url(self, page_html, stub_client):
        from adparser.base import SiteProfile
        profile = SiteProfile(
            site_id='nourl',
            name='No URL',
            selectors={'ad_wrapper': 'div', 'url': 'a', 'price': 'b', 'area': 'i', 'rooms_count': 'u'},
        )
        with pytest.raises(ParseError):
            make_parser(profile, stub_client()).scrape()


class TestParseFunction:
    """Test the module-level parse with a caller-owned client."""

    def test_caller_keeps_client_open(self, profile, multi_page, stub_client):
        first, pages = multi_page
        client = stub_client(pages)
        records = parse(first, profile, client)
        assert len(records) == 4
        assert not client.closed

    def test_result_dict(self, profile, multi_page, stub_client):
        first, pages = multi_page
        parser = make_parser(profile, stub_client(pages))
        parser.parse(first)
        data = parser.result.to_dict()
        assert data['pages'] == 2
        assert data['parsed'] == 4
        assert data['success'] is True
        assert data['duration_seconds'] is not None
