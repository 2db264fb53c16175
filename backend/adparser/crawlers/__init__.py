"""Page clients for different site types."""

from typing import Optional, Union

from ..base import FieldName, ScraperType, SiteProfile
from ..settings import Settings, settings as default_settings
from .static import StaticClient
from .browser import BrowserClient

__all__ = ['StaticClient', 'BrowserClient', 'create_client']


def create_client(
    profile: SiteProfile,
    settings: Optional[Settings] = None
) -> Union[StaticClient, BrowserClient]:
    """Build the page client a site needs. Nothing is started until it is used."""
    settings = settings or default_settings

    if profile.scraper_type == ScraperType.JAVASCRIPT:
        wait_selector = profile.selector(FieldName.AD_WRAPPER) if settings.wait_for_items else None
        return BrowserClient(
            headless=settings.browser_headless,
            timeout=settings.browser_timeout,
            wait_selector=wait_selector,
            user_agent=settings.user_agent,
        )

    return StaticClient(
        timeout=settings.static_timeout,
        headers={
            'User-Agent': settings.user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': settings.accept_language,
        },
    )
