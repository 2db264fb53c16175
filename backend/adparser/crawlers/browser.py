"""
Headless browser client for sites that render listings with JavaScript.

Uses Playwright's sync API: fetch() blocks until the page is loaded and
returns the rendered source.
"""

import logging
from typing import Optional

from playwright.sync_api import Browser, BrowserContext, Page, Playwright, sync_playwright

logger = logging.getLogger(__name__)


class BrowserClient:
    """
    Blocking page client backed by a single Chromium page.

    The browser starts on first use (or on entering the context manager)
    and is torn down by close().
    """

    def __init__(
        self,
        headless: bool = True,
        timeout: float = 30.0,
        wait_selector: Optional[str] = None,
        user_agent: Optional[str] = None,
        locale: str = 'fr-FR'
    ):
        """
        Initialize the browser client.

        Args:
            headless: Run browser in headless mode
            timeout: Navigation timeout in seconds
            wait_selector: Optional CSS selector to wait for after navigation
            user_agent: Browser user agent
            locale: Browser locale
        """
        self.headless = headless
        self.timeout = timeout
        self.wait_selector = wait_selector
        self.user_agent = user_agent
        self.locale = locale
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    def _init_browser(self):
        """Start Playwright and open a page if not already done."""
        if self._page is not None:
            return

        logger.debug("Launching Chromium browser...")
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(
                headless=self.headless,
                args=['--disable-dev-shm-usage', '--disable-gpu'],
            )
            self._context = self._browser.new_context(
                viewport={'width': 1920, 'height': 1080},
                user_agent=self.user_agent,
                locale=self.locale,
            )
            self._page = self._context.new_page()
        except Exception as e:
            logger.error(f"Failed to initialize browser: {e}")
            self.close()
            raise

    def fetch(self, url: str) -> str:
        """
        Navigate to a URL and return the rendered HTML.

        Raises:
            playwright.sync_api.Error: On navigation failure
        """
        self._init_browser()
        logger.debug(f"BrowserClient fetching: {url}")

        self._page.goto(url, wait_until='domcontentloaded', timeout=int(self.timeout * 1000))

        if self.wait_selector:
            try:
                self._page.wait_for_selector(self.wait_selector, timeout=int(self.timeout * 1000))
            except Exception as e:
                # A page without items is still a valid page
                logger.debug(f"Selector {self.wait_selector} not found: {e}")

        return self._page.content()

    def close(self):
        """Close the browser and release resources."""
        for name in ('_page', '_context', '_browser'):
            resource = getattr(self, name)
            if resource is not None:
                try:
                    resource.close()
                except Exception as e:
                    logger.warning(f"Error closing {name.strip('_')}: {e}")
                setattr(self, name, None)

        if self._playwright is not None:
            try:
                self._playwright.stop()
            except Exception as e:
                logger.warning(f"Error stopping playwright: {e}")
            self._playwright = None

    def __enter__(self):
        self._init_browser()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
