"""Browser session management for Playwright lifecycle."""

import logging
from pathlib import Path
from typing import Any

from alistrefresh.browser.security import DomainPolicy
from alistrefresh.core.config.models import BrowserConfig

logger = logging.getLogger(__name__)


class NavigationBlockedError(Exception):
    """The requested or final URL is outside the domain policy."""


class BrowserSession:
    """Manages the Playwright browser showing the file manager.

    Uses a persistent profile directory so the page's localStorage, which
    holds both the host app's login token and the companion's settings,
    survives restarts.
    """

    def __init__(self, config: BrowserConfig):
        self.config = config
        self.profile_dir = Path(config.profile_dir)
        self.domain_policy = DomainPolicy(
            allowed_domains=config.allowed_domains,
            blocked_domains=config.blocked_domains,
        )

        # Playwright state (lazy init)
        self._playwright = None
        self._context = None
        self._page = None

        logger.info(
            f"BrowserSession initialized (headless={config.headless}, "
            f"profile={self.profile_dir})"
        )

    @property
    def is_active(self) -> bool:
        return self._context is not None and self._page is not None

    @property
    def page(self) -> Any:
        if self._page is None:
            raise RuntimeError("Browser not active. Call launch() first.")
        return self._page

    async def launch(self) -> None:
        """Launch Chromium with the persistent profile and take its first tab."""
        if self.is_active:
            logger.debug("Browser already active, skipping launch")
            return

        try:
            from playwright.async_api import async_playwright
        except ImportError:
            logger.error(
                "Playwright not installed. Run: pip install playwright && playwright install chromium"
            )
            raise

        logger.info("Launching Playwright browser...")
        self.profile_dir.mkdir(parents=True, exist_ok=True)
        self._playwright = await async_playwright().start()

        try:
            self._context = await self._playwright.chromium.launch_persistent_context(
                str(self.profile_dir),
                headless=self.config.headless,
                viewport={
                    "width": self.config.viewport_width,
                    "height": self.config.viewport_height,
                },
            )
            pages = self._context.pages
            self._page = pages[0] if pages else await self._context.new_page()
            self._page.set_default_timeout(self.config.timeout_seconds * 1000)
        except Exception as e:
            logger.error(f"Failed to launch browser: {e}")
            await self.close()
            raise

        logger.info("Browser launched successfully")

    async def navigate(self, url: str) -> None:
        """Open the file manager at url.

        Raises:
            NavigationBlockedError: If url, or the URL it redirects to, is
                not permitted by the domain policy.
        """
        if not self.domain_policy.is_allowed(url):
            raise NavigationBlockedError(f"{url} is not in the allowed domains list")

        if not self.is_active:
            await self.launch()

        logger.info(f"Navigating to: {url}")
        response = await self._page.goto(url, wait_until="domcontentloaded")

        final_url = self._page.url
        if final_url != url and not self.domain_policy.is_allowed(final_url):
            raise NavigationBlockedError(f"Redirected to disallowed domain {final_url}")

        status = response.status if response else "unknown"
        logger.info(f"Navigated to {final_url} (status: {status})")

    async def close(self) -> None:
        """Close the browser context and stop Playwright."""
        try:
            if self._context:
                await self._context.close()
            if self._playwright:
                await self._playwright.stop()
        except Exception as e:
            logger.error(f"Error closing browser: {e}")
        finally:
            self._page = None
            self._context = None
            self._playwright = None
        logger.info("Browser closed")
