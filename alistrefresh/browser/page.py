"""Adapter over the Playwright page hosting the file manager.

Every interaction the companion has with the host page goes through
HostPage, so the components above it can be exercised against a fake.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from alistrefresh.browser import scripts

logger = logging.getLogger(__name__)


class LocalStorage:
    """The page origin's localStorage as a key/value store."""

    def __init__(self, page: Any):
        self._page = page

    async def get(self, key: str) -> str | None:
        return await self._page.evaluate("(key) => localStorage.getItem(key)", key)

    async def set(self, key: str, value: str) -> None:
        await self._page.evaluate(
            "([key, value]) => localStorage.setItem(key, value)", [key, value]
        )

    async def remove(self, key: str) -> None:
        await self._page.evaluate("(key) => localStorage.removeItem(key)", key)


class HostPage:
    """Host page operations used by the companion.

    Args:
        page: A Playwright ``Page`` showing the file manager.
    """

    def __init__(self, page: Any):
        self._page = page
        self.storage = LocalStorage(page)

    @property
    def url(self) -> str:
        return self._page.url

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        return await self._page.evaluate(expression, arg)

    async def origin(self) -> str:
        return await self._page.evaluate("() => location.origin")

    async def pathname(self) -> str:
        return await self._page.evaluate("() => location.pathname")

    async def next_frame(self) -> None:
        """Resolve after the page's next animation frame."""
        await self._page.evaluate(scripts.NEXT_FRAME_JS)

    async def ensure_script(self, url: str, global_name: str) -> None:
        """Load a script into the current document unless its global exists."""
        if await self._page.evaluate(scripts.HAS_GLOBAL_JS, global_name):
            return
        logger.info(f"Loading {url} into the page")
        await self._page.add_script_tag(url=url)

    async def install(
        self,
        on_mutation: Callable[[], None],
        on_activate: Callable[[], None],
    ) -> None:
        """Expose the Python callbacks and start the structural observer.

        The observer is registered as an init script so it survives full
        document loads, and evaluated once for the current document.
        """
        await self._page.expose_binding(
            scripts.MUTATION_BINDING, lambda source: on_mutation()
        )
        await self._page.expose_binding(
            scripts.ACTIVATE_BINDING, lambda source: on_activate()
        )
        await self._page.add_init_script(script=scripts.OBSERVER_JS)
        await self._page.evaluate(scripts.OBSERVER_JS)
        logger.debug("Page bindings and observer installed")

    def on_document_load(self, callback: Callable[[], Any]) -> None:
        """Call back after each full document load of the page."""
        self._page.on("domcontentloaded", lambda _page: callback())

    async def mount_control(self, element_id: str, label: str) -> bool:
        """Insert the companion's button; False if it is already present."""
        return await self._page.evaluate(
            scripts.MOUNT_CONTROL_JS,
            {"id": element_id, "label": label, "binding": scripts.ACTIVATE_BINDING},
        )

    async def set_control_visible(self, element_id: str, visible: bool) -> bool:
        return await self._page.evaluate(
            scripts.SET_DISPLAY_JS, {"id": element_id, "visible": visible}
        )

    async def click(self, selector: str) -> bool:
        """Dispatch a synthetic click on the first element matching selector."""
        return await self._page.evaluate(scripts.CLICK_JS, selector)

    async def show_notice(self, message: str, seconds: int = 8) -> None:
        """Show a dismissable error banner in the page."""
        try:
            await self._page.evaluate(
                scripts.NOTICE_JS, {"message": message, "seconds": seconds}
            )
        except Exception as e:
            logger.warning(f"Could not show notice in page: {e}")

    async def wait_closed(self) -> None:
        """Block until the page is closed (window closed by the user)."""
        if self._page.is_closed():
            return
        closed = asyncio.get_running_loop().create_future()
        self._page.once(
            "close", lambda _page: closed.done() or closed.set_result(None)
        )
        await closed
