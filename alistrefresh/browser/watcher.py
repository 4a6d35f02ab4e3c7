"""Detects in-page navigation of the single-page file manager.

The host router swaps DOM subtrees instead of loading new documents, so
there is no navigation event to listen to. Structural changes are used as an
edge trigger instead, coalesced to one evaluation per rendering frame.
"""

import asyncio
import logging
from typing import TYPE_CHECKING

from alistrefresh.resolve.paths import is_within_mount, normalize_location

if TYPE_CHECKING:
    from alistrefresh.browser.control import ControlSurface
    from alistrefresh.browser.page import HostPage

logger = logging.getLogger(__name__)


class NavigationWatcher:
    """Re-evaluates the control's visibility after page changes.

    Only the pending-frame flag is kept between signals; each evaluation
    reads the location afresh.
    """

    def __init__(self, page: "HostPage", control: "ControlSurface", mount_path: str):
        self._page = page
        self._control = control
        self._mount_path = mount_path
        self._pending: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def notify(self) -> None:
        """Signal that the page structure changed.

        Schedules one evaluation for the next frame unless one is already
        waiting for it.
        """
        if self._pending is not None:
            return
        self._pending = asyncio.get_running_loop().create_task(
            self._evaluate_after_frame()
        )

    async def _evaluate_after_frame(self) -> None:
        try:
            await self._page.next_frame()
        except Exception as e:
            logger.debug(f"Frame wait failed: {e}")
            self._pending = None
            return
        # Changes from here on belong to the next frame
        self._pending = None
        try:
            await self.evaluate()
        except Exception as e:
            logger.error(f"Navigation evaluation failed: {e}")

    async def evaluate(self) -> str:
        """Recompute the logical path and update the control's visibility.

        Returns:
            The logical path that was evaluated.
        """
        logical_path = normalize_location(await self._page.pathname())
        await self._control.set_visible(is_within_mount(logical_path, self._mount_path))
        return logical_path

    async def drain(self) -> None:
        """Wait for the pending evaluation, if any."""
        while self._pending is not None:
            await self._pending
