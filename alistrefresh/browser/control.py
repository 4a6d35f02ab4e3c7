"""The refresh button injected into the host page."""

import logging
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from alistrefresh.browser.page import HostPage

logger = logging.getLogger(__name__)

CONTROL_ELEMENT_ID = "alist-refresh-fixed-button"
CONTROL_LABEL = "\U0001F504"


class ControlVisibility(str, Enum):
    VISIBLE = "visible"
    HIDDEN = "hidden"


class ControlSurface:
    """Owns the single injected control and its visibility.

    The control starts hidden and is shown only while the current logical
    path lies within the crypt mount. Nothing else changes its visibility.
    """

    def __init__(
        self,
        page: "HostPage",
        on_activate: Callable[[], object],
        element_id: str = CONTROL_ELEMENT_ID,
        label: str = CONTROL_LABEL,
    ):
        self._page = page
        self._on_activate = on_activate
        self.element_id = element_id
        self.label = label
        self.visibility = ControlVisibility.HIDDEN
        self._mounted = False

    @property
    def mounted(self) -> bool:
        return self._mounted

    async def ensure_mounted(self) -> None:
        """Insert the control unless it is already on the page."""
        if self._mounted:
            return
        created = await self._page.mount_control(self.element_id, self.label)
        self._mounted = True
        if created:
            self.visibility = ControlVisibility.HIDDEN
            logger.info("Fixed refresh button added to page")
        else:
            logger.debug("Refresh button already exists")

    def reset(self) -> None:
        """Forget the mounted element after a full document load."""
        self._mounted = False
        self.visibility = ControlVisibility.HIDDEN

    async def set_visible(self, visible: bool) -> None:
        """Show or hide the control; repeating the current state is a no-op."""
        target = ControlVisibility.VISIBLE if visible else ControlVisibility.HIDDEN
        if not self._mounted or target == self.visibility:
            return
        if not await self._page.set_control_visible(self.element_id, visible):
            # The host app replaced the element; insert a fresh, hidden one
            logger.debug("Refresh button missing from page, re-mounting")
            self.reset()
            await self.ensure_mounted()
            if not visible or not await self._page.set_control_visible(self.element_id, True):
                return
        self.visibility = target
        logger.debug(f"Refresh button {target.value}")

    def activate(self) -> None:
        """Handle a click on the control."""
        logger.debug("Refresh button clicked")
        self._on_activate()
