"""Host page integration: Playwright session, page adapter, watcher and control."""

from alistrefresh.browser.control import ControlSurface, ControlVisibility
from alistrefresh.browser.page import HostPage, LocalStorage
from alistrefresh.browser.security import DomainPolicy
from alistrefresh.browser.session import BrowserSession, NavigationBlockedError
from alistrefresh.browser.watcher import NavigationWatcher

__all__ = [
    "BrowserSession",
    "ControlSurface",
    "ControlVisibility",
    "DomainPolicy",
    "HostPage",
    "LocalStorage",
    "NavigationBlockedError",
    "NavigationWatcher",
]
