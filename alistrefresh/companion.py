"""Wires the refresh workflow into the host page."""

import asyncio
import logging

from alistrefresh.browser.control import ControlSurface
from alistrefresh.browser.page import HostPage
from alistrefresh.browser.watcher import NavigationWatcher
from alistrefresh.core.config.models import Config
from alistrefresh.core.errors import (
    AlistRefreshError,
    MissingContextError,
    UnresolvablePathError,
)
from alistrefresh.refresh.invoker import RefreshInvoker, RefreshOutcome
from alistrefresh.resolve.cipher import PageRcloneCipher
from alistrefresh.resolve.paths import PathResolver, normalize_location, relative_tail
from alistrefresh.store.config_store import ConfigurationStore
from alistrefresh.store.models import Configuration
from alistrefresh.store.prompt import Prompter

logger = logging.getLogger(__name__)


class RefreshCompanion:
    """Startup sequence and refresh workflow for one host page.

    Each activation of the control runs as an independent detached task:
    credentials, then path resolution, then the network call. Concurrent
    activations are neither de-duplicated nor cancelled.
    """

    def __init__(
        self,
        page: HostPage,
        store: ConfigurationStore,
        resolver: PathResolver,
        invoker: RefreshInvoker,
    ):
        self._page = page
        self._store = store
        self._resolver = resolver
        self._invoker = invoker
        self.config: Configuration | None = None
        self.control: ControlSurface | None = None
        self.watcher: NavigationWatcher | None = None
        # Strong references to detached tasks
        self._tasks: set[asyncio.Task] = set()

    @classmethod
    def from_settings(cls, page: HostPage, settings: Config, prompter: Prompter) -> "RefreshCompanion":
        """Build a companion with the production collaborators."""
        store = ConfigurationStore(
            page.storage,
            prompter,
            key_prefix=settings.storage.key_prefix,
            token_key=settings.storage.token_key,
        )
        script_url = settings.crypt.script_url
        resolver = PathResolver(
            lambda credentials: PageRcloneCipher(page, credentials, script_url)
        )
        selector = settings.refresh.host_refresh_selector
        invoker = RefreshInvoker(
            lambda: page.click(selector),
            timeout_seconds=settings.refresh.timeout_seconds,
        )
        return cls(page, store, resolver, invoker)

    @property
    def store(self) -> ConfigurationStore:
        return self._store

    async def start(self) -> bool:
        """Initialize configuration, then mount the control and start watching.

        Returns:
            False if initialization failed; the control is then never mounted.
        """
        logger.info("Initializing...")
        try:
            origin = await self._page.origin()
            self.config = await self._store.initialize(origin)
        except AlistRefreshError as e:
            logger.error(f"Initialization aborted: {e}")
            await self._page.show_notice(f"Alist Refresh: {e}")
            return False

        self.control = ControlSurface(self._page, self.request_refresh)
        self.watcher = NavigationWatcher(
            self._page, self.control, self.config.virtual_mount_path
        )
        await self._page.install(self.watcher.notify, self.control.activate)
        self._page.on_document_load(self._handle_document_load)

        await self.control.ensure_mounted()
        await self.watcher.evaluate()
        logger.info(
            f"Initialization complete (mount={self.config.virtual_mount_path}, "
            f"real base={self.config.real_base_path})"
        )
        return True

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _handle_document_load(self) -> None:
        # A full load discards the injected button; the observer comes back
        # through the init script
        if self.control is None:
            return
        self.control.reset()
        self._spawn(self._remount())

    async def _remount(self) -> None:
        try:
            await self.control.ensure_mounted()
            await self.watcher.evaluate()
        except Exception as e:
            logger.error(f"Failed to re-mount refresh button: {e}")

    def request_refresh(self) -> asyncio.Task:
        """Start the refresh workflow as a detached task."""
        return self._spawn(self.refresh())

    async def refresh(self) -> RefreshOutcome | None:
        """Refresh the real path behind the page's current location.

        The location is read at call time, not when the control was shown.

        Returns:
            The outcome of the remote call, or None if the workflow was
            aborted before it (missing credentials, unresolvable path).
        """
        try:
            if self.config is None:
                raise MissingContextError("Companion is not initialized")

            pathname = await self._page.pathname()
            if not pathname:
                raise UnresolvablePathError("Could not determine the path to refresh from the page")
            logical_path = normalize_location(pathname)

            # The mount root maps to the real base path unencrypted
            config = self.config
            if relative_tail(logical_path, config.virtual_mount_path):
                credentials = await self._store.crypt_credentials()
                config = config.with_crypt(credentials)

            real_path = await self._resolver.resolve(logical_path, config)
            logger.debug(f"Resolved {logical_path} -> {real_path}")
            return await self._invoker.invoke(real_path, config)

        except AlistRefreshError as e:
            logger.error(f"Refresh aborted: {e}")
            await self._page.show_notice(f"Alist Refresh: {e}")
            return None
        except Exception as e:
            logger.error(f"Refresh failed: {e}")
            await self._page.show_notice(f"Alist Refresh failed: {e}")
            return None

    async def wait_idle(self) -> None:
        """Wait until no refresh or re-mount task is in flight."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def stop(self) -> None:
        """Let in-flight work finish."""
        if self._tasks:
            # A worker thread blocked in input() cannot be cancelled
            logger.info(
                "Waiting for in-flight refresh; press Enter in this terminal "
                "if it is waiting for input"
            )
        await self.wait_idle()
        if self.watcher is not None:
            await self.watcher.drain()
        logger.info("Companion stopped")
