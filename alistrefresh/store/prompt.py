"""Interactive prompts for settings the store does not have yet."""

import asyncio
import getpass
import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Prompter(Protocol):
    """Asks the user for a single string value."""

    async def ask(self, text: str, secret: bool = False) -> str | None:
        """Return the entered value, or None when the user declines."""
        ...


class ConsolePrompter:
    """Prompts on the controlling terminal.

    The read blocks, so it runs in a worker thread; the event loop keeps
    serving the page while the user types.
    """

    async def ask(self, text: str, secret: bool = False) -> str | None:
        reader = getpass.getpass if secret else input
        try:
            value = await asyncio.to_thread(reader, f"{text} ")
        except EOFError:
            logger.debug("Prompt dismissed")
            return None
        value = value.strip()
        return value or None
