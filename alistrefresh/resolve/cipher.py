"""Path-encryption primitive used to derive ciphertext path segments."""

import logging
from typing import TYPE_CHECKING, Protocol

from alistrefresh.store.models import CryptCredentials

if TYPE_CHECKING:
    from alistrefresh.browser.page import HostPage

logger = logging.getLogger(__name__)

RCLONE_GLOBAL = "rclone"

_ENCRYPT_JS = """
async ({ password, salt, encoding, tail }) => {
    const rclone = await window.rclone.Rclone({ password, salt, encoding });
    return rclone.Path.encrypt(tail);
}
"""


class PathCipher(Protocol):
    """Forward path encryption for a relative plaintext path."""

    async def encrypt(self, tail: str) -> str:
        ...


class PageRcloneCipher:
    """rclone crypt name encryption, run by the rclone JS build inside the page.

    The library is injected as a script tag the first time it is needed in a
    document. Output is deterministic for fixed password, salt and encoding.
    """

    def __init__(self, page: "HostPage", credentials: CryptCredentials, script_url: str):
        self._page = page
        self._credentials = credentials
        self._script_url = script_url

    async def encrypt(self, tail: str) -> str:
        await self._page.ensure_script(self._script_url, RCLONE_GLOBAL)
        encrypted = await self._page.evaluate(
            _ENCRYPT_JS,
            {
                "password": self._credentials.password,
                "salt": self._credentials.salt,
                "encoding": self._credentials.encoding,
                "tail": tail,
            },
        )
        logger.debug(f"Encrypted {tail!r} -> {encrypted!r}")
        return str(encrypted)
