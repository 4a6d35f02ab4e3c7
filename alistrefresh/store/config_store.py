"""Durable per-origin settings with interactive fallback."""

import logging
from collections.abc import Iterable
from typing import Protocol

from alistrefresh.core.errors import (
    InvalidSettingError,
    MissingContextError,
    MissingCredentialError,
)
from alistrefresh.resolve.paths import normalize_base_path, normalize_location
from alistrefresh.store.models import Configuration, CryptCredentials
from alistrefresh.store.prompt import Prompter

logger = logging.getLogger(__name__)

# Setting names, stored under the configured prefix
MOUNT_PATH = "cryptpath"
REAL_BASE_PATH = "cryptpathraw"
CRYPT_PASSWORD = "rclonePassword"
CRYPT_SALT = "rcloneSalt"
CRYPT_ENCODING = "cryptencode"

ALL_SETTINGS = (MOUNT_PATH, REAL_BASE_PATH, CRYPT_PASSWORD, CRYPT_SALT, CRYPT_ENCODING)


class KeyValueStore(Protocol):
    """Durable string store scoped to one origin."""

    async def get(self, key: str) -> str | None:
        ...

    async def set(self, key: str, value: str) -> None:
        ...

    async def remove(self, key: str) -> None:
        ...


class ConfigurationStore:
    """Resolves the companion's settings from durable storage or the user.

    Values are written on first successful acquisition only; an existing
    value is never re-prompted or overwritten through get_or_prompt.
    """

    def __init__(
        self,
        store: KeyValueStore,
        prompter: Prompter,
        key_prefix: str = "alistRefresh_",
        token_key: str = "token",
    ):
        self._store = store
        self._prompter = prompter
        self._key_prefix = key_prefix
        self._token_key = token_key

    def storage_key(self, name: str) -> str:
        return f"{self._key_prefix}{name}"

    async def get_or_prompt(
        self,
        name: str,
        prompt_text: str,
        sensitive: bool,
        secret: bool = False,
    ) -> str | None:
        """Look up a setting, asking the user when it is missing.

        Args:
            name: Setting name (namespaced with the key prefix in storage).
            prompt_text: Question shown to the user.
            sensitive: Whether the value is indispensable. Declining a
                sensitive value is fatal to the caller.
            secret: Hide the typed input.

        Returns:
            The stored or entered value, or None if a non-sensitive value
            was declined.

        Raises:
            MissingCredentialError: If a sensitive value was declined.
        """
        key = self.storage_key(name)
        value = await self._store.get(key)
        if value:
            return value

        value = await self._prompter.ask(prompt_text, secret=secret)
        if value:
            await self._store.set(key, value)
            logger.info(f"Saved {key} to storage")
            return value

        if sensitive:
            raise MissingCredentialError(key)
        logger.error(f"User cancelled or provided no input for {key}")
        return None

    async def initialize(self, origin: str) -> Configuration:
        """Build the Configuration for the page's origin.

        The origin and the auth token come from the host page; the token is
        only ever looked up, since the host application manages it.

        Raises:
            MissingContextError: If the origin or the auth token is missing.
            MissingCredentialError: If the user declines a path setting.
            InvalidSettingError: If the mount path is the root.
        """
        service_origin = origin.rstrip("/")
        if not service_origin or service_origin == "null":
            raise MissingContextError("Page has no network origin")
        logger.info(f"Auto-detected service origin as {service_origin}")

        auth_token = await self._store.get(self._token_key)
        if not auth_token:
            raise MissingContextError(
                f"API token not found in storage (key: '{self._token_key}'). Please log in first."
            )
        logger.info("Token successfully retrieved from storage")

        mount = await self.get_or_prompt(
            MOUNT_PATH,
            "Enter the UI mount path of the crypt storage (e.g. /crypt). It cannot be root '/':",
            sensitive=True,
        )
        mount_path = normalize_location(mount)
        if mount_path == "/":
            raise InvalidSettingError(
                f"Crypt mount path cannot be '/'; clear {self.storage_key(MOUNT_PATH)} and re-enter it"
            )

        real_base = await self.get_or_prompt(
            REAL_BASE_PATH,
            f"Enter the base path on the real storage corresponding to {mount_path} (e.g. /real_files or /):",
            sensitive=True,
        )

        return Configuration(
            service_origin=service_origin,
            auth_token=auth_token,
            virtual_mount_path=mount_path,
            real_base_path=normalize_base_path(real_base),
        )

    async def crypt_credentials(self) -> CryptCredentials:
        """Collect the rclone crypt parameters, prompting for missing ones.

        Raises:
            MissingCredentialError: If the user declines any of them.
        """
        password = await self.get_or_prompt(
            CRYPT_PASSWORD, "Enter your rclone crypt password:", sensitive=True, secret=True
        )
        salt = await self.get_or_prompt(
            CRYPT_SALT, "Enter your rclone crypt salt (password2):", sensitive=True, secret=True
        )
        encoding = await self.get_or_prompt(
            CRYPT_ENCODING,
            "Enter your rclone crypt filename encoding (base32, base64 or base32768):",
            sensitive=True,
        )
        return CryptCredentials(password=password, salt=salt, encoding=encoding)

    async def forget(self, names: Iterable[str] = ALL_SETTINGS) -> list[str]:
        """Remove stored settings so they are asked for again.

        Returns:
            The storage keys that were removed.
        """
        removed = []
        for name in names:
            key = self.storage_key(name)
            if await self._store.get(key) is not None:
                await self._store.remove(key)
                removed.append(key)
        if removed:
            logger.info(f"Cleared stored settings: {', '.join(removed)}")
        return removed
