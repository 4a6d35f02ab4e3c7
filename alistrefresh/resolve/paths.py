"""Mapping between the file manager's logical paths and real storage paths.

The file manager shows a crypt overlay under a virtual mount path with
plaintext names. The storage service keeps the same entries under a real
base path with encrypted names. Refreshing the virtual path does not reach
the real listing, so the real path has to be computed here.
"""

import logging
import re
from collections.abc import Callable
from urllib.parse import unquote

from alistrefresh.core.errors import MissingCredentialError, UnresolvablePathError
from alistrefresh.resolve.cipher import PathCipher
from alistrefresh.store.models import Configuration, CryptCredentials

logger = logging.getLogger(__name__)

# Routing prefixes the file manager puts in front of the browsed path
_ROUTE_PREFIX = re.compile(r"^/(@|#|dav)/")

CipherFactory = Callable[[CryptCredentials], PathCipher]


def normalize_location(pathname: str) -> str:
    """Turn a page pathname into a logical path.

    Decodes URL escapes first so names reach the cipher as the user sees
    them, drops one routing prefix, and settles the slashes.

    Examples:
        >>> normalize_location("/@/crypt/My%20Folder/")
        '/crypt/My Folder'
        >>> normalize_location("/")
        '/'
    """
    path = unquote(pathname)
    path = _ROUTE_PREFIX.sub("/", path)
    path = "/" + path.removeprefix("/")
    if path != "/" and path.endswith("/"):
        path = path[:-1]
    return path


def is_within_mount(logical_path: str, mount_path: str) -> bool:
    """Check whether a logical path is the mount itself or below it.

    Containment is per path segment, so /crypto is outside /crypt.
    """
    return logical_path == mount_path or logical_path.startswith(mount_path + "/")


def relative_tail(logical_path: str, mount_path: str) -> str:
    """Return the part of logical_path below mount_path, without a leading slash.

    Raises:
        UnresolvablePathError: If logical_path is outside the mount.
    """
    if not is_within_mount(logical_path, mount_path):
        raise UnresolvablePathError(
            f"{logical_path} is not inside the crypt mount {mount_path}"
        )
    return logical_path[len(mount_path):].removeprefix("/")


def normalize_base_path(base_path: str) -> str:
    """Give a real storage base path exactly one leading slash and no trailing one.

    Route prefixes are left alone; a real base may legitimately start with /dav.
    """
    return "/" + base_path.strip("/")


def join_real_path(base_path: str, segment: str) -> str:
    """Append an encrypted segment to the real base path."""
    if not segment:
        return base_path
    return base_path.rstrip("/") + "/" + segment


class PathResolver:
    """Resolves logical paths to real, encrypted storage paths.

    The cipher is built per call from the credentials carried by the
    Configuration, since those are only collected when a refresh is asked for.
    """

    def __init__(self, cipher_factory: CipherFactory):
        self._cipher_factory = cipher_factory

    async def resolve(self, logical_path: str, config: Configuration) -> str:
        """Compute the real storage path for a logical path.

        Args:
            logical_path: Normalized logical path (see normalize_location).
            config: Configuration; crypt credentials are only needed below
                the mount root.

        Returns:
            The real base path, followed by the encrypted tail if any.

        Raises:
            UnresolvablePathError: If the path is outside the mount.
            MissingCredentialError: If a tail must be encrypted and config
                carries no crypt credentials.
        """
        tail = relative_tail(logical_path, config.virtual_mount_path)
        if not tail:
            logger.debug(f"{logical_path} is the mount root")
            return config.real_base_path

        if config.crypt is None:
            raise MissingCredentialError("crypt credentials")

        cipher = self._cipher_factory(config.crypt)
        encrypted = await cipher.encrypt(tail)
        return join_real_path(config.real_base_path, encrypted)
