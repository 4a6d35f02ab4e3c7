"""Logical-to-real path resolution."""

from alistrefresh.resolve.cipher import PageRcloneCipher, PathCipher
from alistrefresh.resolve.paths import (
    CipherFactory,
    PathResolver,
    is_within_mount,
    join_real_path,
    normalize_base_path,
    normalize_location,
    relative_tail,
)

__all__ = [
    "CipherFactory",
    "PageRcloneCipher",
    "PathCipher",
    "PathResolver",
    "is_within_mount",
    "join_real_path",
    "normalize_base_path",
    "normalize_location",
    "relative_tail",
]
