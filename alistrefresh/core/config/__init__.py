"""Settings package for alist-refresh.

Pydantic models and loading utilities, re-exported at the package level.
"""

from alistrefresh.core.config.loader import (
    check_unexpanded_vars,
    expand_env_vars,
    expand_env_vars_recursive,
    load_config,
)
from alistrefresh.core.config.models import (
    BrowserConfig,
    Config,
    CryptConfig,
    LoggingConfig,
    RefreshConfig,
    StorageConfig,
)

__all__ = [
    # Models
    "BrowserConfig",
    "Config",
    "CryptConfig",
    "LoggingConfig",
    "RefreshConfig",
    "StorageConfig",
    # Loaders
    "check_unexpanded_vars",
    "expand_env_vars",
    "expand_env_vars_recursive",
    "load_config",
]
