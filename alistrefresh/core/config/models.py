"""Pydantic settings models for alist-refresh.

These describe how the companion itself runs (browser, storage keys, HTTP
timeouts, logging). The per-origin values entered by the user live in
``alistrefresh.store.config_store``. For loading logic, see loader.py.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class BrowserConfig(BaseModel):
    """Configuration for the Playwright-driven browser window."""

    headless: bool = Field(default=False, description="Run Chromium without a window")
    viewport_width: int = Field(default=1280, description="Viewport width in pixels")
    viewport_height: int = Field(default=800, description="Viewport height in pixels")
    timeout_seconds: int = Field(default=30, description="Per-action timeout")
    profile_dir: Path = Field(
        default=Path(".alistrefresh/profile"),
        description="Persistent browser profile (keeps localStorage and the login token)",
    )
    allowed_domains: list[str] = Field(
        default_factory=list, description="Domains the companion may attach to (empty = all)"
    )
    blocked_domains: list[str] = Field(
        default_factory=list, description="Domains the companion never attaches to"
    )


class StorageConfig(BaseModel):
    """Keys used in the page's localStorage."""

    key_prefix: str = Field(default="alistRefresh_", description="Namespace for companion settings")
    token_key: str = Field(default="token", description="Key under which the host app keeps its auth token")


class CryptConfig(BaseModel):
    """Location of the rclone crypt path-encryption library."""

    script_url: str = Field(
        default="https://cnicehs.github.io/Aria/rclone.umd.min.js",
        description="UMD build exposing window.rclone.Rclone",
    )


class RefreshConfig(BaseModel):
    """Configuration for the cache-refresh request."""

    timeout_seconds: float = Field(default=15.0, description="HTTP timeout for the list request")
    host_refresh_selector: str = Field(
        default='[tips="refresh"]', description="Selector of the host UI's own refresh control"
    )

    @field_validator("timeout_seconds")
    @classmethod
    def positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout_seconds must be positive")
        return value


class LoggingConfig(BaseModel):
    """Configuration for logging system."""

    level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    directory: str = Field(default="logs", description="Directory for log files")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB before rotation")
    backup_count: int = Field(default=5, description="Number of backup log files to keep")


class Config(BaseModel):
    """Root configuration for alist-refresh."""

    alist_url: str | None = Field(default=None, description="File manager URL to open on start")
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    crypt: CryptConfig = Field(default_factory=CryptConfig)
    refresh: RefreshConfig = Field(default_factory=RefreshConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")

    model_config = {"extra": "allow"}
