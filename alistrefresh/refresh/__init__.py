"""Remote cache refresh."""

from alistrefresh.refresh.invoker import (
    LIST_ENDPOINT,
    RefreshInvoker,
    RefreshOutcome,
    extract_error_message,
)

__all__ = ["LIST_ENDPOINT", "RefreshInvoker", "RefreshOutcome", "extract_error_message"]
