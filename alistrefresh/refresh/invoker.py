"""Cache-invalidation request against the storage service's list API."""

import json
import logging
from collections.abc import Awaitable, Callable
from enum import Enum

import httpx

from alistrefresh.core.errors import MissingContextError
from alistrefresh.store.models import Configuration

logger = logging.getLogger(__name__)

LIST_ENDPOINT = "/api/fs/list"


class RefreshOutcome(str, Enum):
    """Result of one refresh request."""

    REFRESHED = "refreshed"
    REJECTED = "rejected"
    TRANSPORT_FAILED = "transport_failed"


def extract_error_message(response: httpx.Response) -> str:
    """Best-effort error detail from a response body.

    Uses the JSON ``message`` field when present, the JSON text otherwise,
    and the raw body when it is not JSON.
    """
    try:
        data = response.json()
    except ValueError:
        return response.text
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return json.dumps(data)


def _envelope_code(response: httpx.Response) -> int | None:
    """Return the ``code`` field of a JSON envelope, if any."""
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict) and isinstance(data.get("code"), int):
        return data["code"]
    return None


class RefreshInvoker:
    """Asks the storage service to rebuild its listing cache for a real path.

    Failures are logged and reported through RefreshOutcome, never raised:
    the request is a cache hint. On success the host UI's own refresh control
    is clicked so the visible listing re-renders through the host.
    """

    def __init__(
        self,
        trigger_host_refresh: Callable[[], Awaitable[bool]],
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the invoker.

        Args:
            trigger_host_refresh: Clicks the host refresh control; returns
                False when the control is not on the page.
            timeout_seconds: HTTP timeout for the list request.
            transport: Optional httpx transport (used by tests).
        """
        self._trigger_host_refresh = trigger_host_refresh
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    @staticmethod
    def build_payload(real_path: str) -> dict:
        # The listing password is for password-protected folders, not crypt
        return {
            "path": real_path,
            "password": "",
            "page": 1,
            "per_page": 0,
            "refresh": True,
        }

    async def invoke(self, real_path: str, config: Configuration) -> RefreshOutcome:
        """Request a refresh of real_path.

        Raises:
            MissingContextError: If the origin or token is empty.
        """
        if not config.service_origin or not config.auth_token:
            raise MissingContextError("Service origin or API token is not configured")

        url = f"{config.service_origin}{LIST_ENDPOINT}"
        headers = {
            "Authorization": config.auth_token,
            "Content-Type": "application/json",
        }
        logger.info(f"Attempting to refresh path: {real_path}")

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_seconds, transport=self._transport
            ) as client:
                response = await client.post(
                    url,
                    headers=headers,
                    content=json.dumps(self.build_payload(real_path)),
                    follow_redirects=True,
                )
        except httpx.HTTPError as e:
            logger.error(f"Network error refreshing {real_path}: {e!r}")
            return RefreshOutcome.TRANSPORT_FAILED

        if not response.is_success:
            logger.error(
                f"Refresh rejected: {response.status_code} {response.reason_phrase}. "
                f"Details: {extract_error_message(response)}"
            )
            return RefreshOutcome.REJECTED

        code = _envelope_code(response)
        if code is not None and code != 200:
            logger.error(
                f"Refresh rejected: code {code}. Details: {extract_error_message(response)}"
            )
            return RefreshOutcome.REJECTED

        logger.info(f"Successfully requested refresh for {real_path}")
        try:
            clicked = await self._trigger_host_refresh()
        except Exception as e:
            logger.error(f"Failed to trigger host refresh control: {e}")
            return RefreshOutcome.REFRESHED
        if not clicked:
            logger.warning("Host refresh control not found; listing not re-rendered")
        return RefreshOutcome.REFRESHED
