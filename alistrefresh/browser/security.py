"""Origin policy deciding which file-manager hosts the companion attaches to.

The companion reads the host app's auth token and sends it back to the page's
own origin, so attaching to an unexpected host (for instance after a redirect)
must be refused.
"""

import logging
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


class DomainPolicy:
    """Allowlist/blocklist of domains.

    If allowed_domains is empty, all domains are permitted (unless blocked).
    If allowed_domains is non-empty, ONLY those domains are permitted.
    blocked_domains always takes precedence over allowed_domains.
    Patterns may use a ``*.`` prefix to cover subdomains.
    """

    def __init__(
        self,
        allowed_domains: list[str] | None = None,
        blocked_domains: list[str] | None = None,
    ):
        self.allowed_domains = [d.lower() for d in (allowed_domains or [])]
        self.blocked_domains = [d.lower() for d in (blocked_domains or [])]

    def is_allowed(self, url: str) -> bool:
        """Check if a URL's host is permitted by the policy."""
        domain = (urlparse(url).hostname or "").lower()
        if not domain:
            logger.warning(f"Could not extract domain from URL: {url}")
            return False

        if any(self._matches(domain, pattern) for pattern in self.blocked_domains):
            logger.debug(f"Domain {domain} is blocked")
            return False

        if not self.allowed_domains:
            return True

        allowed = any(self._matches(domain, pattern) for pattern in self.allowed_domains)
        if not allowed:
            logger.debug(f"Domain {domain} not in allowlist")
        return allowed

    @staticmethod
    def _matches(domain: str, pattern: str) -> bool:
        if domain == pattern:
            return True
        # *.example.com matches example.com and any subdomain of it
        if pattern.startswith("*."):
            base_domain = pattern[2:]
            return domain == base_domain or domain.endswith("." + base_domain)
        return False
