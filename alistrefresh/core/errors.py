"""Exceptions raised by the refresh companion."""


class AlistRefreshError(Exception):
    """Base class for companion errors."""


class MissingCredentialError(AlistRefreshError):
    """A sensitive setting could not be obtained from the store or the user."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"No value provided for {key}")


class MissingContextError(AlistRefreshError):
    """Host page context (origin or auth token) is unavailable."""


class UnresolvablePathError(AlistRefreshError):
    """The current logical path cannot be mapped onto the real storage path."""


class InvalidSettingError(AlistRefreshError):
    """A stored or entered setting is present but unusable."""
