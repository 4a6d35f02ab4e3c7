"""Configuration records, durable settings and prompts."""

from alistrefresh.store.models import Configuration, CryptCredentials

__all__ = ["Configuration", "CryptCredentials"]
