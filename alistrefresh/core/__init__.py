"""Core building blocks: settings, logging and errors."""
