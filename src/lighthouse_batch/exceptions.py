"""Exceptions raised by the Lighthouse batch auditor."""


class LighthouseBatchError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(LighthouseBatchError):
    """config.json is missing, unreadable or invalid."""


class UrlSourceError(LighthouseBatchError):
    """The input CSV could not be read."""


class AuthenticationError(LighthouseBatchError):
    """An authentication step failed."""


class LighthouseError(LighthouseBatchError):
    """Lighthouse failed to produce a usable result for a URL."""
