"""Custom exceptions for the email finder domain."""


class FinderError(Exception):
    """Base exception for this project."""


class ConfigError(FinderError):
    """Raised when runtime configuration is invalid."""


class InputError(FinderError):
    """Raised when the actor input cannot be processed at all."""


class ProviderError(FinderError):
    """Raised when a Tomba API call fails."""
