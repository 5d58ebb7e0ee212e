"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Raised when required settings are missing or unusable at startup."""

    pass


class DependencyInjectionError(UtilError):
    """Raised when a provider implementation cannot be selected."""

    pass
