"""Exceptions raised by pmavhost."""


class PhpMyAdminError(Exception):
    """Base exception for all pmavhost operations."""

    def __init__(self, message: str, *, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class ValidationFailure(PhpMyAdminError):
    """A vhost parameter failed validation."""

    def __init__(self, parameter: str, constraint: str):
        super().__init__(f"{parameter}: {constraint}")
        self.parameter = parameter
        self.constraint = constraint


class InvalidValueError(ValidationFailure):
    """Parameter value is outside the allowed set."""


class InvalidTypeError(ValidationFailure):
    """Parameter has the wrong primitive type."""


class InvalidPathError(ValidationFailure):
    """Parameter is not an absolute path."""


class ConfigError(PhpMyAdminError):
    """Configuration directory could not be loaded."""


class DependencyError(PhpMyAdminError):
    """A required resource is not in place."""


class ProviderError(PhpMyAdminError):
    """A provider failed to converge a declaration."""
