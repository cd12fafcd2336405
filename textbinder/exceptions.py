"""
Core exceptions for textbinder.

Rendering itself never raises for malformed placeholders, unknown variables
or unknown functions. The exceptions below cover registration mistakes and
configuration problems. Errors raised by user functions during ``render``
are not wrapped and reach the caller unchanged.
"""


class TextBinderError(Exception):
    """Base exception for all textbinder errors."""
    pass


class InvalidFunctionError(TextBinderError, ValueError):
    """Raised when a placeholder function cannot be registered.

    Registration needs a non-empty string name and a callable handler.

    Attributes:
        name: The rejected function name
    """

    def __init__(self, message: str, name: object = None):
        super().__init__(message)
        self.name = name


class ConfigurationError(TextBinderError):
    """Exception raised when there's a configuration problem.

    Attributes:
        message: Human-readable error message
        error_type: Category of error (e.g., "INVALID_ENV_VALUE")
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        error_type: str = None,
        details: dict = None
    ):
        super().__init__(message)
        self.error_type = error_type or "CONFIGURATION_ERROR"
        self.details = details or {}
