"""
Custom exceptions for the fwcatalog application.

This module defines domain-specific exceptions that separate recoverable
network and page-format failures from fatal storage failures.
"""


class FwcatalogError(Exception):
    """
    Base exception for all fwcatalog errors.

    All custom exceptions in fwcatalog inherit from this class
    to allow for easy catching of all application-specific errors.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        """
        Initialize the exception.

        Args:
            message: The primary error message.
            details: Optional additional context about the error.
        """
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(FwcatalogError):
    """
    Exception raised when configuration is invalid or missing.

    This includes:
    - Invalid configuration values
    - Configuration file parsing errors
    """

    pass


class ConfigFileError(ConfigurationError):
    """Exception raised when configuration file cannot be read or parsed."""

    pass


class ConfigValidationError(ConfigurationError):
    """Exception raised when configuration validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: object = None,
        details: str | None = None,
    ) -> None:
        """
        Initialize the validation exception.

        Args:
            message: The primary error message.
            field: The configuration key that failed validation.
            value: The offending value.
            details: Optional additional context.
        """
        super().__init__(message, details)
        self.field = field
        self.value = value


# =============================================================================
# Scrape Errors
# =============================================================================


class FetchError(FwcatalogError):
    """
    Exception raised when a page cannot be fetched.

    Covers both non-2xx responses and transport failures (DNS, connection
    reset, timeouts).

    Attributes:
        url: The URL that was being fetched.
        status_code: The HTTP status code, when a response was received.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        details: str | None = None,
    ) -> None:
        """
        Initialize the fetch exception.

        Args:
            message: The primary error message (usually the HTTP reason phrase).
            url: The URL that was being fetched.
            status_code: The HTTP status code.
            details: Optional additional context.
        """
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code


class ExtractionError(FwcatalogError):
    """
    Exception raised when the embedded firmware list cannot be extracted.

    Attributes:
        url: The page the HTML came from, when known.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.url = url


class StoreError(FwcatalogError):
    """
    Exception raised when the device store cannot be read or written.

    Store failures are fatal for a run: accumulated records would otherwise
    be lost silently.

    Attributes:
        path: The store file involved.
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.path = path
