"""
Custom exceptions for corecatalog.

This module defines domain-specific exceptions that separate fatal conditions
(transport, download, archive and descriptor failures) from configuration
problems. Recoverable outcomes such as "asset is not a core bundle" or "no
cached entry" are not exceptions; they are signalled with return values.
"""


class CoreCatalogError(Exception):
    """
    Base exception for all corecatalog errors.

    All custom exceptions in corecatalog inherit from this class so callers
    can abort a run on any application-specific failure with a single handler.
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


class ConfigurationError(CoreCatalogError):
    """Exception raised when configuration is invalid or missing."""

    pass


class ConfigFileError(ConfigurationError):
    """Exception raised when a configuration or catalog file cannot be read or parsed."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.path = path


# =============================================================================
# API Errors
# =============================================================================


class APIError(CoreCatalogError):
    """
    Exception raised when the release listing API does not answer successfully.

    Attributes:
        endpoint: The API endpoint that was accessed.
        status_code: The HTTP status code returned, if a response was received.
    """

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
        details: str | None = None,
    ) -> None:
        """
        Initialize the API exception.

        Args:
            message: The primary error message.
            endpoint: The API endpoint that was accessed.
            status_code: The HTTP status code returned.
            details: Optional additional context.
        """
        super().__init__(message, details)
        self.endpoint = endpoint
        self.status_code = status_code


# =============================================================================
# Download Errors
# =============================================================================


class DownloadError(CoreCatalogError):
    """
    Exception raised when a release asset cannot be downloaded or written to disk.

    Attributes:
        url: The URL that was being downloaded when the error occurred.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.url = url


# =============================================================================
# Archive Errors
# =============================================================================


class ArchiveError(CoreCatalogError):
    """
    Exception raised for archive-related errors.

    Attributes:
        archive_path: Path to the problematic archive.
    """

    def __init__(
        self,
        message: str,
        archive_path: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.archive_path = archive_path


class ExtractionError(ArchiveError):
    """Exception raised when archive extraction fails."""

    pass


# =============================================================================
# Descriptor Errors
# =============================================================================


class DescriptorError(CoreCatalogError):
    """
    Exception raised when a descriptor inside a core bundle is unusable.

    This includes:
    - Descriptor files that are not valid JSON
    - Descriptors missing the fields the record is built from
    - Platform or data slot descriptors missing from a core bundle
    - Parameter bitmasks that cannot be parsed

    Attributes:
        path: Path of the descriptor file, when known.
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.path = path
