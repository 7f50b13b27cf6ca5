"""
Exception hierarchy for Layerwatch.

Provides a standardized exception hierarchy for consistent error handling
across the application. All exceptions inherit from LayerwatchException.

Scanner exceptions never leave a backend: they are raised inside a single
protocol phase and turned into a LayerOutcome at the backend boundary.
"""

from typing import Optional


class LayerwatchException(Exception):
    """Base exception for all Layerwatch errors."""
    pass


class ScannerException(LayerwatchException):
    """A protocol phase failed for one layer."""

    phase = "unknown"

    def __init__(self, digest: str, reason: str):
        """
        Initialize scanner exception.

        Args:
            digest: Layer digest that was being processed
            reason: Underlying error message, kept verbatim
        """
        self.digest = digest
        self.reason = reason
        super().__init__(reason)


class PostFailed(ScannerException):
    """Layer registration (phase 1) was rejected by the scanner."""

    phase = "post"


class FetchFailed(ScannerException):
    """Vulnerability fetch (phase 2) was rejected by the scanner."""

    phase = "fetch"


class MalformedResponse(FetchFailed):
    """The scanner answered with a body of unexpected shape."""
    pass


class Unreachable(ScannerException):
    """Connection refused or timed out."""

    def __init__(self, digest: str, reason: str, phase: str):
        """
        Initialize unreachable exception.

        Args:
            digest: Layer digest that was being processed
            reason: Transport error message
            phase: Protocol phase that could not connect ("post" or "fetch")
        """
        super().__init__(digest, reason)
        self.phase = phase


class ConfigurationException(LayerwatchException):
    """Configuration is invalid or missing."""
    pass


class RegistryException(LayerwatchException):
    """Layer enumeration against a registry failed."""

    def __init__(self, image: str, reason: str, status_code: Optional[int] = None):
        """
        Initialize registry exception.

        Args:
            image: Image reference being resolved
            reason: Reason for failure
            status_code: HTTP status code, if the registry answered
        """
        self.image = image
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Failed to list layers for {image}: {reason}")


__all__ = [
    "LayerwatchException",
    "ScannerException",
    "PostFailed",
    "FetchFailed",
    "MalformedResponse",
    "Unreachable",
    "ConfigurationException",
    "RegistryException",
]
