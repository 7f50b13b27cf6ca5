"""
Domain models for layer vulnerability lookups.

This module defines the core data structures used throughout the application.
All models are immutable (frozen dataclasses) to prevent accidental mutation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class SeverityLevel(str, Enum):
    """Severity names as reported by Clair."""

    UNKNOWN = "Unknown"
    NEGLIGIBLE = "Negligible"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"
    DEFCON1 = "Defcon1"

    @classmethod
    def normalize(cls, value: Optional[str]) -> str:
        """
        Normalize a severity string to its canonical spelling.

        Known severities are matched case-insensitively. Unrecognized
        values are passed through untouched, and a missing value becomes
        "Unknown".

        Args:
            value: Severity string from a scanner response

        Returns:
            Canonical severity string
        """
        if not value:
            return cls.UNKNOWN.value

        for level in cls:
            if level.value.lower() == value.lower():
                return level.value
        return value


@dataclass(frozen=True)
class BackendEntry:
    """
    Settings for one configured scanning backend.

    Attributes:
        id: Backend identifier (e.g., "clair")
        server: Server endpoint; blank means the backend is disabled
        options: Any further backend-specific settings
    """

    id: str
    server: str = ""
    options: dict[str, Any] = field(default_factory=dict)

    @property
    def enabled(self) -> bool:
        """A backend is enabled iff it has a non-blank server."""
        return bool(self.server.strip())


@dataclass(frozen=True)
class Vulnerability:
    """
    Normalized vulnerability record produced by a backend.

    Attributes:
        name: CVE identifier
        namespace: OS/distro namespace the fix applies to (e.g., "alpine:v3.4")
        link: Reference URL
        severity: Severity string (see SeverityLevel)
        metadata: Scanner-specific nested data, passed through untouched (not hashed)
        fixed_by: Version that fixes the vulnerability, None if unfixed
    """

    name: str
    namespace: str = ""
    link: str = ""
    severity: str = SeverityLevel.UNKNOWN.value
    metadata: dict = field(default_factory=dict, hash=False)
    fixed_by: Optional[str] = None

    @classmethod
    def from_clair(cls, data: dict) -> "Vulnerability":
        """Create from a Clair vulnerability object."""
        return cls(
            name=data["Name"],
            namespace=data.get("NamespaceName", ""),
            link=data.get("Link", ""),
            severity=SeverityLevel.normalize(data.get("Severity")),
            metadata=data.get("Metadata") or {},
            fixed_by=data.get("FixedBy") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "namespace": self.namespace,
            "link": self.link,
            "severity": self.severity,
            "metadata": self.metadata,
            "fixed_by": self.fixed_by,
        }


class LayerStatus(str, Enum):
    """Outcome of the two-phase lookup for one layer."""

    OK = "ok"
    POST_FAILED = "post_failed"
    FETCH_FAILED = "fetch_failed"
    UNREACHABLE = "unreachable"
    MALFORMED_RESPONSE = "malformed_response"


@dataclass(frozen=True)
class LayerOutcome:
    """
    Result of looking up a single layer on a backend.

    Attributes:
        digest: Layer digest that was processed
        status: How the lookup ended
        vulnerabilities: Vulnerabilities found (only meaningful when status is OK)
        error: Underlying error message for failed lookups
    """

    digest: str
    status: LayerStatus
    vulnerabilities: tuple[Vulnerability, ...] = ()
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == LayerStatus.OK
