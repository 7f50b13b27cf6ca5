"""
Layerwatch - Container Layer Vulnerability Lookup

Hands the layers of a container image to every configured scanning
backend and reports the known CVEs each one found.
"""

__version__ = "0.3.0"
__author__ = "Layerwatch Developers"

from core.models import (
    BackendEntry,
    Vulnerability,
    SeverityLevel,
)

__all__ = [
    "BackendEntry",
    "Vulnerability",
    "SeverityLevel",
]
