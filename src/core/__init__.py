"""Core logic for dispatching image layers to scanning backends."""

from core.models import (
    BackendEntry,
    LayerOutcome,
    LayerStatus,
    SeverityLevel,
    Vulnerability,
)
from core.scanner_interface import LayerSource, SecurityBackend, StaticLayerSource

__all__ = [
    "BackendEntry",
    "LayerOutcome",
    "LayerStatus",
    "SeverityLevel",
    "Vulnerability",
    "LayerSource",
    "SecurityBackend",
    "StaticLayerSource",
]
