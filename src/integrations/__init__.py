"""Integrations with external scanners and registries."""

from integrations.clair import ClairBackend
from integrations.dummy import DummyBackend
from integrations.registry_client import RegistryClient

__all__ = [
    "ClairBackend",
    "DummyBackend",
    "RegistryClient",
]
