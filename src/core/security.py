"""
Security facade.

Single entry point to ask "which known vulnerabilities affect this image",
whatever the number and kind of configured scanning backends.
"""

import logging
from typing import Any, Mapping, Optional, Sequence

from core.backend_registry import BackendRegistry, default_registry
from core.config import parse_backend_config
from core.exceptions import RegistryException
from core.models import Vulnerability
from core.scanner_interface import LayerSource, SecurityBackend, StaticLayerSource

logger = logging.getLogger(__name__)


class Security:
    """
    Dispatches an image to every enabled scanning backend.

    Backends are built once, from the configuration given at construction.
    A backend is enabled when its "server" setting is not blank; disabled
    backends are never called and do not appear in results.
    """

    def __init__(
        self,
        image: str,
        tag: str,
        config: Optional[Mapping[str, Any]],
        layer_source: Optional[LayerSource] = None,
        layer_digests: Optional[Sequence[str]] = None,
        registry: Optional[BackendRegistry] = None,
    ):
        """
        Initialize the facade.

        Args:
            image: Image repository name (e.g., "coreos/dex")
            tag: Image tag
            config: Backend settings keyed by backend id
            layer_source: Provides the layer digests of the image
            layer_digests: Fixed digests, used when no layer_source is given
            registry: Known backends (defaults to every shipped backend)
        """
        self.image = image
        self.tag = tag
        if layer_source is None:
            layer_source = StaticLayerSource(layer_digests or [])
        self.layer_source = layer_source

        registry = registry or default_registry()
        self._backends = registry.build(parse_backend_config(config), layer_source)

    @property
    def enabled_backends(self) -> list[SecurityBackend]:
        """Enabled backends, in declaration order."""
        return [backend for _, backend in self._backends]

    @property
    def backend_ids(self) -> list[str]:
        return [backend_id for backend_id, _ in self._backends]

    def vulnerabilities(self) -> dict[str, list[Vulnerability]]:
        """
        Query every enabled backend for the image's vulnerabilities.

        Returns:
            Mapping of backend id to its vulnerabilities, one key per enabled
            backend in declaration order. A backend that failed maps to an
            empty list.
        """
        if not self._backends:
            return {}

        try:
            digests = self.layer_source.layer_digests(self.image, self.tag)
        except RegistryException as e:
            logger.warning(f"Could not list layers of {self.image}:{self.tag}: {e.reason}")
            return {backend_id: [] for backend_id in self.backend_ids}

        results: dict[str, list[Vulnerability]] = {}
        for backend_id, backend in self._backends:
            logger.debug(
                f"Querying backend '{backend_id}' for {self.image}:{self.tag} "
                f"({len(digests)} layers)"
            )
            results[backend_id] = backend.vulnerabilities(self.image, digests)

        return results


__all__ = ["Security"]
