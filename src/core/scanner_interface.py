"""
Backend plugin interface for vulnerability scanners.

Defines the contract for scanning backends, enabling easy integration of
different scanners (Clair, a development dummy, etc.), and the contract
for the collaborator that knows an image's layers.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from core.models import Vulnerability


class SecurityBackend(ABC):
    """
    Abstract base class for vulnerability scanning backends.

    All backends must implement this interface to be dispatched by the
    Security facade.
    """

    @abstractmethod
    def name(self) -> str:
        """
        Return the backend identifier.

        Returns:
            Backend identifier (e.g., "clair", "dummy")
        """
        pass

    @abstractmethod
    def vulnerabilities(
        self, image_name: str, layer_digests: Sequence[str]
    ) -> list[Vulnerability]:
        """
        Look up known vulnerabilities for the layers of an image.

        Implementations must never raise: a failure for a layer means that
        layer contributes nothing, and the failure is logged.

        Args:
            image_name: Image repository name (e.g., "coreos/dex")
            layer_digests: Layer digests, base layer first

        Returns:
            Vulnerabilities of all layers, concatenated in layer order
        """
        pass


class LayerSource(ABC):
    """
    Abstract base class for whatever knows the layers of an image.

    Usually backed by a registry API; the backends only need the digests,
    a location to fetch each blob from and the headers to do so.
    """

    @abstractmethod
    def layer_digests(self, image_name: str, tag: str) -> list[str]:
        """
        List the layer digests of an image.

        Args:
            image_name: Image repository name
            tag: Image tag

        Returns:
            Layer digests, base layer first

        Raises:
            RegistryException: If the layers cannot be listed
        """
        pass

    def blob_url(self, image_name: str, digest: str) -> Optional[str]:
        """
        Location a scanner can download the layer from (optional).

        Returns:
            URL of the layer blob, None if unknown
        """
        return None

    def auth_headers(self) -> dict[str, str]:
        """Headers a scanner needs to download layer blobs."""
        return {}


class StaticLayerSource(LayerSource):
    """Layer source serving a fixed list of digests."""

    def __init__(self, digests: Sequence[str]):
        self.digests = list(digests)

    def layer_digests(self, image_name: str, tag: str) -> list[str]:
        return list(self.digests)


__all__ = [
    "SecurityBackend",
    "LayerSource",
    "StaticLayerSource",
]
