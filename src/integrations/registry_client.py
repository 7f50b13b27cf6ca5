"""
Docker Registry v2 client.

Lists the layers of an image from its manifest so they can be handed to
the scanning backends, and tells the backends where to download them.
"""

import logging
from typing import Optional

import requests

from constants import (
    DEFAULT_HTTP_TIMEOUT,
    MANIFEST_V1_MEDIA_TYPE,
    MANIFEST_V2_MEDIA_TYPE,
)
from core.exceptions import RegistryException
from core.scanner_interface import LayerSource

logger = logging.getLogger(__name__)


class RegistryClient(LayerSource):
    """
    Client for the Docker Registry HTTP API v2.

    Supports bearer tokens obtained elsewhere; no token negotiation is done.
    """

    def __init__(
        self,
        url: str,
        token: Optional[str] = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ):
        """
        Initialize registry client.

        Args:
            url: Registry base URL (e.g., "https://registry.test.cat:5000")
            token: Bearer token for the registry (optional)
            timeout: Timeout in seconds for each request
        """
        self.url = url.rstrip("/")
        self.token = token
        self.timeout = timeout

    def auth_headers(self) -> dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def blob_url(self, image_name: str, digest: str) -> str:
        return f"{self.url}/v2/{image_name}/blobs/{digest}"

    def layer_digests(self, image_name: str, tag: str) -> list[str]:
        """
        List the layer digests of an image from its manifest.

        Args:
            image_name: Repository name (e.g., "coreos/dex")
            tag: Tag name

        Returns:
            Layer digests, base layer first

        Raises:
            RegistryException: If the manifest cannot be fetched or parsed
        """
        reference = f"{image_name}:{tag}"
        headers = {
            "Accept": f"{MANIFEST_V2_MEDIA_TYPE}, {MANIFEST_V1_MEDIA_TYPE}",
            **self.auth_headers(),
        }

        try:
            response = requests.get(
                f"{self.url}/v2/{image_name}/manifests/{tag}",
                headers=headers,
                timeout=self.timeout,
            )
        except requests.Timeout:
            raise RegistryException(reference, "Timeout fetching manifest")
        except requests.RequestException as e:
            raise RegistryException(reference, f"Request failed: {e}")

        if response.status_code == 401:
            raise RegistryException(reference, "Unauthorized", status_code=401)
        if response.status_code == 404:
            raise RegistryException(reference, "Manifest not found", status_code=404)
        if not response.ok:
            raise RegistryException(
                reference, f"HTTP {response.status_code}", status_code=response.status_code
            )

        try:
            manifest = response.json()
        except ValueError as e:
            raise RegistryException(reference, f"Invalid manifest: {e}")

        digests = self._parse_manifest(reference, manifest)
        logger.debug(f"Found {len(digests)} layers for {reference}")
        return digests

    def _parse_manifest(self, reference: str, manifest: dict) -> list[str]:
        """
        Extract layer digests from a schema 1 or schema 2 manifest.

        Schema 1 lists layers innermost first, so they are reversed.
        """
        if not isinstance(manifest, dict):
            raise RegistryException(reference, "Manifest is not a JSON object")

        try:
            if manifest.get("schemaVersion") == 1:
                return [layer["blobSum"] for layer in reversed(manifest["fsLayers"])]
            return [layer["digest"] for layer in manifest["layers"]]
        except (KeyError, TypeError) as e:
            raise RegistryException(reference, f"Unexpected manifest format: {e}")


__all__ = ["RegistryClient"]
