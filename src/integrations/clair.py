"""
Clair vulnerability scanner backend implementation.

Implements the SecurityBackend interface for CoreOS Clair (v1 API).
Clair only answers for layers it has indexed, so every layer is first
registered (POST) and then queried (GET).
"""

import logging
from typing import Optional, Sequence

import requests

from constants import (
    CLAIR_FETCH_PARAMS,
    CLAIR_LAYER_FORMAT,
    CLAIR_LAYERS_PATH,
    DEFAULT_HTTP_TIMEOUT,
)
from core.exceptions import (
    FetchFailed,
    LayerwatchException,
    MalformedResponse,
    PostFailed,
    ScannerException,
    Unreachable,
)
from core.models import LayerOutcome, LayerStatus, Vulnerability
from core.scanner_interface import LayerSource, SecurityBackend

logger = logging.getLogger(__name__)


def _error_message(response: requests.Response) -> str:
    """
    Extract the error message of a failed Clair response.

    Clair reports errors as {"Error": {"Message": "..."}}. Anything else
    falls back to the HTTP status line.
    """
    try:
        message = response.json()["Error"]["Message"]
        if message:
            return str(message)
    except (ValueError, KeyError, TypeError):
        pass
    return f"HTTP {response.status_code} {response.reason or ''}".strip()


def _succeeded(response: requests.Response) -> bool:
    """Only 2xx answers count; redirects requests did not follow are failures."""
    return 200 <= response.status_code < 300


def _outcome_status(error: ScannerException) -> LayerStatus:
    """Map a protocol exception to the layer status it stands for."""
    if isinstance(error, Unreachable):
        return LayerStatus.UNREACHABLE
    if isinstance(error, MalformedResponse):
        return LayerStatus.MALFORMED_RESPONSE
    if isinstance(error, PostFailed):
        return LayerStatus.POST_FAILED
    return LayerStatus.FETCH_FAILED


class ClairBackend(SecurityBackend):
    """
    Clair vulnerability scanner backend.

    Registers each layer of an image with a Clair server and collects the
    vulnerabilities Clair reports for it.
    """

    def __init__(
        self,
        server: str,
        layer_source: Optional[LayerSource] = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ):
        """
        Initialize Clair backend.

        Args:
            server: Clair server endpoint (e.g., "http://my.clair:6060")
            layer_source: Tells Clair where to download layers from (optional)
            timeout: Timeout in seconds for each HTTP request
        """
        self.server = server.strip().rstrip("/")
        self.layer_source = layer_source
        self.timeout = timeout

    def name(self) -> str:
        """Return backend name."""
        return "clair"

    def vulnerabilities(
        self, image_name: str, layer_digests: Sequence[str]
    ) -> list[Vulnerability]:
        """
        Look up vulnerabilities of every layer of an image.

        Args:
            image_name: Image repository name
            layer_digests: Layer digests, base layer first

        Returns:
            Vulnerabilities of the layers that could be looked up, in layer order
        """
        found = []
        for outcome in self.scan_layers(image_name, layer_digests):
            if outcome.succeeded:
                found.extend(outcome.vulnerabilities)
        return found

    def scan_layers(
        self, image_name: str, layer_digests: Sequence[str]
    ) -> list[LayerOutcome]:
        """
        Run the register/fetch exchange for each layer.

        Each layer's parent is the digest preceding it in the sequence.

        Args:
            image_name: Image repository name
            layer_digests: Layer digests, base layer first

        Returns:
            One LayerOutcome per non-empty digest
        """
        outcomes = []
        parent = ""
        for digest in layer_digests:
            if not digest:
                continue
            outcomes.append(self._scan_layer(image_name, digest, parent))
            parent = digest
        return outcomes

    def _scan_layer(self, image_name: str, digest: str, parent: str) -> LayerOutcome:
        try:
            self._post_layer(image_name, digest, parent)
        except ScannerException as e:
            logger.debug(f"Could not post '{digest}': {e.reason}")
            return LayerOutcome(digest=digest, status=_outcome_status(e), error=e.reason)

        try:
            found = self._fetch_layer(digest)
        except ScannerException as e:
            logger.debug(f"Error for '{digest}': {e.reason}")
            return LayerOutcome(digest=digest, status=_outcome_status(e), error=e.reason)

        return LayerOutcome(digest=digest, status=LayerStatus.OK, vulnerabilities=tuple(found))

    def _layer_body(self, image_name: str, digest: str, parent: str) -> dict:
        """Build the layer envelope Clair expects on registration."""
        path = None
        headers = {}
        if self.layer_source is not None:
            path = self.layer_source.blob_url(image_name, digest)
            headers = self.layer_source.auth_headers()

        layer = {
            "Name": digest,
            "Path": path or f"{image_name}@{digest}",
            "ParentName": parent,
            "Format": CLAIR_LAYER_FORMAT,
        }
        if headers:
            layer["Headers"] = headers
        return {"Layer": layer}

    def _post_layer(self, image_name: str, digest: str, parent: str) -> None:
        """
        Register a layer with Clair.

        Raises:
            Unreachable: If Clair cannot be reached
            PostFailed: If Clair rejects the layer
        """
        try:
            body = self._layer_body(image_name, digest, parent)
        except LayerwatchException as e:
            raise PostFailed(digest, str(e)) from e

        try:
            response = requests.post(
                f"{self.server}{CLAIR_LAYERS_PATH}",
                json=body,
                timeout=self.timeout,
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            raise Unreachable(digest, str(e), phase="post") from e
        except requests.RequestException as e:
            raise PostFailed(digest, str(e)) from e

        if not _succeeded(response):
            raise PostFailed(digest, _error_message(response))

    def _fetch_layer(self, digest: str) -> list[Vulnerability]:
        """
        Fetch the vulnerabilities Clair knows for a registered layer.

        Raises:
            Unreachable: If Clair cannot be reached
            FetchFailed: If Clair answers with an error
            MalformedResponse: If the body cannot be understood
        """
        try:
            response = requests.get(
                f"{self.server}{CLAIR_LAYERS_PATH}/{digest}",
                params=CLAIR_FETCH_PARAMS,
                timeout=self.timeout,
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            raise Unreachable(digest, str(e), phase="fetch") from e
        except requests.RequestException as e:
            raise FetchFailed(digest, str(e)) from e

        if not _succeeded(response):
            raise FetchFailed(digest, _error_message(response))

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponse(digest, f"Invalid JSON response: {e}") from e

        return self._parse_layer(digest, data)

    def _parse_layer(self, digest: str, data: dict) -> list[Vulnerability]:
        """
        Flatten the features of a Clair layer into vulnerabilities.

        Features without vulnerabilities are skipped.

        Args:
            digest: Layer digest (for error reporting)
            data: Parsed Clair layer response

        Returns:
            Vulnerabilities in feature order
        """
        if not isinstance(data, dict) or not isinstance(data.get("Layer"), dict):
            raise MalformedResponse(digest, "Response has no 'Layer' object")

        features = data["Layer"].get("Features") or []
        if not isinstance(features, list):
            raise MalformedResponse(
                digest, f"Unexpected 'Features' format: {type(features).__name__}"
            )

        found = []
        try:
            for feature in features:
                for vuln in feature.get("Vulnerabilities") or []:
                    found.append(Vulnerability.from_clair(vuln))
        except (AttributeError, KeyError, TypeError) as e:
            raise MalformedResponse(digest, f"Malformed feature entry: {e}") from e

        return found


__all__ = ["ClairBackend"]
