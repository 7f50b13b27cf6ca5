"""
Utilities for parsing container image references.

Splits references such as "registry.test.cat:5000/coreos/dex:v2" into the
parts needed to talk to a registry and to the scanning backends.
"""

from dataclasses import dataclass
from typing import Optional

from constants import DEFAULT_TAG


@dataclass(frozen=True)
class ImageReference:
    """Parsed container image reference."""

    registry: Optional[str]
    repository: str
    tag: str

    @property
    def full_name(self) -> str:
        """Return the full image reference."""
        if self.registry:
            return f"{self.registry}/{self.repository}:{self.tag}"
        return f"{self.repository}:{self.tag}"

    def registry_url(self, use_ssl: bool = True) -> Optional[str]:
        """Base URL of the registry, None if the reference names none."""
        if not self.registry:
            return None
        scheme = "https" if use_ssl else "http"
        return f"{scheme}://{self.registry}"


def parse_image_reference(image: str, default_tag: str = DEFAULT_TAG) -> ImageReference:
    """
    Parse a container image reference into its components.

    Digests ("@sha256:...") are dropped: layers are always resolved by tag.

    Args:
        image: Image reference (e.g., "coreos/dex:v2")
        default_tag: Tag used when the reference has none

    Returns:
        ImageReference with parsed components

    Raises:
        ValueError: If the reference has no repository

    Examples:
        >>> parse_image_reference("coreos/dex")
        ImageReference(registry=None, repository='coreos/dex', tag='latest')

        >>> parse_image_reference("registry.test.cat:5000/coreos/dex:v2")
        ImageReference(registry='registry.test.cat:5000', repository='coreos/dex', tag='v2')
    """
    image = image.strip()
    if "@" in image:
        image = image.split("@", 1)[0]

    tag = None
    last_colon = image.rfind(":")
    if last_colon > image.rfind("/"):
        image, tag = image[:last_colon], image[last_colon + 1:]

    registry = None
    parts = image.split("/")
    if len(parts) > 1 and _is_registry(parts[0]):
        registry = parts[0]
        parts = parts[1:]

    repository = "/".join(parts)
    if not repository:
        raise ValueError("Image reference has no repository")

    return ImageReference(registry=registry, repository=repository, tag=tag or default_tag)


def _is_registry(part: str) -> bool:
    """Check if a string looks like a registry hostname."""
    # Contains . or : (port), or is localhost
    return "." in part or ":" in part or part == "localhost"
