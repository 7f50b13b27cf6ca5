"""
Centralized configuration constants for Layerwatch.

This module provides a single source of truth for configuration values
that are used across multiple modules, making them easier to update
and maintain.
"""

# ============================================================================
# Configuration Files
# ============================================================================

DEFAULT_CONFIG_FILE = "security.yml"
"""Default YAML file holding the backend configuration."""

SECURITY_CONFIG_SECTION = "security"
"""Top-level key under which backend settings live in the config file."""

# ============================================================================
# Network
# ============================================================================

DEFAULT_HTTP_TIMEOUT = 30
"""Default timeout in seconds for every HTTP request made to a backend or registry."""

# ============================================================================
# Clair API
# ============================================================================

CLAIR_LAYERS_PATH = "/v1/layers"
"""Clair v1 endpoint used to register layers and fetch their vulnerabilities."""

CLAIR_FETCH_PARAMS = {
    "features": "false",
    "vulnerabilities": "true",
}
"""Query parameters for the vulnerability fetch (no raw feature listing, include vulnerabilities)."""

CLAIR_LAYER_FORMAT = "Docker"
"""Layer format announced to Clair when registering a layer."""

# ============================================================================
# Registry Configuration
# ============================================================================

DEFAULT_REGISTRY = "https://registry-1.docker.io"
"""Registry used by the CLI when none is given."""

MANIFEST_V2_MEDIA_TYPE = "application/vnd.docker.distribution.manifest.v2+json"
"""Docker image manifest, schema 2."""

MANIFEST_V1_MEDIA_TYPE = "application/vnd.docker.distribution.manifest.v1+prettyjws"
"""Docker image manifest, schema 1 (signed)."""

DEFAULT_TAG = "latest"
"""Tag used when an image reference carries none."""
