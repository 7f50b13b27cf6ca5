"""
Pytest fixtures and configuration for Layerwatch tests.

Provides shared fixtures and test utilities across the test suite.
"""

import json
from pathlib import Path

import pytest
import requests

from core.models import Vulnerability

FIXTURES_DIR = Path(__file__).parent / "fixtures"

DEX_DIGEST = "sha256:28c417e954d8f9d2439d5b9c7ea3dcb2fd31690bf2d79b94333d889ea26689d2"


def make_response(status_code: int = 200, body=None, reason: str = "") -> requests.Response:
    """Build a real requests.Response carrying a JSON (or raw) body."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    if body is None:
        response._content = b""
    elif isinstance(body, (bytes, str)):
        response._content = body.encode() if isinstance(body, str) else body
    else:
        response._content = json.dumps(body).encode()
    return response


def clair_error(message: str) -> dict:
    """Error body as returned by Clair."""
    return {"Error": {"Message": message}}


@pytest.fixture
def clair_layer_body():
    """Clair layer response for coreos/dex."""
    return json.loads((FIXTURES_DIR / "clair_layer.json").read_text())


@pytest.fixture
def security_config():
    """Backend configuration with only clair enabled."""
    return {
        "clair": {"server": "http://my.clair:6060"},
        "zypper": {"server": ""},
        "dummy": {"server": ""},
    }


@pytest.fixture
def dex_digest():
    """Digest of the coreos/dex layer used across tests."""
    return DEX_DIGEST


@pytest.fixture
def sample_vulnerability():
    """Sample vulnerability record."""
    return Vulnerability(
        name="CVE-2016-8859",
        namespace="alpine:v3.4",
        link="https://cve.mitre.org/cgi-bin/cvename.cgi?name=CVE-2016-8859",
        severity="High",
        metadata={"NVD": {"CVSSv2": {"Score": 7.5, "Vectors": "AV:N/AC:L/Au:N/C:P/I:P"}}},
        fixed_by="1.1.14-r13",
    )


@pytest.fixture
def security_yaml(tmp_path):
    """Temporary configuration file for testing."""
    config_file = tmp_path / "security.yml"
    config_file.write_text(
        """
security:
  clair:
    server: "http://my.clair:6060"
    timeout: 5
  zypper:
    server: ""
  dummy:
    server:
"""
    )
    return config_file
