"""
Dummy backend for development setups.

Answers every lookup with the same canned vulnerabilities, without any
network access.
"""

import logging
from typing import Sequence

from core.models import SeverityLevel, Vulnerability
from core.scanner_interface import SecurityBackend

logger = logging.getLogger(__name__)

DUMMY_VULNERABILITIES = (
    Vulnerability(
        name="CVE-2014-0160",
        namespace="debian:8",
        link="https://security-tracker.debian.org/tracker/CVE-2014-0160",
        severity=SeverityLevel.HIGH.value,
        metadata={"NVD": {"CVSSv2": {"Score": 5.0, "Vectors": "AV:N/AC:L/Au:N/C:P/I:N"}}},
        fixed_by="1.0.1g-1",
    ),
    Vulnerability(
        name="CVE-2016-2108",
        namespace="debian:8",
        link="https://security-tracker.debian.org/tracker/CVE-2016-2108",
        severity=SeverityLevel.CRITICAL.value,
        metadata={"NVD": {"CVSSv2": {"Score": 10.0, "Vectors": "AV:N/AC:L/Au:N/C:C/I:C"}}},
        fixed_by="1.0.1t-1+deb8u1",
    ),
    Vulnerability(
        name="CVE-2016-7056",
        namespace="debian:8",
        link="https://security-tracker.debian.org/tracker/CVE-2016-7056",
        severity=SeverityLevel.LOW.value,
        metadata={},
        fixed_by=None,
    ),
)


class DummyBackend(SecurityBackend):
    """Backend returning fixed data, useful to try the UI without a scanner."""

    def __init__(self, server: str = ""):
        self.server = server

    def name(self) -> str:
        """Return backend name."""
        return "dummy"

    def vulnerabilities(
        self, image_name: str, layer_digests: Sequence[str]
    ) -> list[Vulnerability]:
        if not any(layer_digests):
            return []

        logger.debug(f"Returning canned vulnerabilities for {image_name}")
        return list(DUMMY_VULNERABILITIES)


__all__ = ["DummyBackend", "DUMMY_VULNERABILITIES"]
