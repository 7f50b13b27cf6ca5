"""Tests for core data models."""

import dataclasses

import pytest

from core.models import (
    BackendEntry,
    LayerOutcome,
    LayerStatus,
    SeverityLevel,
    Vulnerability,
)


class TestSeverityLevel:
    """Tests for SeverityLevel normalization."""

    def test_known_value(self):
        assert SeverityLevel.normalize("High") == "High"

    def test_case_insensitive(self):
        assert SeverityLevel.normalize("critical") == "Critical"
        assert SeverityLevel.normalize("DEFCON1") == "Defcon1"

    def test_missing_is_unknown(self):
        assert SeverityLevel.normalize(None) == "Unknown"
        assert SeverityLevel.normalize("") == "Unknown"

    def test_unrecognized_passes_through(self):
        """Test scanner-specific severities are kept as reported."""
        assert SeverityLevel.normalize("Important") == "Important"


class TestBackendEntry:
    """Tests for BackendEntry model."""

    def test_enabled_with_server(self):
        assert BackendEntry(id="clair", server="http://my.clair:6060").enabled is True

    @pytest.mark.parametrize("server", ["", "   ", "\t\n"])
    def test_disabled_with_blank_server(self, server):
        assert BackendEntry(id="clair", server=server).enabled is False

    def test_default_is_disabled(self):
        entry = BackendEntry(id="dummy")
        assert entry.enabled is False
        assert entry.options == {}

    def test_immutable(self):
        entry = BackendEntry(id="clair", server="http://my.clair:6060")
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.server = ""


class TestVulnerability:
    """Tests for Vulnerability model."""

    def test_from_clair(self, sample_vulnerability):
        """Test all fields are taken from the Clair object."""
        data = {
            "Name": "CVE-2016-8859",
            "NamespaceName": "alpine:v3.4",
            "Link": "https://cve.mitre.org/cgi-bin/cvename.cgi?name=CVE-2016-8859",
            "Severity": "High",
            "Metadata": {"NVD": {"CVSSv2": {"Score": 7.5, "Vectors": "AV:N/AC:L/Au:N/C:P/I:P"}}},
            "FixedBy": "1.1.14-r13",
        }

        assert Vulnerability.from_clair(data) == sample_vulnerability

    def test_from_clair_minimal(self):
        """Test optional fields get their defaults."""
        vuln = Vulnerability.from_clair({"Name": "CVE-2016-2148"})

        assert vuln.namespace == ""
        assert vuln.link == ""
        assert vuln.severity == "Unknown"
        assert vuln.metadata == {}
        assert vuln.fixed_by is None

    def test_from_clair_empty_fixed_by(self):
        assert Vulnerability.from_clair({"Name": "CVE-2016-2148", "FixedBy": ""}).fixed_by is None

    def test_from_clair_requires_name(self):
        with pytest.raises(KeyError):
            Vulnerability.from_clair({"Severity": "High"})

    def test_to_dict(self, sample_vulnerability):
        result = sample_vulnerability.to_dict()

        assert result == {
            "name": "CVE-2016-8859",
            "namespace": "alpine:v3.4",
            "link": "https://cve.mitre.org/cgi-bin/cvename.cgi?name=CVE-2016-8859",
            "severity": "High",
            "metadata": {"NVD": {"CVSSv2": {"Score": 7.5, "Vectors": "AV:N/AC:L/Au:N/C:P/I:P"}}},
            "fixed_by": "1.1.14-r13",
        }

    def test_immutable(self, sample_vulnerability):
        with pytest.raises(dataclasses.FrozenInstanceError):
            sample_vulnerability.severity = "Low"

    def test_hashable(self, sample_vulnerability):
        """Test records can be collected in sets despite their metadata dict."""
        copy = Vulnerability.from_clair({
            "Name": "CVE-2016-8859",
            "NamespaceName": "alpine:v3.4",
            "Link": "https://cve.mitre.org/cgi-bin/cvename.cgi?name=CVE-2016-8859",
            "Severity": "High",
            "Metadata": {"NVD": {"CVSSv2": {"Score": 7.5, "Vectors": "AV:N/AC:L/Au:N/C:P/I:P"}}},
            "FixedBy": "1.1.14-r13",
        })

        assert hash(copy) == hash(sample_vulnerability)
        assert len({sample_vulnerability, copy}) == 1
        assert {sample_vulnerability: "clair"}[copy] == "clair"

    def test_metadata_still_compared(self, sample_vulnerability):
        other = Vulnerability(
            name=sample_vulnerability.name,
            namespace=sample_vulnerability.namespace,
            link=sample_vulnerability.link,
            severity=sample_vulnerability.severity,
            metadata={},
            fixed_by=sample_vulnerability.fixed_by,
        )

        assert other != sample_vulnerability
        assert len({other, sample_vulnerability}) == 2


class TestLayerOutcome:
    """Tests for LayerOutcome model."""

    def test_succeeded(self, sample_vulnerability):
        outcome = LayerOutcome(
            digest="sha256:abc", status=LayerStatus.OK, vulnerabilities=(sample_vulnerability,)
        )
        assert outcome.succeeded is True
        assert outcome.error is None

    @pytest.mark.parametrize(
        "status",
        [
            LayerStatus.POST_FAILED,
            LayerStatus.FETCH_FAILED,
            LayerStatus.UNREACHABLE,
            LayerStatus.MALFORMED_RESPONSE,
        ],
    )
    def test_failed(self, status):
        outcome = LayerOutcome(digest="sha256:abc", status=status, error="boom")
        assert outcome.succeeded is False
        assert outcome.vulnerabilities == ()
