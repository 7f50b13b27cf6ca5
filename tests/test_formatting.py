"""Tests for formatting utilities."""

import pytest

from core.models import Vulnerability
from utils.formatting import format_backend_report, format_vulnerability_row, truncate


class TestTruncate:
    """Tests for truncate function."""

    def test_short_text_unchanged(self):
        assert truncate("alpine:v3.4", 20) == "alpine:v3.4"

    def test_exact_width_unchanged(self):
        assert truncate("abcdef", 6) == "abcdef"

    def test_long_text_cut(self):
        assert truncate("abcdefghij", 6) == "abc..."
        assert len(truncate("abcdefghij", 6)) == 6


class TestFormatBackendReport:
    """Tests for format_backend_report function."""

    def test_no_backends(self):
        assert format_backend_report({}) == "No security backend is enabled."

    def test_backend_without_results(self):
        assert format_backend_report({"clair": []}) == "clair: 0 vulnerabilities"

    def test_sections_in_order(self, sample_vulnerability):
        unfixed = Vulnerability(name="CVE-2016-2148", severity="Medium", namespace="alpine:v3.4")

        report = format_backend_report({"clair": [sample_vulnerability, unfixed], "dummy": []})
        lines = report.splitlines()

        assert lines[0] == "clair: 2 vulnerabilities"
        assert lines[1].startswith("NAME")
        assert lines[2].startswith("CVE-2016-8859")
        assert lines[2].endswith("1.1.14-r13")
        assert lines[3].startswith("CVE-2016-2148")
        assert lines[3].endswith("-")
        assert lines[-1] == "dummy: 0 vulnerabilities"

    def test_row_columns(self, sample_vulnerability):
        row = format_vulnerability_row(sample_vulnerability)
        assert row.split() == ["CVE-2016-8859", "High", "alpine:v3.4", "1.1.14-r13"]
