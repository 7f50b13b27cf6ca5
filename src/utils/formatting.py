"""
Formatting utilities for layerwatch output.

Renders backend results for the terminal.
"""

from typing import Mapping, Sequence

from core.models import Vulnerability


def truncate(text: str, width: int) -> str:
    """
    Shorten text to a column width.

    Args:
        text: Text to shorten
        width: Maximum width, including the ellipsis

    Returns:
        Text unchanged if it fits, otherwise cut and ending in "..."

    Examples:
        >>> truncate("alpine:v3.4", 20)
        'alpine:v3.4'
        >>> truncate("https://cve.mitre.org/cgi-bin/cvename.cgi", 12)
        'https://c...'
    """
    if len(text) <= width:
        return text
    return text[: max(width - 3, 0)] + "..."


def format_vulnerability_row(vuln: Vulnerability) -> str:
    """
    Format one vulnerability as a table row.

    Examples:
        >>> format_vulnerability_row(Vulnerability(name="CVE-2016-8859", namespace="alpine:v3.4", severity="High", fixed_by="1.1.14-r13"))
        'CVE-2016-8859    High        alpine:v3.4       1.1.14-r13'
    """
    fixed_by = vuln.fixed_by or "-"
    return (
        f"{truncate(vuln.name, 16):<16} {truncate(vuln.severity, 10):<10}  "
        f"{truncate(vuln.namespace, 16):<16}  {fixed_by}"
    )


def format_backend_report(results: Mapping[str, Sequence[Vulnerability]]) -> str:
    """
    Format per-backend results as plain text.

    Args:
        results: Mapping of backend id to its vulnerabilities

    Returns:
        One section per backend, in mapping order
    """
    if not results:
        return "No security backend is enabled."

    sections = []
    for backend_id, vulns in results.items():
        lines = [f"{backend_id}: {len(vulns)} vulnerabilities"]
        if vulns:
            lines.append(f"{'NAME':<16} {'SEVERITY':<10}  {'NAMESPACE':<16}  FIXED BY")
            lines.extend(format_vulnerability_row(v) for v in vulns)
        sections.append("\n".join(lines))

    return "\n\n".join(sections)
