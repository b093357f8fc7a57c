"""
LeakHunter JSON Reporter

Generates the scan export document:
{
    "scanDate": "2026-01-01T00:00:00+00:00",
    "totalFilesScanned": N,
    "totalIssuesFound": N,
    "findings": [...],
    "summary": {"totalIssuesDetected": N, "filters": {...}, "bySeverity": {...}},
    "tool": {"name": "LeakHunter", "version": "..."}
}

``findings`` and ``totalIssuesFound`` hold the filtered subset; the
summary counts cover every deduplicated finding and record the filters.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from leakhunter import __version__
from leakhunter.core.session import ScanSession
from leakhunter.remediation.engine import enrich


class JSONReporter:
    """Generates JSON-formatted scan reports."""

    def __init__(self, remediation: bool = False) -> None:
        self.remediation = remediation

    def build(self, session: ScanSession, scan_date: Optional[datetime] = None) -> dict:
        findings = session.filtered()
        scan_date = scan_date or datetime.now(timezone.utc)

        if self.remediation:
            finding_dicts = [enrich(f).to_dict() for f in findings]
        else:
            finding_dicts = [f.to_dict() for f in findings]

        return {
            "scanDate": scan_date.isoformat(),
            "totalFilesScanned": session.processed_count,
            "totalIssuesFound": len(findings),
            "findings": finding_dicts,
            "summary": {
                "totalFiles": session.total_files,
                "totalIssuesDetected": len(session.deduped_findings),
                "filters": {
                    "severity": session.severity_filter,
                    "type": getattr(session.type_filter, "value", session.type_filter),
                },
                "bySeverity": session.severity_counts(),
                "cancelled": session.cancelled,
            },
            "tool": {
                "name": "LeakHunter",
                "version": __version__,
            },
        }

    def report(
        self,
        session: ScanSession,
        output_file: Optional[str] = None,
    ) -> str:
        """
        Generate JSON report.

        Args:
            session: Finalized scan session.
            output_file: Optional file path to write the report to.

        Returns:
            The JSON string.
        """
        json_str = json.dumps(self.build(session), indent=2, default=str)

        if output_file:
            Path(output_file).write_text(json_str, encoding="utf-8")

        return json_str


def export_filename(scan_date: Optional[datetime] = None) -> str:
    scan_date = scan_date or datetime.now(timezone.utc)
    return f"leakhunter-scan-{scan_date.date().isoformat()}.json"
