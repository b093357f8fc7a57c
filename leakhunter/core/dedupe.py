"""
LeakHunter Deduplication

Collapses findings that describe the same issue. First occurrence wins
and the original order is preserved.
"""

from __future__ import annotations

from typing import Hashable, Iterable, List

from leakhunter.core.finding import Finding

# Snippet prefix length used in the dedup key
KEY_SNIPPET_LENGTH = 50


def dedupe_key(finding: Finding) -> Hashable:
    return (
        finding.file_path,
        finding.line_number,
        finding.kind,
        (finding.snippet or "")[:KEY_SNIPPET_LENGTH],
    )


def dedupe(findings: Iterable[Finding]) -> List[Finding]:
    seen: set = set()
    unique: List[Finding] = []
    for finding in findings:
        key = dedupe_key(finding)
        if key in seen:
            continue
        seen.add(key)
        unique.append(finding)
    return unique
