"""
LeakHunter Sensitive File Scanner

Flags files whose name alone suggests secret material
(.env files, key files, database dumps, backups).
"""

from __future__ import annotations

from typing import List

from leakhunter.core.finding import FileRecord, Finding, SecretKind
from leakhunter.core.scanner import BaseScanner
from leakhunter.scanners.classifier import is_sensitive_name
from leakhunter.scanners.patterns import default_severity


class SensitiveFileScanner(BaseScanner):
    name = "filenames"

    def scan(self, record: FileRecord) -> List[Finding]:
        if not is_sensitive_name(record.name):
            return []
        return [
            Finding(
                kind=SecretKind.SENSITIVE_FILE,
                file_path=record.path,
                severity=default_severity(SecretKind.SENSITIVE_FILE),
                snippet=f"Sensitive file: {record.basename}",
            )
        ]
