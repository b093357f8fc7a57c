"""
LeakHunter Content Scanner

Applies the detection rules to a file's content line by line.

Rules are tested in a fixed priority order and the first match wins,
so a line yields at most one finding:

    Discord token -> GitHub token -> generic API key -> hardcoded credentials
    [deep]     JWT secret -> backdoor endpoint -> mass deletion
    [extended] Telegram token -> env assignment -> private key -> comment

Only the first ``max_lines`` lines of a file are sampled.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from leakhunter.core.finding import FileRecord, Finding, SecretKind, truncate_snippet
from leakhunter.core.scanner import BaseScanner
from leakhunter.scanners.patterns import (
    DEEP,
    EXTENDED,
    PATTERNS,
    STRUCTURAL_RULES,
    Pattern,
    StructuralRule,
    pattern_for,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_LINES = 100

Rule = Union[Pattern, StructuralRule]


def _core_rules() -> list[Rule]:
    rules: list[Rule] = [
        pattern_for(SecretKind.DISCORD),
        pattern_for(SecretKind.GITHUB),
        pattern_for(SecretKind.GENERIC_API),
    ]
    rules.extend(r for r in STRUCTURAL_RULES if r.name is SecretKind.HARDCODED_CREDENTIALS)
    return rules


class ContentScanner(BaseScanner):
    """
    Line-oriented secrets scanner.

    ``deep_analysis`` enables the JWT/backdoor/mass-deletion tier.
    ``extended_patterns`` appends the remaining catalog entries.
    """

    name = "secrets"

    def __init__(
        self,
        deep_analysis: bool = True,
        max_lines: int = DEFAULT_MAX_LINES,
        extended_patterns: bool = False,
    ) -> None:
        self.deep_analysis = deep_analysis
        self.max_lines = max_lines
        self.extended_patterns = extended_patterns
        self._rules = self._build_rules()

    def _build_rules(self) -> tuple[Rule, ...]:
        rules = _core_rules()
        if self.deep_analysis:
            rules.extend(r for r in STRUCTURAL_RULES if r.tier == DEEP)
        if self.extended_patterns:
            rules.extend(p for p in PATTERNS if p.tier == EXTENDED)
        return tuple(rules)

    def rules(self) -> tuple[Rule, ...]:
        """Active rules in evaluation order."""
        return self._rules

    def scan(self, record: FileRecord) -> List[Finding]:
        text = self.read(record)
        if text is None:
            return []
        return self.scan_text(record.path, text)

    @staticmethod
    def read(record: FileRecord) -> Optional[str]:
        """Return the record's text, or None if it cannot be read or decoded."""
        try:
            return record.read_text()
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Skipping content of %s: %s", record.path, exc)
            return None

    def scan_text(self, file_path: str, text: str) -> List[Finding]:
        findings: List[Finding] = []

        lines = text.split("\n")
        for idx, raw_line in enumerate(lines[: self.max_lines]):
            line = raw_line.strip()
            if not line:
                continue

            finding = self.detect(line, file_path, idx + 1)
            if finding:
                findings.append(finding)

        return findings

    def detect(self, line: str, file_path: str, line_number: int) -> Optional[Finding]:
        """Return a finding for the first rule matching ``line``."""
        for rule in self._rules:
            if rule.matches(line):
                return Finding(
                    kind=rule.name,
                    file_path=file_path,
                    severity=rule.severity,
                    line_number=line_number,
                    snippet=truncate_snippet(line),
                )
        return None
