"""
LeakHunter Scan Orchestrator

Drives the pipeline over a file collection, one file at a time:

    skip check -> name check -> content scan -> accumulate

then deduplicates and applies the severity/type filters. All state for
one scan lives in a ScanSession; nothing is shared between scans.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Sequence, Union

from leakhunter.core.config import FILTER_ALL, LeakHunterConfig
from leakhunter.core.dedupe import dedupe
from leakhunter.core.finding import FileRecord, Finding, SecretKind, Severity
from leakhunter.scanners.classifier import is_content_eligible, should_skip
from leakhunter.scanners.filenames import SensitiveFileScanner
from leakhunter.scanners.secrets import DEFAULT_MAX_LINES, ContentScanner

logger = logging.getLogger(__name__)

LARGE_SCAN_THRESHOLD = 1000

ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class ScanOptions:
    deep_analysis: bool = True
    max_lines: int = DEFAULT_MAX_LINES
    extended_patterns: bool = False
    severity_filter: str = FILTER_ALL
    type_filter: str = FILTER_ALL
    extra_skip_patterns: tuple[str, ...] = ()
    large_scan_threshold: int = LARGE_SCAN_THRESHOLD

    @classmethod
    def from_config(cls, config: LeakHunterConfig) -> "ScanOptions":
        return cls(
            deep_analysis=config.scan.deep_analysis,
            max_lines=config.scan.max_lines,
            extended_patterns=config.scan.extended_patterns,
            severity_filter=config.filters.severity,
            type_filter=config.filters.type,
            extra_skip_patterns=tuple(config.scan.skip_patterns),
            large_scan_threshold=config.scan.large_scan_threshold,
        )


def parse_severity_filter(value: Union[str, Severity, None]) -> str:
    if value is None:
        return FILTER_ALL
    if isinstance(value, Severity):
        return value.value
    value = value.lower()
    if value == FILTER_ALL:
        return value
    try:
        return Severity.from_string(value).value
    except KeyError:
        raise ValueError(f"Unknown severity filter: {value!r}") from None


def parse_type_filter(value: Union[str, SecretKind, None]) -> Union[str, SecretKind]:
    if value is None or value == FILTER_ALL:
        return FILTER_ALL
    if isinstance(value, SecretKind):
        return value
    return SecretKind.from_string(value)


@dataclass
class ScanSession:
    """Mutable state of one scan."""

    total_files: int = 0
    processed_count: int = 0
    skipped_count: int = 0
    unreadable_count: int = 0
    errors: int = 0
    cancelled: bool = False
    raw_findings: list[Finding] = field(default_factory=list)
    deduped_findings: list[Finding] = field(default_factory=list)
    severity_filter: str = FILTER_ALL
    type_filter: Union[str, SecretKind] = FILTER_ALL
    warnings: list[str] = field(default_factory=list)

    def set_filters(
        self,
        severity: Union[str, Severity, None] = None,
        kind: Union[str, SecretKind, None] = None,
    ) -> list[Finding]:
        """Change the filters and return the newly filtered findings."""
        if severity is not None:
            self.severity_filter = parse_severity_filter(severity)
        if kind is not None:
            self.type_filter = parse_type_filter(kind)
        return self.filtered()

    def filtered(self) -> list[Finding]:
        """Deduplicated findings matching the filters, most severe first."""
        selected = [
            f
            for f in self.deduped_findings
            if (self.severity_filter == FILTER_ALL or f.severity.value == self.severity_filter)
            and (self.type_filter == FILTER_ALL or f.kind is self.type_filter)
        ]
        return sorted(selected, key=lambda f: -f.severity.rank)

    def severity_counts(self) -> dict[str, int]:
        counter = Counter(f.severity.value for f in self.deduped_findings)
        return {sev.value: counter.get(sev.value, 0) for sev in Severity}

    def clear(self) -> None:
        self.total_files = 0
        self.processed_count = 0
        self.skipped_count = 0
        self.unreadable_count = 0
        self.errors = 0
        self.cancelled = False
        self.raw_findings.clear()
        self.deduped_findings.clear()
        self.warnings.clear()


class ScanOrchestrator:
    """Runs the scanners over a collection of file records."""

    def __init__(self, options: Optional[ScanOptions] = None) -> None:
        self.options = options or ScanOptions()
        self.name_scanner = SensitiveFileScanner()
        self.content_scanner = ContentScanner(
            deep_analysis=self.options.deep_analysis,
            max_lines=self.options.max_lines,
            extended_patterns=self.options.extended_patterns,
        )

    def run(
        self,
        files: Iterable[FileRecord],
        progress: Optional[ProgressCallback] = None,
        session: Optional[ScanSession] = None,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> ScanSession:
        records: Sequence[FileRecord] = list(files)

        if session is None:
            session = ScanSession()
        else:
            session.clear()
        session.severity_filter = parse_severity_filter(self.options.severity_filter)
        session.type_filter = parse_type_filter(self.options.type_filter)
        session.total_files = len(records)

        if session.total_files > self.options.large_scan_threshold:
            message = (
                f"Large scan detected: {session.total_files} files. "
                "All files are scanned sequentially; this may take a while."
            )
            logger.warning(message)
            session.warnings.append(message)

        for record in records:
            if should_cancel and should_cancel():
                session.cancelled = True
                logger.info(
                    "Scan cancelled after %d of %d files",
                    session.processed_count,
                    session.total_files,
                )
                break

            try:
                session.raw_findings.extend(self.scan_record(record, session))
            except Exception:
                session.errors += 1
                logger.exception("Failed to scan %s", record.path)

            session.processed_count += 1
            if progress:
                progress(session.processed_count, session.total_files)

        session.deduped_findings = dedupe(session.raw_findings)
        logger.info(
            "Scanned %d/%d files, %d finding(s) (%d before dedup)",
            session.processed_count,
            session.total_files,
            len(session.deduped_findings),
            len(session.raw_findings),
        )
        return session

    def scan_record(self, record: FileRecord, session: ScanSession) -> list[Finding]:
        """Findings for one file; never touches findings of other files."""
        if should_skip(record.name, record.path, self.options.extra_skip_patterns):
            session.skipped_count += 1
            return []

        findings = self.name_scanner.scan(record)

        if is_content_eligible(record):
            text = self.content_scanner.read(record)
            if text is None:
                session.unreadable_count += 1
            else:
                findings.extend(self.content_scanner.scan_text(record.path, text))

        return findings


def run_scan(
    files: Iterable[FileRecord],
    options: Optional[ScanOptions] = None,
    progress: Optional[ProgressCallback] = None,
    session: Optional[ScanSession] = None,
    should_cancel: Optional[Callable[[], bool]] = None,
) -> ScanSession:
    """Scan ``files`` in order and return the finalized session."""
    orchestrator = ScanOrchestrator(options)
    return orchestrator.run(files, progress=progress, session=session, should_cancel=should_cancel)
