"""
LeakHunter Console Reporter

Human-readable colored console output, grouped by file.
"""

from __future__ import annotations

import sys
from itertools import groupby

import click

from leakhunter import __version__
from leakhunter.core.finding import Finding
from leakhunter.core.session import ScanSession
from leakhunter.remediation.engine import enrich


def _safe_echo(text: str = "", **kwargs) -> None:
    """Echo text, handling Unicode issues on Windows consoles."""
    try:
        click.echo(text, **kwargs)
    except UnicodeEncodeError:
        safe = text.encode(sys.stdout.encoding or "utf-8", errors="replace").decode(
            sys.stdout.encoding or "utf-8", errors="replace"
        )
        click.echo(safe, **kwargs)


# Severity colors
SEVERITY_COLORS = {
    "critical": "bright_red",
    "high": "red",
    "medium": "yellow",
    "low": "cyan",
}


class ConsoleReporter:
    """Prints a formatted scan report to the console."""

    def __init__(self, target: str, show_fixes: bool = False) -> None:
        self.target = target
        self.show_fixes = show_fixes

    def report(self, session: ScanSession) -> None:
        findings = session.filtered()

        self._print_header(session)
        self._print_warnings(session)
        self._print_severity_summary(session)

        if findings:
            self._print_detailed_findings(findings)

        self._print_footer(session, findings)

    def _print_header(self, session: ScanSession) -> None:
        _safe_echo("")
        _safe_echo(click.style("=" * 60, fg="bright_blue"))
        _safe_echo(click.style("  LeakHunter Scan Report", fg="bright_white", bold=True))
        _safe_echo(click.style(f"  Version: {__version__}", fg="white"))
        _safe_echo(click.style(f"  Target: {self.target}", fg="white"))
        _safe_echo(
            click.style(
                f"  Files: {session.processed_count} / {session.total_files} scanned"
                f" ({session.skipped_count} skipped)",
                fg="white",
            )
        )
        _safe_echo(click.style("=" * 60, fg="bright_blue"))

    def _print_warnings(self, session: ScanSession) -> None:
        for message in session.warnings:
            _safe_echo(click.style(f"  [!] {message}", fg="yellow"))
        if session.cancelled:
            _safe_echo(click.style("  [!] Scan was cancelled; results are partial.", fg="yellow"))

    def _print_severity_summary(self, session: ScanSession) -> None:
        _safe_echo("")
        _safe_echo(click.style("  Findings Summary:", fg="bright_white", bold=True))
        for sev, count in session.severity_counts().items():
            color = SEVERITY_COLORS.get(sev, "white")
            _safe_echo(
                click.style(f"     {sev.upper():10s}: ", fg=color) + click.style(str(count), fg="white")
            )

    def _print_detailed_findings(self, findings: list[Finding]) -> None:
        _safe_echo("")
        _safe_echo(click.style("  Detailed Findings:", fg="bright_white", bold=True))
        _safe_echo(click.style("-" * 60, fg="bright_black"))

        ordered = sorted(findings, key=lambda f: f.file_path)
        for file_path, group in groupby(ordered, key=lambda f: f.file_path):
            _safe_echo("")
            _safe_echo(click.style(f"  FILE: {file_path}", fg="bright_white"))
            for finding in group:
                self._print_finding(finding)

    def _print_finding(self, finding: Finding) -> None:
        enriched = enrich(finding)
        sev = finding.severity.value
        color = SEVERITY_COLORS.get(sev, "white")
        line = finding.line_number if finding.line_number is not None else "N/A"

        _safe_echo(
            click.style("    --> ", fg="white")
            + click.style(f"[{sev.upper()}]", fg=color, bold=True)
            + click.style(f" {finding.kind.value} at line {line}", fg="bright_white")
            + click.style(f"  (risk {enriched.risk_score}/100)", fg="bright_black")
        )
        if finding.snippet:
            _safe_echo(click.style(f"        {finding.snippet}", fg="bright_black"))

        if not self.show_fixes:
            return

        plan = enriched.plan
        _safe_echo(
            click.style(f"        Fix: {plan.title} ({plan.priority.value} priority)", fg="green")
        )
        for idx, step in enumerate(plan.steps, start=1):
            _safe_echo(click.style(f"          {idx}. {step}", fg="white"))
        if plan.automation:
            _safe_echo(click.style(f"        Auto-fix: {plan.automation.script}", fg="cyan"))

    def _print_footer(self, session: ScanSession, findings: list[Finding]) -> None:
        _safe_echo("")
        _safe_echo(click.style("=" * 60, fg="bright_blue"))

        if not session.deduped_findings:
            _safe_echo(
                click.style(
                    "  [OK] No leaks detected! Your project appears clean.",
                    fg="green",
                    bold=True,
                )
            )
        else:
            _safe_echo(
                click.style(
                    f"  [!] {len(findings)} of {len(session.deduped_findings)} "
                    "potential security issue(s) shown",
                    fg="yellow",
                    bold=True,
                )
            )

        _safe_echo(click.style("=" * 60, fg="bright_blue"))
        _safe_echo("")
