"""
LeakHunter CLI

Command-line interface for running offline secret scans.

Commands:
    leakhunter scan [PATH]          - Scan a directory or file for leaks
    leakhunter init                 - Create a default config file
    leakhunter explain TYPE         - Show remediation guidance for a finding type
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from leakhunter import __version__
from leakhunter.core.config import (
    CONFIG_FILENAME,
    LeakHunterConfig,
    generate_default_config,
)
from leakhunter.core.finding import FileRecord, Finding, SecretKind, Severity
from leakhunter.core.session import ScanOptions, run_scan
from leakhunter.core.sources import iter_directory, records_from_paths
from leakhunter.remediation.engine import analyze, estimate_fix_time, fix_command, risk_score
from leakhunter.reporting.console import ConsoleReporter
from leakhunter.reporting.json_reporter import JSONReporter, export_filename
from leakhunter.scanners.patterns import default_severity

SEVERITY_CHOICES = ["all", "low", "medium", "high", "critical"]
TYPE_CHOICES = ["all"] + [kind.name.lower() for kind in SecretKind]


def _safe_echo(text: str = "", **kwargs) -> None:
    """Echo text, handling Unicode issues on Windows consoles."""
    try:
        click.echo(text, **kwargs)
    except UnicodeEncodeError:
        encoding = sys.stdout.encoding or "utf-8"
        click.echo(text.encode(encoding, errors="replace").decode(encoding), **kwargs)


def _collect_records(targets: list[Path], exclusions: list[str]) -> list[FileRecord]:
    """Walk directory targets; explicit file targets are taken as given."""
    records: list[FileRecord] = []
    files: list[Path] = []
    for target in targets:
        if target.is_dir():
            records.extend(iter_directory(target.resolve(), exclude=exclusions))
        else:
            files.append(target)
    records.extend(records_from_paths(files))
    return records


@click.group()
@click.version_option(version=__version__, prog_name="LeakHunter")
@click.option("-v", "--verbose", is_flag=True, help="Enable informational logging.")
def cli(verbose: bool) -> None:
    """
    LeakHunter - Offline Secret Scanner

    Find leaked tokens, hardcoded credentials and sensitive files
    in a local project without sending anything over the network.
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ═══════════════════════════════════════════════════════
#  leakhunter scan
# ═══════════════════════════════════════════════════════
@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True))
@click.option("--no-deep", is_flag=True,
              help="Skip the JWT secret, backdoor route and mass-deletion checks.")
@click.option("--extended", is_flag=True,
              help="Also check Telegram tokens, env assignments, private keys and comments.")
@click.option("--max-lines", type=click.IntRange(min=1), default=None,
              help="Lines sampled per file (default: 100).")
@click.option("--severity", type=click.Choice(SEVERITY_CHOICES, case_sensitive=False),
              default=None, help="Only show findings of this severity.")
@click.option("--type", "type_filter", type=click.Choice(TYPE_CHOICES, case_sensitive=False),
              default=None, help="Only show findings of this type.")
@click.option("--format", "-f", "output_format", type=click.Choice(["console", "json"]),
              default=None, help="Output format (default: console).")
@click.option("--output", "-o", "output_file", type=click.Path(), default=None,
              help="Write the JSON report to a file or directory. The report holds "
                   "the findings left after --severity/--type filtering.")
@click.option("--exclude", multiple=True, help="Paths or patterns to exclude.")
@click.option("--fixes", is_flag=True, help="Show remediation steps for each finding.")
@click.option("--fail-on", type=click.Choice(["critical", "high", "medium", "low"],
              case_sensitive=False), default=None,
              help="Minimum severity that causes a non-zero exit code.")
@click.option("--config", "config_path", type=click.Path(), default=None,
              help="Path to .leakhunter.yaml configuration file.")
def scan(
    paths: tuple,
    no_deep: bool,
    extended: bool,
    max_lines: Optional[int],
    severity: Optional[str],
    type_filter: Optional[str],
    output_format: Optional[str],
    output_file: Optional[str],
    exclude: tuple,
    fixes: bool,
    fail_on: Optional[str],
    config_path: Optional[str],
) -> None:
    """Scan directories or individual files for leaked secrets.

    Examples:

        leakhunter scan

        leakhunter scan config/settings.py .env deploy.sh

        leakhunter scan ./src --no-deep --severity critical

        leakhunter scan --format json --output results.json --fail-on high
    """
    targets = [Path(p) for p in paths] or [Path(".")]
    target = targets[0].resolve()

    # ── Load configuration ──
    if config_path:
        cfg_path = Path(config_path)
    else:
        cfg_path = (target if target.is_dir() else target.parent) / CONFIG_FILENAME
    config = LeakHunterConfig.load(cfg_path)

    # CLI flags override config
    fmt = output_format or config.output.format
    out_file = output_file or config.output.file
    exclusions = list(exclude) + config.exclude_paths

    base = ScanOptions.from_config(config)
    options = ScanOptions(
        deep_analysis=base.deep_analysis and not no_deep,
        max_lines=max_lines or base.max_lines,
        extended_patterns=base.extended_patterns or extended,
        severity_filter=severity or base.severity_filter,
        type_filter=type_filter or base.type_filter,
        extra_skip_patterns=base.extra_skip_patterns,
        large_scan_threshold=base.large_scan_threshold,
    )

    records = _collect_records(targets, exclusions)

    # ── Run scan ──
    try:
        if fmt == "console":
            with click.progressbar(
                length=len(records),
                label="  Scanning",
                file=click.get_text_stream("stderr"),
            ) as bar:
                session = run_scan(records, options, progress=lambda done, total: bar.update(1))
        else:
            session = run_scan(records, options)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc

    # ── Report ──
    if out_file and Path(out_file).is_dir():
        out_file = str(Path(out_file) / export_filename())

    if fmt == "json":
        reporter = JSONReporter(remediation=fixes)
        json_str = reporter.report(session, output_file=out_file)
        if not out_file:
            _safe_echo(json_str)
    else:
        ConsoleReporter(target=", ".join(str(t) for t in targets), show_fixes=fixes).report(session)
        if out_file:
            JSONReporter(remediation=fixes).report(session, output_file=out_file)
            _safe_echo(click.style(f"  [+] Report written to {out_file}", fg="green"))

    # ── Exit code ──
    if fail_on:
        threshold = Severity.from_string(fail_on)
        if any(f.severity >= threshold for f in session.filtered()):
            sys.exit(1)


# ═══════════════════════════════════════════════════════
#  leakhunter init
# ═══════════════════════════════════════════════════════
@cli.command()
@click.option("--path", "-p", "target_path", type=click.Path(), default=".",
              help="Directory to create the config file in.")
def init(target_path: str) -> None:
    """Create a default .leakhunter.yaml."""
    target = Path(target_path).resolve()
    target.mkdir(parents=True, exist_ok=True)

    config_file = target / CONFIG_FILENAME

    if config_file.exists():
        _safe_echo(click.style(f"  [!] {config_file} already exists, skipping.", fg="yellow"))
    else:
        config_file.write_text(generate_default_config(), encoding="utf-8")
        _safe_echo(click.style(f"  [+] Created {config_file}", fg="green"))

    _safe_echo("")
    _safe_echo("  Run 'leakhunter scan' to start scanning.")


# ═══════════════════════════════════════════════════════
#  leakhunter explain
# ═══════════════════════════════════════════════════════
@cli.command()
@click.argument("kind", type=click.Choice(TYPE_CHOICES[1:], case_sensitive=False))
@click.option("--file", "file_path", default="src/app.js",
              help="File path the guidance should refer to.")
def explain(kind: str, file_path: str) -> None:
    """Show remediation guidance for a finding type.

    Example:

        leakhunter explain github --file config/settings.py
    """
    secret_kind = SecretKind.from_string(kind)
    finding = Finding(
        kind=secret_kind,
        file_path=file_path,
        severity=default_severity(secret_kind),
    )
    plan = analyze(finding)

    _safe_echo(click.style(f"  {plan.title}", fg="bright_white", bold=True))
    _safe_echo(click.style(f"  Priority: {plan.priority.value}", fg="white"))
    _safe_echo(click.style(f"  Risk score: {risk_score(finding)}/100", fg="white"))
    _safe_echo(click.style(f"  Fix time: {estimate_fix_time(finding)}", fg="white"))
    _safe_echo("")
    for idx, step in enumerate(plan.steps, start=1):
        _safe_echo(f"  {idx}. {step}")
    _safe_echo("")
    _safe_echo(click.style("  Vulnerable:", fg="red"))
    _safe_echo(plan.code_examples.bad)
    _safe_echo(click.style("  Secure:", fg="green"))
    _safe_echo(plan.code_examples.good)

    command = fix_command(finding)
    if command:
        _safe_echo("")
        _safe_echo(click.style("  Automation:", fg="cyan"))
        _safe_echo(command)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
