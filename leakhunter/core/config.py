"""
LeakHunter Configuration Management

Loads and manages configuration from .leakhunter.yaml files.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".leakhunter.yaml"

DEFAULT_EXCLUDE_PATHS = [
    ".git",
    "__pycache__",
    "venv",
    ".venv",
    ".tox",
    ".mypy_cache",
    ".pytest_cache",
]

FILTER_ALL = "all"


@dataclass
class ScanConfig:
    deep_analysis: bool = True
    extended_patterns: bool = False
    max_lines: int = 100
    large_scan_threshold: int = 1000
    skip_patterns: list[str] = field(default_factory=list)


@dataclass
class FilterConfig:
    severity: str = FILTER_ALL
    type: str = FILTER_ALL


@dataclass
class OutputConfig:
    format: str = "console"
    file: Optional[str] = None


@dataclass
class LeakHunterConfig:
    """Root configuration object for LeakHunter."""

    scan: ScanConfig = field(default_factory=ScanConfig)
    filters: FilterConfig = field(default_factory=FilterConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    exclude_paths: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATHS))

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "LeakHunterConfig":
        """Load configuration from a YAML file, falling back to defaults."""
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILENAME

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
            return cls()

        if not isinstance(raw, dict):
            logger.warning("Ignoring config %s: top level must be a mapping", config_path)
            return cls()

        return cls._from_dict(raw)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "LeakHunterConfig":
        """Build config from a parsed YAML dictionary."""
        scan_data = data.get("scan") or {}
        scan = ScanConfig(
            deep_analysis=bool(scan_data.get("deep_analysis", True)),
            extended_patterns=bool(scan_data.get("extended_patterns", False)),
            max_lines=int(scan_data.get("max_lines", 100)),
            large_scan_threshold=int(scan_data.get("large_scan_threshold", 1000)),
            skip_patterns=list(scan_data.get("skip_patterns") or []),
        )

        filters_data = data.get("filters") or {}
        filters = FilterConfig(
            severity=str(filters_data.get("severity", FILTER_ALL)),
            type=str(filters_data.get("type", FILTER_ALL)),
        )

        output_data = data.get("output") or {}
        output = OutputConfig(
            format=output_data.get("format", "console"),
            file=output_data.get("file"),
        )

        exclude_paths = data.get("exclude_paths", list(DEFAULT_EXCLUDE_PATHS))

        return cls(
            scan=scan,
            filters=filters,
            output=output,
            exclude_paths=list(exclude_paths or []),
        )


def generate_default_config() -> str:
    """Generate a default .leakhunter.yaml configuration file content."""
    return """\
# LeakHunter Configuration

# Detection settings
scan:
  deep_analysis: true        # JWT secrets, backdoor routes, mass deletion
  extended_patterns: false   # Telegram tokens, env assignments, private keys, comments
  max_lines: 100             # lines sampled per file
  large_scan_threshold: 1000
  skip_patterns:
    - "*.min.js"

# Result filters (all, low, medium, high, critical / all or a finding type)
filters:
  severity: all
  type: all

# Output settings
output:
  format: console  # console, json
  # file: leakhunter-scan.json

# Global exclusions
exclude_paths:
  - .git
  - __pycache__
  - venv
  - .venv
"""
