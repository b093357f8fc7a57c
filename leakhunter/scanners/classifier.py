"""
LeakHunter File Classifier

Decides from a path alone whether a file is skipped, whether its name
is sensitive, and whether its content is worth scanning.
"""

from __future__ import annotations

from typing import Iterable

from leakhunter.core.finding import FileRecord
from leakhunter.scanners.patterns import SENSITIVE_FILES, SENSITIVE_KEYWORDS

# File extensions whose content is scanned
SUPPORTED_EXTENSIONS = {
    ".py", ".js", ".jsx", ".ts", ".tsx", ".java", ".cpp", ".c", ".cs", ".go",
    ".rb", ".php", ".swift", ".kt", ".rs", ".scala", ".pl", ".lua", ".r",
    ".html", ".htm", ".css", ".sass", ".scss", ".less", ".vue", ".svelte",
    ".json", ".yaml", ".yml", ".toml", ".xml", ".csv", ".sql", ".graphql",
    ".sh", ".bash", ".zsh", ".ps1", ".bat", ".cmd",
    ".md", ".markdown", ".rst", ".tex",
    ".env", ".local", ".dev", ".prod",
    ".dockerfile",
    ".txt", ".log", ".conf", ".config", ".ini", ".properties",
    ".dart", ".m", ".mm", ".gd", ".godot",
}

# Files without an extension that are still scanned
FILENAME_MATCHES = {"dockerfile"}

# Directory segments holding third-party code
DEPENDENCY_DIRS = ("node_modules", "bower_components", "vendor", "site-packages")

# Known non-sensitive files; a single "*" acts as a prefix/suffix glob
NON_SENSITIVE_FILES = (
    "tsconfig.json",
    "package.json",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "poetry.lock",
    "readme.md",
    "license",
    "changelog.md",
    "contributing.md",
    ".gitignore",
    ".eslintrc",
    ".prettierrc",
    "*.config.js",
    "*.config.ts",
    "vite.config.ts",
    "webpack.config.js",
    "jest.config.js",
    "*.spec.ts",
    "*.test.js",
    "*.d.ts",
)


def _matches_entry(name: str, entry: str) -> bool:
    if "*" in entry:
        prefix, _, suffix = entry.partition("*")
        return (
            len(name) >= len(prefix) + len(suffix)
            and name.startswith(prefix)
            and name.endswith(suffix)
        )
    return name == entry or name.endswith(entry)


def in_dependency_dir(relative_path: str) -> bool:
    segments = relative_path.replace("\\", "/").lower().split("/")[:-1]
    return any(segment in DEPENDENCY_DIRS for segment in segments)


def should_skip(name: str, relative_path: str, extra_patterns: Iterable[str] = ()) -> bool:
    """Return True if the file is third-party code or known to be harmless."""
    if in_dependency_dir(relative_path):
        return True

    name = name.lower()
    entries = tuple(NON_SENSITIVE_FILES) + tuple(p.lower() for p in extra_patterns)
    return any(_matches_entry(name, entry) for entry in entries)


def is_sensitive_name(name: str) -> bool:
    name = name.lower()
    if any(keyword in name for keyword in SENSITIVE_KEYWORDS):
        return True
    return any(entry in name or name.endswith(entry) for entry in SENSITIVE_FILES)


def extension_of(name: str) -> str:
    idx = name.rfind(".")
    return name[idx:].lower() if idx >= 0 else ""


def is_content_eligible(record: FileRecord) -> bool:
    """Check if a record's content should be scanned."""
    name = record.name
    if extension_of(name) in SUPPORTED_EXTENSIONS:
        return True
    if name in FILENAME_MATCHES:
        return True
    if record.content_type and record.content_type.startswith("text/"):
        return True
    return ".env" in name
