"""
LeakHunter Finding Model

A Finding represents one detected secret or sensitive file.
A FileRecord is one input unit handed to the scanners.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional, Union

# Maximum snippet length kept on a finding
SNIPPET_LENGTH = 150

# Leading bytes inspected for a NUL when telling binary from text
BINARY_SNIFF_BYTES = 8192


class Severity(Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def from_string(cls, value: str) -> "Severity":
        """Parse a severity from a string (case-insensitive)."""
        return cls[value.upper()]

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER.index(self)

    def __ge__(self, other: "Severity") -> bool:
        return self.rank >= other.rank

    def __gt__(self, other: "Severity") -> bool:
        return self.rank > other.rank

    def __le__(self, other: "Severity") -> bool:
        return not self.__gt__(other)

    def __lt__(self, other: "Severity") -> bool:
        return not self.__ge__(other)


_SEVERITY_ORDER = [Severity.LOW, Severity.MEDIUM, Severity.HIGH, Severity.CRITICAL]


class SecretKind(Enum):
    DISCORD = "Discord Bot Token"
    TELEGRAM = "Telegram Bot Token"
    GITHUB = "GitHub Personal Access Token"
    GENERIC_API = "Generic API Key"
    ENV_VAR = "Environment Configuration"
    PRIVATE_KEY = "Private Key Header"
    SUSPICIOUS_COMMENT = "Suspicious Comment"
    SENSITIVE_FILE = "Sensitive File Detected"
    HARDCODED_CREDENTIALS = "Hardcoded Admin Credentials"
    BACKDOOR_ENDPOINT = "Backdoor API Endpoint"
    JWT_SECRET = "Hardcoded JWT Secret"
    MASS_DELETION = "Mass Data Deletion"

    @classmethod
    def from_string(cls, value: str) -> "SecretKind":
        """Parse a kind from its member name or its display value."""
        for kind in cls:
            if value == kind.value or value.upper() == kind.name:
                return kind
        raise ValueError(f"Unknown secret type: {value!r}")


@dataclass(frozen=True)
class FileRecord:
    """
    One file handed to the engine.

    ``reader`` is called lazily; it may return text or raw bytes.
    Bytes are decoded as UTF-8 with replacement characters. Content with
    a NUL byte near the start is treated as binary and raises
    UnicodeDecodeError, so the content scanner skips it.
    """

    path: str
    reader: Callable[[], Union[str, bytes]] = field(repr=False, compare=False)
    name: str = ""
    size_hint: Optional[int] = None
    content_type: Optional[str] = None

    def __post_init__(self) -> None:
        normalized = self.path.replace("\\", "/")
        object.__setattr__(self, "path", normalized)
        if not self.name:
            object.__setattr__(self, "name", posixpath.basename(normalized).lower())
        else:
            object.__setattr__(self, "name", self.name.lower())

    @property
    def basename(self) -> str:
        """Basename with its original casing."""
        return posixpath.basename(self.path)

    def read_text(self) -> str:
        data = self.reader()
        if isinstance(data, bytes):
            nul = data.find(b"\x00", 0, BINARY_SNIFF_BYTES)
            if nul >= 0:
                raise UnicodeDecodeError("utf-8", data, nul, nul + 1, "binary content")
            return data.decode("utf-8", errors="replace")
        return data

    @classmethod
    def from_text(
        cls, path: str, text: str, content_type: Optional[str] = None
    ) -> "FileRecord":
        return cls(
            path=path,
            reader=lambda: text,
            size_hint=len(text),
            content_type=content_type,
        )

    @classmethod
    def from_path(
        cls,
        file_path: Path,
        root: Optional[Path] = None,
        content_type: Optional[str] = None,
    ) -> "FileRecord":
        """Build a record that reads ``file_path`` from disk on demand."""
        display = file_path.relative_to(root).as_posix() if root else file_path.as_posix()
        try:
            size = file_path.stat().st_size
        except OSError:
            size = None
        return cls(
            path=display,
            reader=file_path.read_bytes,
            size_hint=size,
            content_type=content_type,
        )


def truncate_snippet(line: str, limit: int = SNIPPET_LENGTH) -> str:
    return line[:limit]


@dataclass(frozen=True)
class Finding:
    kind: SecretKind
    file_path: str
    severity: Severity
    line_number: Optional[int] = None
    snippet: Optional[str] = None

    def __post_init__(self) -> None:
        if self.snippet is not None and len(self.snippet) > SNIPPET_LENGTH:
            object.__setattr__(self, "snippet", truncate_snippet(self.snippet))

    @property
    def type_name(self) -> str:
        return self.kind.value

    def to_dict(self) -> dict[str, Any]:
        """Convert finding to a dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "type": self.kind.value,
            "filePath": self.file_path,
            "severity": self.severity.value,
        }
        if self.line_number is not None:
            result["lineNumber"] = self.line_number
        if self.snippet is not None:
            result["snippet"] = self.snippet
        return result
