"""
Pytest Configuration and Fixtures

Shared fixtures for LeakHunter tests.
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from leakhunter.core.finding import FileRecord, Finding, SecretKind, Severity

from samples import DISCORD_TOKEN, GITHUB_TOKEN


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_finding() -> Finding:
    """Create a sample finding for testing."""
    return Finding(
        kind=SecretKind.GITHUB,
        file_path="src/file.js",
        severity=Severity.CRITICAL,
        line_number=10,
        snippet=f"const token = '{GITHUB_TOKEN}'",
    )


@pytest.fixture
def sample_records() -> list[FileRecord]:
    """A small project with one leak of each common shape."""
    return [
        FileRecord.from_text("bot.js", f"const token = '{DISCORD_TOKEN}';\nclient.login(token);\n"),
        FileRecord.from_text("config.env", 'API_KEY="abcdefghijklmnopqrst"\n'),
        FileRecord.from_text("src/admin.js", 'const admin = { password="hunter22" };\n'),
        FileRecord.from_text("src/routes.js", "router.post('/force-reset', resetAdmin);\n"),
        FileRecord.from_text("README.md", f"Example: {GITHUB_TOKEN}\n"),
        FileRecord.from_text("node_modules/lib/index.js", f"const t = '{GITHUB_TOKEN}';\n"),
    ]


@pytest.fixture
def project_dir(temp_dir: Path) -> Path:
    """Create a project tree on disk with a few leaks."""
    (temp_dir / "src").mkdir()
    (temp_dir / "src" / "app.py").write_text(
        f'GITHUB_TOKEN = "{GITHUB_TOKEN}"\nprint("hello")\n', encoding="utf-8"
    )
    (temp_dir / ".env").write_text("DEBUG=true\n", encoding="utf-8")
    (temp_dir / "node_modules" / "pkg").mkdir(parents=True)
    (temp_dir / "node_modules" / "pkg" / "index.js").write_text(
        f"const t = '{GITHUB_TOKEN}';\n", encoding="utf-8"
    )
    (temp_dir / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\xff\x00\xfe")
    return temp_dir
